"""Apply Alembic migrations to the configured database.

Usage:
    python -m blog_stage.scripts.migrate            # upgrade to head
    python -m blog_stage.scripts.migrate 5c2a9e1f7d3b
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from blog_stage.core.logging import configure_logging
from blog_stage.core.settings import settings

PROJECT_ROOT = Path(__file__).resolve().parents[3]

logger = logging.getLogger("blog_stage.migrate")


def alembic_config(url: str | None = None) -> Config:
    """Build an Alembic config rooted at the project, targeting ``url``."""
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    cfg.set_main_option("sqlalchemy.url", url or settings.database_url_sync)
    return cfg


def run_upgrade(revision: str = "head", url: str | None = None) -> None:
    logger.info("Upgrading database schema to %s", revision)
    command.upgrade(alembic_config(url), revision)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Apply database migrations")
    parser.add_argument("revision", nargs="?", default="head")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)
    run_upgrade(args.revision)


if __name__ == "__main__":
    main()
