"""Runtime configuration for Blog Stage.

Every option maps to an environment variable (or a ``.env`` entry) named by
its alias. ``SECRET_KEY`` has no default and must be provided.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings, read once at import time as ``settings``."""

    # Service identity
    app_name: str = Field(default="Blog Stage", alias="APP_NAME")
    app_version: str = Field(default="1.0.0", alias="APP_VERSION")
    app_url: str = Field(default="http://localhost:4000", alias="APP_URL")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Tokens and sign-in policy
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(default=60 * 24 * 7, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    email_verification_expire_minutes: int = Field(
        default=60 * 24, alias="EMAIL_VERIFICATION_EXPIRE_MINUTES"
    )
    require_email_verification: bool = Field(default=True, alias="REQUIRE_EMAIL_VERIFICATION")

    # Storage
    database_url: str = Field(default="sqlite:///./blog.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # Verification mail
    email_enabled: bool = Field(default=False, alias="EMAIL_ENABLED")
    email_smtp_host: str = Field(default="smtp.gmail.com", alias="EMAIL_SMTP_HOST")
    email_smtp_port: int = Field(default=587, alias="EMAIL_SMTP_PORT")
    email_smtp_username: str | None = Field(default=None, alias="EMAIL_SMTP_USERNAME")
    email_smtp_password: str | None = Field(default=None, alias="EMAIL_SMTP_PASSWORD")
    email_smtp_starttls: bool = Field(default=True, alias="EMAIL_SMTP_STARTTLS")
    email_from_addr: str = Field(default="no-reply@blog.local", alias="EMAIL_FROM_ADDR")
    email_from_name: str = Field(default="Blog Stage", alias="EMAIL_FROM_NAME")

    # First administrator, used by scripts/seed_admin.py
    admin_name: str = Field(default="Admin", alias="ADMIN_NAME")
    admin_email: str | None = Field(default=None, alias="ADMIN_EMAIL")
    admin_password: str | None = Field(default=None, alias="ADMIN_PASSWORD")

    # Browser clients
    cors_origins: list[str] = Field(
        default=["http://localhost:4000", "http://localhost:5000"], alias="CORS_ORIGINS"
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PATCH", "DELETE", "OPTIONS"], alias="CORS_ALLOW_METHODS"
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", validate_assignment=True)

    @property
    def effective_database_url(self) -> str:
        """``TEST_DATABASE_URL`` when ``USE_TEST_DATABASE`` is set, else ``DATABASE_URL``."""
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url

    @property
    def database_url_sync(self) -> str:
        """The effective URL with bare ``postgresql://`` pinned to the psycopg 3 driver."""
        url = self.effective_database_url
        if url.startswith("postgresql://"):
            return "postgresql+psycopg://" + url.removeprefix("postgresql://")
        return url


settings = Settings()  # type: ignore[call-arg]
