"""Operational scripts (migrations, admin seeding)."""
