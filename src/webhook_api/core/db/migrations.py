"""Migration runner for deployments and local setup."""

from alembic.config import Config

from alembic import command


def run_migrations_sync(revision: str = "head") -> None:
    """Upgrade the database to ``revision`` using alembic.ini in the working directory."""
    alembic_cfg = Config("alembic.ini")
    command.upgrade(alembic_cfg, revision)


def main() -> None:
    run_migrations_sync()
