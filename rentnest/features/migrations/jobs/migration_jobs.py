"""
One-shot migration jobs.

Each job connects to MongoDB, runs one migration to completion, logs the
report and closes the client. Safe to run again at any time.

Usage:
    python -m rentnest.jobs.worker booking_schema
"""

from rentnest.config import settings
from rentnest.db.document_store import MongoDocumentStore
from rentnest.db.mongo import MongoClientManager, MongoConnectionError
from rentnest.features.migrations.domain.models import MigrationReport
from rentnest.features.migrations.domain.rules import Migration
from rentnest.features.migrations.rulesets import ACCOUNTTYPE_TO_ROLE, BOOKING_SCHEMA
from rentnest.features.migrations.services.migrator import (
    MigrationConnectionError,
    SchemaMigrator,
)
from rentnest.infrastructure.observability.logging import get_logger, log_migration_report

logger = get_logger(__name__)


async def run_migration_job(migration: Migration) -> MigrationReport:
    """
    Connect, migrate, report, disconnect.

    Raises:
        MigrationConnectionError: MongoDB unreachable or the initial load failed
    """
    manager = MongoClientManager()
    logger.info(
        "Starting migration",
        migration=migration.name,
        collection=migration.collection,
        dry_run=settings.MIGRATION_DRY_RUN,
    )

    try:
        try:
            await manager.initialize()
        except MongoConnectionError as e:
            logger.error("Migration aborted - database unavailable", migration=migration.name, error=str(e))
            raise MigrationConnectionError(str(e)) from e

        migrator = SchemaMigrator(
            MongoDocumentStore(manager.database()),
            dry_run=settings.MIGRATION_DRY_RUN,
        )
        report = await migrator.run(migration)
    finally:
        await manager.close()

    log_migration_report(report)
    return report


async def run_accounttype_to_role() -> MigrationReport:
    """Fill users.role from the legacy accountType field."""
    return await run_migration_job(ACCOUNTTYPE_TO_ROLE)


async def run_booking_schema_migration() -> MigrationReport:
    """Bring legacy bookings up to the renter/owner/checkIn/checkOut schema."""
    return await run_migration_job(BOOKING_SCHEMA)
