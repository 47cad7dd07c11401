"""
Schema migrator - brings every document of a collection up to the current shape.

Run flow:
1. Load the target collection and every collection the rules reference.
2. Compute each record's $set map in memory from its loaded state.
3. Issue one field-scoped update per record that needs one.

A load failure aborts the run before any write. A failed write is recorded
in the report and the batch moves on; re-running the whole migration is
the recovery path, which is safe because rules only fill absent fields.
"""

from collections.abc import Iterable, Mapping
from typing import Any

from rentnest.db.document_store import DocumentStore
from rentnest.features.migrations.domain.models import MigrationReport, RecordPlan
from rentnest.features.migrations.domain.rules import Migration, ReferenceIndex
from rentnest.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class MigrationConnectionError(Exception):
    """Raised when the store cannot be reached or loaded. No writes were made."""

    pass


def index_by_id(documents: Iterable[Mapping[str, Any]]) -> dict[str, dict[str, Any]]:
    return {str(doc["_id"]): doc for doc in documents if doc.get("_id") is not None}


def plan_updates(
    migration: Migration, record: Mapping[str, Any], references: ReferenceIndex
) -> RecordPlan:
    """
    Compute the full update for one record.

    Rules see the record as loaded, never each other's output. When two
    rules target the same field the later one wins.
    """
    plan = RecordPlan(record_id=record.get("_id"), fields={})
    for rule in migration.rules:
        outcome = rule.apply(record, references)
        plan.fields.update(outcome.fields)
        plan.backfill_missed = plan.backfill_missed or outcome.backfill_missed
    return plan


class SchemaMigrator:
    """Apply a Migration to every record of its collection, once."""

    def __init__(self, store: DocumentStore, dry_run: bool = False):
        self.store = store
        self.dry_run = dry_run

    async def _load(
        self, migration: Migration
    ) -> tuple[list[dict[str, Any]], dict[str, dict[str, dict[str, Any]]]]:
        try:
            records = await self.store.find_all(migration.collection)
            references = {
                name: index_by_id(await self.store.find_all(name))
                for name in migration.reference_collections
            }
        except Exception as e:
            logger.error(
                "Migration load failed",
                migration=migration.name,
                collection=migration.collection,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise MigrationConnectionError(f"Failed to load {migration.collection}: {e}") from e

        logger.info(
            "Migration data loaded",
            migration=migration.name,
            collection=migration.collection,
            records=len(records),
            references={name: len(docs) for name, docs in references.items()},
        )
        return records, references

    async def run(self, migration: Migration) -> MigrationReport:
        """
        Run a migration to completion.

        Returns:
            MigrationReport with scanned/updated/skipped/failed counts

        Raises:
            MigrationConnectionError: the initial load failed
        """
        records, references = await self._load(migration)
        report = MigrationReport(
            migration=migration.name,
            collection=migration.collection,
            dry_run=self.dry_run,
        )

        for record in records:
            report.scanned += 1
            plan = plan_updates(migration, record, references)

            if plan.backfill_missed:
                report.backfill_misses += 1
                logger.info(
                    "Backfill source not found",
                    migration=migration.name,
                    record_id=str(plan.record_id),
                )

            if not plan.needs_update:
                report.skipped += 1
                continue

            if self.dry_run:
                report.updated += 1
                logger.info(
                    "Dry run - would update record",
                    migration=migration.name,
                    record_id=str(plan.record_id),
                    fields=sorted(plan.fields),
                )
                continue

            await self._apply(migration, plan, report)

        return report

    async def _apply(self, migration: Migration, plan: RecordPlan, report: MigrationReport) -> None:
        record_id = str(plan.record_id)
        try:
            if plan.record_id is None:
                raise ValueError("record has no _id")
            acknowledged = await self.store.update_fields(
                migration.collection, plan.record_id, plan.fields
            )
            if not acknowledged:
                raise RuntimeError("update not acknowledged")
        except Exception as e:
            report.failed += 1
            report.failures.append((record_id, str(e)))
            logger.warning(
                "Record update failed",
                migration=migration.name,
                record_id=record_id,
                error=str(e),
            )
            return

        report.updated += 1
        logger.debug(
            "Record updated",
            migration=migration.name,
            record_id=record_id,
            fields=sorted(plan.fields),
        )
