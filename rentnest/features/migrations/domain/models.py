"""
Result shapes produced by the schema migrator.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class RecordPlan:
    """Fields to $set on one record, computed before any write."""

    record_id: Any
    fields: dict[str, Any]
    backfill_missed: bool = False

    @property
    def needs_update(self) -> bool:
        return bool(self.fields)


@dataclass(slots=True)
class MigrationReport:
    """Outcome of one migration run over a collection."""

    migration: str
    collection: str
    dry_run: bool = False
    scanned: int = 0
    updated: int = 0  # written (or would be written, in a dry run)
    skipped: int = 0  # nothing to change
    failed: int = 0  # write attempted and failed
    backfill_misses: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.failed == 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "migration": self.migration,
            "collection": self.collection,
            "dry_run": self.dry_run,
            "scanned": self.scanned,
            "updated": self.updated,
            "skipped": self.skipped,
            "failed": self.failed,
            "backfill_misses": self.backfill_misses,
            "failures": [
                {"record_id": record_id, "error": error} for record_id, error in self.failures
            ],
        }
