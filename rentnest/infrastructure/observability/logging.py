"""
Structured logging setup for the RentNest backend jobs.
Provides JSON-formatted logs with consistent fields for operators running migrations.
"""

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from structlog.stdlib import LoggerFactory

if TYPE_CHECKING:
    from rentnest.features.migrations.domain.models import MigrationReport


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging with JSON output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            _add_job_context,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    # Suppress noisy driver loggers
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def _add_job_context(logger, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Merge job context bound via structlog.contextvars, if any."""
    return structlog.contextvars.merge_contextvars(logger, method_name, event_dict)


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def log_migration_report(report: "MigrationReport") -> None:
    """Log a finished migration run with consistent fields."""
    logger = get_logger("migrations")

    log_data = {
        "migration": report.migration,
        "collection": report.collection,
        "scanned": report.scanned,
        "updated": report.updated,
        "skipped": report.skipped,
        "failed": report.failed,
        "backfill_misses": report.backfill_misses,
        "dry_run": report.dry_run,
    }

    if report.failures:
        log_data["failures"] = [
            {"record_id": record_id, "error": error} for record_id, error in report.failures
        ]

    if report.succeeded:
        logger.info("Migration completed", **log_data)
    else:
        logger.error("Migration completed with failures", **log_data)
