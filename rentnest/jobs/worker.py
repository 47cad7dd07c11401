"""
Generic job runner.

Reads the desired job name from CLI args or the WORKER_JOB environment
variable, runs it to completion and exits 0 on success, 1 on failure.
"""

import asyncio
import os
import sys
from collections.abc import Awaitable, Callable

from rentnest.config import settings
from rentnest.features.migrations.domain.models import MigrationReport
from rentnest.features.migrations.jobs.migration_jobs import (
    run_accounttype_to_role,
    run_booking_schema_migration,
)
from rentnest.features.migrations.services.migrator import MigrationConnectionError
from rentnest.infrastructure.observability.logging import get_logger, setup_logging

logger = get_logger(__name__)

JobCoroutine = Callable[[], Awaitable[MigrationReport]]

JOB_REGISTRY: dict[str, JobCoroutine] = {
    "accounttype_to_role": run_accounttype_to_role,
    "booking_schema": run_booking_schema_migration,
}


def _resolve_job_name() -> str:
    """Pick the target job from CLI args or WORKER_JOB env variable."""
    if len(sys.argv) > 1:
        return sys.argv[1].strip().lower()
    return os.getenv("WORKER_JOB", "").strip().lower()


async def run_worker(job_name: str | None = None) -> MigrationReport:
    """Run the requested job."""
    name = (job_name or _resolve_job_name()).strip().lower()
    if name not in JOB_REGISTRY:
        raise ValueError(
            f"Unknown worker job '{name}'. "
            f"Available jobs: {', '.join(sorted(JOB_REGISTRY.keys()))}"
        )

    logger.info("Starting job", job=name)
    return await JOB_REGISTRY[name]()


def main(job_name: str | None = None) -> None:
    """CLI entrypoint."""
    setup_logging(settings.LOG_LEVEL)
    name = job_name or _resolve_job_name()

    try:
        report = asyncio.run(run_worker(name))
    except (MigrationConnectionError, ValueError) as e:
        logger.error("Job failed", job=name, error=str(e))
        sys.exit(1)

    sys.exit(0 if report.succeeded else 1)


if __name__ == "__main__":
    main()
