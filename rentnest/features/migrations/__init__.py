"""
Schema migrations feature package.

Declarative rulesets, the generic migrator that applies them, and the
one-shot jobs operators run after deploying a schema change.
"""

# Re-export the primary building blocks for easy access.
from .domain.models import MigrationReport  # noqa: F401
from .domain.rules import BackfillRule, Migration, RecodeRule, RenameRule  # noqa: F401
from .jobs.migration_jobs import run_accounttype_to_role, run_booking_schema_migration  # noqa: F401
from .rulesets import ACCOUNTTYPE_TO_ROLE, BOOKING_SCHEMA, MIGRATIONS  # noqa: F401
from .services.migrator import MigrationConnectionError, SchemaMigrator  # noqa: F401
