"""
Job runners for the schema migrations.
"""

from .migration_jobs import run_accounttype_to_role, run_booking_schema_migration, run_migration_job

__all__ = ["run_accounttype_to_role", "run_booking_schema_migration", "run_migration_job"]
