"""
Service layer for the schema migrations.
"""

from .migrator import MigrationConnectionError, SchemaMigrator, plan_updates

__all__ = ["MigrationConnectionError", "SchemaMigrator", "plan_updates"]
