"""
Domain types for the schema migrations.
"""

from .models import MigrationReport, RecordPlan
from .rules import BackfillRule, Migration, RecodeRule, RenameRule, RuleOutcome

__all__ = [
    "BackfillRule",
    "Migration",
    "MigrationReport",
    "RecodeRule",
    "RecordPlan",
    "RenameRule",
    "RuleOutcome",
]
