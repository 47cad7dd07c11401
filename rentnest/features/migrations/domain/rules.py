"""
Declarative field rules for document migrations.

Each rule looks at the record as it was loaded and proposes field values
to $set. Rules never remove fields and only ever fill a field that is
absent (or recode a value that is known to be legacy), which is what
makes a migration safe to run again.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

# collection name -> str(_id) -> document
ReferenceIndex = Mapping[str, Mapping[str, dict[str, Any]]]


def _identity(value: Any) -> Any:
    return value


def is_absent(record: Mapping[str, Any], name: str) -> bool:
    """Missing key or explicit null."""
    return record.get(name) is None


@dataclass(slots=True)
class RuleOutcome:
    fields: dict[str, Any] = field(default_factory=dict)
    backfill_missed: bool = False


@dataclass(frozen=True, slots=True)
class RenameRule:
    """Copy `source` into `target` when `target` is absent. `source` is kept."""

    target: str
    source: str
    transform: Callable[[Any], Any] = _identity

    def apply(self, record: Mapping[str, Any], references: ReferenceIndex) -> RuleOutcome:
        if not is_absent(record, self.target) or is_absent(record, self.source):
            return RuleOutcome()
        return RuleOutcome(fields={self.target: self.transform(record[self.source])})


@dataclass(frozen=True, slots=True)
class RecodeRule:
    """Replace legacy values of `field_name` according to `mapping`."""

    field_name: str
    mapping: Mapping[Any, Any]

    def apply(self, record: Mapping[str, Any], references: ReferenceIndex) -> RuleOutcome:
        value = record.get(self.field_name)
        if value is None:
            return RuleOutcome()
        try:
            recoded = self.mapping[value]
        except (KeyError, TypeError):
            return RuleOutcome()
        if recoded == value:
            return RuleOutcome()
        return RuleOutcome(fields={self.field_name: recoded})


@dataclass(frozen=True, slots=True)
class BackfillRule:
    """
    Fill `target` from a referenced document.

    The record's `reference_field` holds the id of a document in
    `reference_collection`; that document's `source_field` is copied over.
    A dangling reference or a referenced document without the field is a
    miss, not an error.
    """

    target: str
    reference_field: str
    reference_collection: str
    source_field: str

    def apply(self, record: Mapping[str, Any], references: ReferenceIndex) -> RuleOutcome:
        if not is_absent(record, self.target) or is_absent(record, self.reference_field):
            return RuleOutcome()

        index = references.get(self.reference_collection, {})
        referenced = index.get(str(record[self.reference_field]))
        value = referenced.get(self.source_field) if referenced else None
        if value is None:
            return RuleOutcome(backfill_missed=True)
        return RuleOutcome(fields={self.target: value})


Rule = RenameRule | RecodeRule | BackfillRule


@dataclass(frozen=True, slots=True)
class Migration:
    """Named, ordered ruleset for one collection."""

    name: str
    collection: str
    rules: tuple[Rule, ...]

    @property
    def reference_collections(self) -> tuple[str, ...]:
        names = {rule.reference_collection for rule in self.rules if isinstance(rule, BackfillRule)}
        return tuple(sorted(names))
