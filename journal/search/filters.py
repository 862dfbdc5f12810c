# @TASK S2-T2.1 - Search filter specification and constraint builder
# @TEST tests/test_filters.py

"""Filter specification for journal search.

A :class:`FilterSpec` is the caller-facing description of what to keep.
:func:`build_item_constraints` turns it into a :class:`ConstraintSet`, a
flat conjunctive description of the per-field predicates the matchers
must enforce. Translating a ``ConstraintSet`` into SQL is the matchers'
job, so everything in this module can be tested without a database.

Tag membership is carried through as ``tag_ids`` but never becomes a
column predicate: it depends on the tag relations and is applied as a
post-filter by the matchers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ResultKind(str, Enum):
    """Which entity kinds a search may return."""

    all = "all"
    collection = "collection"
    item = "item"
    vault = "vault"
    journal = "journal"


class ItemSubType(str, Enum):
    """Closed set of item sub-types."""

    milestone = "milestone"
    note = "note"
    letter = "letter"


class FilterSpec(BaseModel):
    """User-selected search filters.

    Attributes:
        kind: Restrict results to one entity kind.
        sub_type: Only items of this sub-type.
        min_importance: Only items with importance >= this value (0 = off).
        tag_ids: Results must reference at least one of these tags.
        collection_id: Only items inside this collection.
    """

    model_config = ConfigDict(frozen=True)

    kind: ResultKind = ResultKind.all
    sub_type: ItemSubType | None = None
    min_importance: int = Field(default=0, ge=0, le=5)
    tag_ids: frozenset[str] = frozenset()
    collection_id: str | None = None


def is_active(spec: FilterSpec | None) -> bool:
    """Return True if any field of *spec* differs from its default."""
    if spec is None:
        return False
    return (
        spec.kind != ResultKind.all
        or spec.sub_type is not None
        or spec.min_importance > 0
        or bool(spec.tag_ids)
        or spec.collection_id is not None
    )


@dataclass(frozen=True)
class ConstraintSet:
    """Conjunctive constraints derived from a FilterSpec.

    ``has_vault`` and ``is_journal_entry`` are tri-state: ``None`` means
    the field is unconstrained.
    """

    include_collections: bool = True
    include_items: bool = True
    sub_type: ItemSubType | None = None
    min_importance: int = 0
    collection_id: str | None = None
    has_vault: bool | None = None
    is_journal_entry: bool | None = None
    tag_ids: frozenset[str] = frozenset()

    @property
    def requires_tags(self) -> bool:
        return bool(self.tag_ids)


# kind -> (include_collections, include_items, has_vault, is_journal_entry)
_KIND_RULES: dict[ResultKind, tuple[bool, bool, bool | None, bool | None]] = {
    ResultKind.all: (True, True, None, None),
    ResultKind.collection: (True, False, None, None),
    ResultKind.item: (False, True, False, False),
    ResultKind.vault: (False, True, True, None),
    ResultKind.journal: (False, True, None, True),
}

PERMISSIVE = ConstraintSet()


def build_item_constraints(spec: FilterSpec | None) -> ConstraintSet:
    """Translate *spec* into a :class:`ConstraintSet`.

    A missing or inactive spec yields the maximally permissive set.
    """
    if not is_active(spec):
        return PERMISSIVE

    include_collections, include_items, has_vault, is_journal_entry = _KIND_RULES[spec.kind]
    return ConstraintSet(
        include_collections=include_collections,
        include_items=include_items,
        sub_type=spec.sub_type,
        min_importance=spec.min_importance,
        collection_id=spec.collection_id,
        has_vault=has_vault,
        is_journal_entry=is_journal_entry,
        tag_ids=spec.tag_ids,
    )
