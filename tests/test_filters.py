# @TASK S2-T2.1 - Filter specification tests
# @TEST tests/test_filters.py

"""Tests for FilterSpec, is_active and build_item_constraints.

Pure functions only -- no database required.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from journal.search.filters import (
    PERMISSIVE,
    ConstraintSet,
    FilterSpec,
    ItemSubType,
    ResultKind,
    build_item_constraints,
    is_active,
)
from journal.search.matchers import item_clauses


class TestIsActive:
    def test_none_is_inactive(self):
        assert is_active(None) is False

    def test_defaults_are_inactive(self):
        assert is_active(FilterSpec()) is False

    @pytest.mark.parametrize(
        "spec",
        [
            FilterSpec(kind=ResultKind.collection),
            FilterSpec(sub_type=ItemSubType.milestone),
            FilterSpec(min_importance=1),
            FilterSpec(tag_ids=frozenset({"T1"})),
            FilterSpec(collection_id="C1"),
        ],
    )
    def test_any_changed_field_is_active(self, spec):
        assert is_active(spec) is True


class TestFilterSpecModel:
    def test_spec_is_immutable(self):
        spec = FilterSpec()
        with pytest.raises(ValidationError):
            spec.min_importance = 3

    def test_min_importance_bounds(self):
        with pytest.raises(ValidationError):
            FilterSpec(min_importance=6)
        with pytest.raises(ValidationError):
            FilterSpec(min_importance=-1)

    def test_tag_ids_accepts_list(self):
        spec = FilterSpec(tag_ids=["T1", "T2", "T1"])
        assert spec.tag_ids == frozenset({"T1", "T2"})

    def test_unknown_sub_type_rejected(self):
        with pytest.raises(ValidationError):
            FilterSpec(sub_type="photo")


class TestBuildItemConstraints:
    def test_absent_spec_is_permissive(self):
        assert build_item_constraints(None) == PERMISSIVE
        assert PERMISSIVE.include_collections is True
        assert PERMISSIVE.include_items is True

    def test_inactive_spec_equals_absent(self):
        assert build_item_constraints(FilterSpec()) == build_item_constraints(None)

    def test_collection_kind_excludes_items(self):
        constraints = build_item_constraints(FilterSpec(kind=ResultKind.collection))
        assert constraints.include_collections is True
        assert constraints.include_items is False

    def test_item_kind_excludes_vault_and_journal(self):
        constraints = build_item_constraints(FilterSpec(kind=ResultKind.item))
        assert constraints.include_collections is False
        assert constraints.has_vault is False
        assert constraints.is_journal_entry is False

    def test_vault_kind_requires_vault(self):
        constraints = build_item_constraints(FilterSpec(kind=ResultKind.vault))
        assert constraints.include_collections is False
        assert constraints.has_vault is True
        assert constraints.is_journal_entry is None

    def test_journal_kind_requires_flag(self):
        constraints = build_item_constraints(FilterSpec(kind=ResultKind.journal))
        assert constraints.has_vault is None
        assert constraints.is_journal_entry is True

    def test_field_constraints_carried_over(self):
        spec = FilterSpec(
            sub_type=ItemSubType.milestone,
            min_importance=4,
            tag_ids=frozenset({"T1"}),
            collection_id="C1",
        )
        constraints = build_item_constraints(spec)
        assert constraints.sub_type == ItemSubType.milestone
        assert constraints.min_importance == 4
        assert constraints.collection_id == "C1"
        assert constraints.tag_ids == frozenset({"T1"})
        assert constraints.requires_tags is True
        # kind=all keeps collections in play
        assert constraints.include_collections is True


class TestItemClauses:
    """ConstraintSet -> SQL clause translation."""

    def test_permissive_has_no_clauses(self):
        assert item_clauses(ConstraintSet()) == []

    def test_one_clause_per_constraint(self):
        constraints = ConstraintSet(
            sub_type=ItemSubType.note,
            min_importance=2,
            collection_id="C1",
            has_vault=False,
            is_journal_entry=False,
        )
        assert len(item_clauses(constraints)) == 5

    def test_tag_ids_are_not_column_clauses(self):
        assert item_clauses(ConstraintSet(tag_ids=frozenset({"T1"}))) == []

    def test_vault_presence_renders_null_checks(self):
        with_vault = str(item_clauses(ConstraintSet(has_vault=True))[0])
        without_vault = str(item_clauses(ConstraintSet(has_vault=False))[0])
        assert "IS NOT NULL" in with_vault
        assert "IS NULL" in without_vault and "NOT" not in without_vault
