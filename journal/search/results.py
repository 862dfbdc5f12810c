# @TASK S2-T2.2 - Search result schema

"""The search result shape returned to the presentation layer."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

ResultType = Literal["collection", "item", "vault-item"]
MatchedField = Literal["title", "description", "tag"]


def item_kind(vault_id: str | None) -> ResultType:
    """Derived display kind of an item row."""
    return "vault-item" if vault_id else "item"


class SearchResult(BaseModel):
    """A single search hit.

    Attributes:
        kind: Entity kind of the hit.
        id: Identifier of the entity.
        title: The entity's own title.
        matched_field: Which attribute matched the query.
        matched_text: Full value of the matched field (tag name for tag hits).
        collection_id: Parent collection of an item, if any.
        collection_title: Title of that parent collection.
        vault_id: Vault of a vault item.
        sub_type: Item sub-type.
        importance: Item importance (0-5).
        is_journal_entry: Whether the item belongs to the journal stream.
    """

    kind: ResultType
    id: str
    title: str
    matched_field: MatchedField
    matched_text: str
    collection_id: str | None = None
    collection_title: str | None = None
    vault_id: str | None = None
    sub_type: str | None = None
    importance: int | None = None
    is_journal_entry: bool | None = None

    @property
    def key(self) -> str:
        """Stable list key, unique per result: ``"{kind}-{id}"``."""
        return f"{self.kind}-{self.id}"
