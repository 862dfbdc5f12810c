# @TASK S2-T2.3 - Collection / item text matchers
# @TASK S2-T2.4 - Tag matcher
# @TEST tests/test_matchers.py

"""Datastore matchers for journal search.

Each matcher issues read-only queries on the session it was built with
and returns raw :class:`SearchResult` candidates. Deduplication across
matchers happens later in :func:`journal.search.merger.merge`.

Substring containment is case-insensitive on both sides
(``ILIKE`` on PostgreSQL, ``lower() LIKE lower()`` on SQLite) and LIKE
wildcards in the query are escaped, so ``%`` and ``_`` match literally.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy import ColumnElement, Table, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from journal.models import Collection, Item, Tag, collection_tags, item_tags
from journal.search.filters import ConstraintSet
from journal.search.results import MatchedField, SearchResult, item_kind

logger = logging.getLogger(__name__)


def select_matched_field(query: str, title: str, description: str | None) -> tuple[MatchedField, str]:
    """Pick which field to report for a text hit.

    Title wins if it contains the query (case-insensitive), otherwise the
    description does. The full field value is returned as the matched text.
    """
    needle = query.lower()
    if needle in title.lower():
        return "title", title
    if description and needle in description.lower():
        return "description", description
    return "title", title


def item_clauses(constraints: ConstraintSet) -> list[ColumnElement[bool]]:
    """Translate the column-level part of *constraints* into WHERE clauses."""
    clauses: list[ColumnElement[bool]] = []
    if constraints.sub_type is not None:
        clauses.append(Item.sub_type == constraints.sub_type.value)
    if constraints.min_importance > 0:
        clauses.append(Item.importance >= constraints.min_importance)
    if constraints.collection_id is not None:
        clauses.append(Item.collection_id == constraints.collection_id)
    if constraints.has_vault is True:
        clauses.append(Item.vault_id.is_not(None))
    elif constraints.has_vault is False:
        clauses.append(Item.vault_id.is_(None))
    if constraints.is_journal_entry is not None:
        clauses.append(Item.is_journal_entry.is_(constraints.is_journal_entry))
    return clauses


async def tagged_ids(session: AsyncSession, relation: Table, tag_ids: Iterable[str]) -> set[str]:
    """Return ids of entities in *relation* that reference ANY of *tag_ids*.

    *relation* is one of the membership tables, ``item_tags`` or
    ``collection_tags``.
    """
    wanted = list(tag_ids)
    if not wanted:
        return set()
    entity_column = relation.c.item_id if relation is item_tags else relation.c.collection_id
    stmt = select(entity_column).where(relation.c.tag_id.in_(wanted)).distinct()
    result = await session.execute(stmt)
    return {row[0] for row in result.fetchall()}


def _item_result(row, matched_field: MatchedField, matched_text: str) -> SearchResult:
    return SearchResult(
        kind=item_kind(row.vault_id),
        id=row.id,
        title=row.title,
        matched_field=matched_field,
        matched_text=matched_text,
        collection_id=row.collection_id,
        collection_title=row.collection_title,
        vault_id=row.vault_id,
        sub_type=row.sub_type,
        importance=row.importance,
        is_journal_entry=bool(row.is_journal_entry),
    )


_ITEM_COLUMNS = (
    Item.id,
    Item.collection_id,
    Item.vault_id,
    Item.is_journal_entry,
    Item.sub_type,
    Item.title,
    Item.description,
    Item.importance,
    Collection.title.label("collection_title"),
)


class CollectionMatcher:
    """Matches collections whose title or description contains the query.

    Args:
        session: An async SQLAlchemy session for database queries.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def match(self, query: str, constraints: ConstraintSet) -> list[SearchResult]:
        if not query or not constraints.include_collections:
            return []

        stmt = (
            select(Collection.id, Collection.title, Collection.description)
            .where(
                or_(
                    Collection.title.icontains(query, autoescape=True),
                    Collection.description.icontains(query, autoescape=True),
                )
            )
            .order_by(Collection.title, Collection.id)
        )
        result = await self._session.execute(stmt)
        rows = result.fetchall()

        if constraints.requires_tags:
            allowed = await tagged_ids(self._session, collection_tags, constraints.tag_ids)
            rows = [row for row in rows if row.id in allowed]

        results = []
        for row in rows:
            matched_field, matched_text = select_matched_field(query, row.title, row.description)
            results.append(
                SearchResult(
                    kind="collection",
                    id=row.id,
                    title=row.title,
                    matched_field=matched_field,
                    matched_text=matched_text,
                )
            )
        logger.debug("Collection matcher: %d hits for %r", len(results), query)
        return results


class ItemMatcher:
    """Matches items whose title or description contains the query.

    Every column constraint of the :class:`ConstraintSet` must hold; tag
    membership is applied afterwards against ``item_tags``.

    Args:
        session: An async SQLAlchemy session for database queries.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def match(self, query: str, constraints: ConstraintSet) -> list[SearchResult]:
        if not query or not constraints.include_items:
            return []

        stmt = (
            select(*_ITEM_COLUMNS)
            .outerjoin(Collection, Item.collection_id == Collection.id)
            .where(
                or_(
                    Item.title.icontains(query, autoescape=True),
                    Item.description.icontains(query, autoescape=True),
                )
            )
            .where(*item_clauses(constraints))
            .order_by(Item.title, Item.id)
        )
        result = await self._session.execute(stmt)
        rows = result.fetchall()

        if constraints.requires_tags:
            allowed = await tagged_ids(self._session, item_tags, constraints.tag_ids)
            rows = [row for row in rows if row.id in allowed]

        results = []
        for row in rows:
            matched_field, matched_text = select_matched_field(query, row.title, row.description)
            results.append(_item_result(row, matched_field, matched_text))
        logger.debug("Item matcher: %d hits for %r", len(results), query)
        return results


class TagMatcher:
    """Discovers items and collections through tags whose name contains the query.

    Emits one candidate per (entity, tag) pair; an entity carrying two
    matching tags yields two candidates, resolved later by the merger.
    Tag hits honour the same constraints as text hits.

    Args:
        session: An async SQLAlchemy session for database queries.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def match_items(self, query: str, constraints: ConstraintSet) -> list[SearchResult]:
        if not query or not constraints.include_items:
            return []

        stmt = (
            select(*_ITEM_COLUMNS, Tag.name.label("tag_name"))
            .select_from(Tag)
            .join(item_tags, item_tags.c.tag_id == Tag.id)
            .join(Item, Item.id == item_tags.c.item_id)
            .outerjoin(Collection, Item.collection_id == Collection.id)
            .where(Tag.name.icontains(query, autoescape=True))
            .where(*item_clauses(constraints))
            .order_by(Tag.name, Item.title, Item.id)
        )
        result = await self._session.execute(stmt)
        rows = result.fetchall()

        if constraints.requires_tags:
            allowed = await tagged_ids(self._session, item_tags, constraints.tag_ids)
            rows = [row for row in rows if row.id in allowed]

        results = [_item_result(row, "tag", row.tag_name) for row in rows]
        logger.debug("Tag matcher (items): %d hits for %r", len(results), query)
        return results

    async def match_collections(self, query: str, constraints: ConstraintSet) -> list[SearchResult]:
        if not query or not constraints.include_collections:
            return []

        stmt = (
            select(Collection.id, Collection.title, Tag.name.label("tag_name"))
            .select_from(Tag)
            .join(collection_tags, collection_tags.c.tag_id == Tag.id)
            .join(Collection, Collection.id == collection_tags.c.collection_id)
            .where(Tag.name.icontains(query, autoescape=True))
            .order_by(Tag.name, Collection.title, Collection.id)
        )
        result = await self._session.execute(stmt)
        rows = result.fetchall()

        if constraints.requires_tags:
            allowed = await tagged_ids(self._session, collection_tags, constraints.tag_ids)
            rows = [row for row in rows if row.id in allowed]

        results = [
            SearchResult(
                kind="collection",
                id=row.id,
                title=row.title,
                matched_field="tag",
                matched_text=row.tag_name,
            )
            for row in rows
        ]
        logger.debug("Tag matcher (collections): %d hits for %r", len(results), query)
        return results
