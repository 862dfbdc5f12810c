# @TASK S2-T2.6 - Unified journal search engine
# @TEST tests/test_engine.py
# @TEST tests/test_search_properties.py

"""Unified cross-entity search.

Runs the collection, item and tag matchers for one query, then merges
their candidates in a fixed precedence order:

1. collection title/description matches
2. item title/description matches
3. item tag matches
4. collection tag matches

An entity reached through several paths is reported once, by the first
path in that order. Matcher reads may be fanned out concurrently; the
merge order never depends on which read finishes first.
"""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from journal.search.filters import ConstraintSet, FilterSpec, build_item_constraints, is_active
from journal.search.matchers import CollectionMatcher, ItemMatcher, TagMatcher
from journal.search.merger import merge
from journal.search.results import SearchResult

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Raised when a datastore read fails during a search."""


class JournalSearchEngine:
    """Search collections, items and tags with one query.

    Args:
        session_factory: Factory for async sessions. In concurrent mode
            each matcher gets its own session, since one ``AsyncSession``
            cannot run statements concurrently.
        concurrent: Fan the matcher reads out with ``asyncio.gather``.
        max_query_length: Longer queries are truncated before matching.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        concurrent: bool = True,
        max_query_length: int = 200,
    ) -> None:
        self._session_factory = session_factory
        self._concurrent = concurrent
        self._max_query_length = max_query_length

    async def search(self, query: str, filters: FilterSpec | None = None) -> list[SearchResult]:
        """Return deduplicated results for *query* under *filters*.

        An empty or whitespace-only query returns ``[]`` without touching
        the datastore. Any read failure fails the whole search with
        :class:`SearchError`; partial results are never returned.
        """
        if not query or not query.strip():
            return []

        text = query.strip()[: self._max_query_length]
        constraints = build_item_constraints(filters)

        try:
            if self._concurrent:
                candidate_lists = await self._gather_concurrent(text, constraints)
            else:
                candidate_lists = await self._gather_sequential(text, constraints)
        except SQLAlchemyError as exc:
            logger.exception("Search failed for query: %r", text)
            raise SearchError(f"Search failed for query {text!r}") from exc

        results = merge(candidate_lists)
        logger.info(
            "Search %r (filters_active=%s): %d results from %d candidates",
            text,
            is_active(filters),
            len(results),
            sum(len(candidates) for candidates in candidate_lists),
        )
        return results

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _gather_sequential(self, text: str, constraints: ConstraintSet) -> list[list[SearchResult]]:
        async with self._session_factory() as session:
            tags = TagMatcher(session)
            return [
                await CollectionMatcher(session).match(text, constraints),
                await ItemMatcher(session).match(text, constraints),
                await tags.match_items(text, constraints),
                await tags.match_collections(text, constraints),
            ]

    async def _gather_concurrent(self, text: str, constraints: ConstraintSet) -> list[list[SearchResult]]:
        tasks = [
            asyncio.create_task(self._run(lambda s: CollectionMatcher(s).match(text, constraints))),
            asyncio.create_task(self._run(lambda s: ItemMatcher(s).match(text, constraints))),
            asyncio.create_task(self._run(lambda s: TagMatcher(s).match_items(text, constraints))),
            asyncio.create_task(self._run(lambda s: TagMatcher(s).match_collections(text, constraints))),
        ]
        try:
            # gather() returns results in argument order, which is the precedence order.
            results = await asyncio.gather(*tasks)
        except BaseException:
            # One failed read fails the search; release the sessions of the others now.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return list(results)

    async def _run(self, call) -> list[SearchResult]:
        async with self._session_factory() as session:
            return await call(session)
