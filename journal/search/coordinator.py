# @TASK S2-T2.7 - Superseding search coordinator
# @TEST tests/test_coordinator.py

"""Keeps only the newest search alive.

Type-ahead search fires a new query on every keystroke. A newer query
supersedes the older one: the older task is cancelled and its caller
gets ``asyncio.CancelledError`` rather than stale results.
"""

from __future__ import annotations

import asyncio
import logging

from journal.search.engine import JournalSearchEngine
from journal.search.filters import FilterSpec
from journal.search.results import SearchResult

logger = logging.getLogger(__name__)


class LatestSearch:
    """Runs searches on *engine*, cancelling whichever one is still in flight."""

    def __init__(self, engine: JournalSearchEngine) -> None:
        self._engine = engine
        self._task: asyncio.Task[list[SearchResult]] | None = None

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    async def submit(self, query: str, filters: FilterSpec | None = None) -> list[SearchResult]:
        """Start a search for *query*, superseding any previous one.

        Raises:
            asyncio.CancelledError: If a newer ``submit`` or ``cancel``
                supersedes this search before it finishes.
        """
        self.cancel()
        task = asyncio.create_task(self._engine.search(query, filters))
        self._task = task
        try:
            return await task
        finally:
            if self._task is task:
                self._task = None

    def cancel(self) -> None:
        if self.in_flight:
            logger.debug("Cancelling superseded search")
            self._task.cancel()
        self._task = None
