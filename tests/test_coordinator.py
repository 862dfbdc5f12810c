# @TASK S2-T2.7 - Superseding search coordinator tests
# @TEST tests/test_coordinator.py

from __future__ import annotations

import asyncio

import pytest

from journal.search.coordinator import LatestSearch
from journal.search.results import SearchResult


class _GatedEngine:
    """Fake engine whose searches block until released, per query."""

    def __init__(self) -> None:
        self.gates: dict[str, asyncio.Event] = {}
        self.started: list[str] = []

    async def search(self, query, filters=None):
        self.started.append(query)
        gate = self.gates.setdefault(query, asyncio.Event())
        await gate.wait()
        return [SearchResult(kind="item", id=query, title=query, matched_field="title", matched_text=query)]


class TestLatestSearch:
    @pytest.mark.asyncio
    async def test_single_search_returns_results(self):
        engine = _GatedEngine()
        coordinator = LatestSearch(engine)
        engine.gates.setdefault("pa", asyncio.Event()).set()

        results = await coordinator.submit("pa")

        assert [r.id for r in results] == ["pa"]
        assert coordinator.in_flight is False

    @pytest.mark.asyncio
    async def test_newer_search_cancels_older(self):
        engine = _GatedEngine()
        coordinator = LatestSearch(engine)

        first = asyncio.create_task(coordinator.submit("pa"))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        assert coordinator.in_flight is True

        second = asyncio.create_task(coordinator.submit("par"))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        engine.gates.setdefault("pa", asyncio.Event()).set()
        engine.gates.setdefault("par", asyncio.Event()).set()

        with pytest.raises(asyncio.CancelledError):
            await first
        results = await second

        assert [r.id for r in results] == ["par"]
        assert engine.started == ["pa", "par"]

    @pytest.mark.asyncio
    async def test_cancel_drops_in_flight_search(self):
        engine = _GatedEngine()
        coordinator = LatestSearch(engine)

        pending = asyncio.create_task(coordinator.submit("paris"))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        coordinator.cancel()

        with pytest.raises(asyncio.CancelledError):
            await pending
        assert coordinator.in_flight is False

    @pytest.mark.asyncio
    async def test_engine_errors_reach_the_caller(self):
        class _Broken:
            async def search(self, query, filters=None):
                raise RuntimeError("read failed")

        coordinator = LatestSearch(_Broken())

        with pytest.raises(RuntimeError):
            await coordinator.submit("paris")
        assert coordinator.in_flight is False


class TestLatestSearchOverEngine:
    @pytest.mark.asyncio
    async def test_type_ahead_over_real_engine(self, session_factory, paris_data):
        from journal.search import JournalSearchEngine, LatestSearch as PublicLatestSearch

        assert PublicLatestSearch is LatestSearch
        coordinator = PublicLatestSearch(JournalSearchEngine(session_factory))

        stale = asyncio.create_task(coordinator.submit("Pa"))
        await asyncio.sleep(0)
        results = await coordinator.submit("Paris")

        with pytest.raises(asyncio.CancelledError):
            await stale
        assert [r.key for r in results] == ["collection-C1"]
        assert coordinator.in_flight is False
