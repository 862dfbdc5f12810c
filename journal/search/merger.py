# @TASK S2-T2.5 - Result merger (first-seen dedup)
# @TEST tests/test_merger.py

from __future__ import annotations

from collections.abc import Iterable, Sequence

from journal.search.results import SearchResult


def merge(lists: Iterable[Sequence[SearchResult]]) -> list[SearchResult]:
    """Concatenate candidate lists and drop duplicates by ``(kind, id)``.

    Lists are consumed in the order given, so the caller's precedence
    order decides which candidate survives: the first occurrence wins.
    Encounter order is preserved; nothing is re-ranked.
    """
    seen: set[tuple[str, str]] = set()
    merged: list[SearchResult] = []
    for results in lists:
        for result in results:
            identity = (result.kind, result.id)
            if identity in seen:
                continue
            seen.add(identity)
            merged.append(result)
    return merged
