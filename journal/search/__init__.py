# @TASK S2-T2.1 - Search engine package

"""Cross-entity journal search.

:class:`JournalSearchEngine` answers one query at a time. Type-ahead
callers go through :class:`LatestSearch`, which wraps an engine and
cancels the previous search whenever a newer query is submitted.
"""

from journal.search.coordinator import LatestSearch
from journal.search.engine import JournalSearchEngine, SearchError
from journal.search.filters import FilterSpec, ItemSubType, ResultKind, build_item_constraints, is_active
from journal.search.results import SearchResult

__all__ = [
    "FilterSpec",
    "ItemSubType",
    "JournalSearchEngine",
    "LatestSearch",
    "ResultKind",
    "SearchError",
    "SearchResult",
    "build_item_constraints",
    "is_active",
]
