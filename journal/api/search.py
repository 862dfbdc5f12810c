# @TASK S4-T4.2 - Search API endpoint
# @TEST tests/test_api_search.py

"""Search API endpoint.

Provides:
- ``GET /search`` -- Search collections, items and tags with optional filters.

A blank query is not an error: it returns an empty result list.
Datastore failures surface as 503 so the client can retry on the next
keystroke.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from journal.config import Settings, get_settings
from journal.database import async_session_factory
from journal.search.engine import JournalSearchEngine, SearchError
from journal.search.filters import FilterSpec, ItemSubType, ResultKind, is_active
from journal.search.results import MatchedField, ResultType
from journal.utils.i18n import get_language
from journal.utils.messages import msg

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class SearchResultResponse(BaseModel):
    """A single search result in the API response."""

    key: str
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


class SearchResponse(BaseModel):
    """Search API response containing results and metadata."""

    query: str
    results: list[SearchResultResponse]
    total: int
    filters_active: bool


# ---------------------------------------------------------------------------
# Engine factory (extracted for easy mocking in tests)
# ---------------------------------------------------------------------------


def _build_engine(settings: Settings | None = None) -> JournalSearchEngine:
    if settings is None:
        settings = get_settings()
    return JournalSearchEngine(
        async_session_factory,
        concurrent=settings.SEARCH_CONCURRENT_QUERIES,
        max_query_length=settings.SEARCH_MAX_QUERY_LENGTH,
    )


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------


@router.get("", response_model=SearchResponse)
async def search(
    request: Request,
    q: str = Query("", description="Search query"),  # noqa: B008
    kind: ResultKind = Query(ResultKind.all, description="Restrict result kind"),  # noqa: B008
    sub_type: ItemSubType | None = Query(None, description="Only items of this sub-type"),  # noqa: B008
    min_importance: int = Query(0, ge=0, le=5, description="Minimum item importance (0 = any)"),  # noqa: B008
    tag_ids: list[str] = Query([], description="Results must carry one of these tags"),  # noqa: B008
    collection_id: str | None = Query(None, description="Only items in this collection"),  # noqa: B008
) -> SearchResponse:
    """Search collections, items and tags.

    Args:
        q: The search query string. Blank returns no results.
        kind: all, collection, item, vault or journal.
        sub_type: Optional item sub-type filter.
        min_importance: Minimum importance for items (0-5).
        tag_ids: Tag ids; results must reference at least one.
        collection_id: Optional parent collection scope for items.

    Returns:
        SearchResponse with deduplicated results and the query echo.
    """
    filters = FilterSpec(
        kind=kind,
        sub_type=sub_type,
        min_importance=min_importance,
        tag_ids=frozenset(tag_ids),
        collection_id=collection_id,
    )
    active = is_active(filters)
    logger.info("Search request: query=%r, filters_active=%s", q, active)

    engine = _build_engine()
    try:
        results = await engine.search(q, filters if active else None)
    except SearchError as exc:
        raise HTTPException(status_code=503, detail=msg("search.failed", get_language(request))) from exc

    return SearchResponse(
        query=q,
        results=[SearchResultResponse(key=r.key, **r.model_dump()) for r in results],
        total=len(results),
        filters_active=active,
    )
