# @TASK S4-T4.3 - Tag catalog API
# @TEST tests/test_api_tags.py

"""Tag endpoints backing the search filter chips.

Provides:
- ``GET /tags`` -- All tags, ordered by name.
- ``POST /tags`` -- Get or create a tag by name.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from journal.database import get_db
from journal.services.tag_catalog import TagCatalog
from journal.utils.i18n import get_language
from journal.utils.messages import msg

router = APIRouter(prefix="/tags", tags=["tags"])


class TagResponse(BaseModel):
    id: str
    name: str


class TagCreateRequest(BaseModel):
    name: str


@router.get("", response_model=list[TagResponse])
async def list_tags(db: AsyncSession = Depends(get_db)) -> list[TagResponse]:  # noqa: B008
    tags = await TagCatalog(db).get_all()
    return [TagResponse(id=tag.id, name=tag.name) for tag in tags]


@router.post("", response_model=TagResponse)
async def get_or_create_tag(
    body: TagCreateRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),  # noqa: B008
) -> TagResponse:
    """Return the tag called ``name``, creating it on first use."""
    try:
        tag = await TagCatalog(db).get_or_create(body.name)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=msg("tags.name_required", get_language(request))) from exc
    return TagResponse(id=tag.id, name=tag.name)
