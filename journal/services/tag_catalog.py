# @TASK S3-T3.1 - Tag catalog used by the search filter UI
# @TEST tests/test_tag_catalog.py

"""Read and get-or-create access to the shared tag catalog."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from journal.models import Tag

logger = logging.getLogger(__name__)


class TagCatalog:
    """Tag lookups for building search filters.

    Args:
        session: An async SQLAlchemy session for database queries.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_all(self) -> list[Tag]:
        """Return every tag ordered by name."""
        result = await self._session.execute(select(Tag).order_by(Tag.name))
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> Tag | None:
        """Case-insensitive lookup by exact name."""
        stmt = select(Tag).where(func.lower(Tag.name) == name.strip().lower()).order_by(Tag.name).limit(1)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(self, name: str) -> Tag:
        """Return the tag called *name*, creating it if necessary.

        Raises:
            ValueError: If *name* is empty after stripping.
        """
        cleaned = name.strip()
        if not cleaned:
            raise ValueError("Tag name must not be empty")

        existing = await self.get_by_name(cleaned)
        if existing is not None:
            return existing

        tag = Tag(name=cleaned)
        self._session.add(tag)
        await self._session.flush()
        logger.info("Created tag %r (%s)", tag.name, tag.id)
        return tag
