# @TASK S0-T0.5 - Journal schema: collections, items, vaults, tags

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from journal.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


item_tags = Table(
    "item_tags",
    Base.metadata,
    Column("item_id", String(36), ForeignKey("items.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_item_tags_tag_id", "tag_id"),
)

collection_tags = Table(
    "collection_tags",
    Base.metadata,
    Column("collection_id", String(36), ForeignKey("collections.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Index("idx_collection_tags_tag_id", "tag_id"),
)


class Collection(Base):
    """A titled grouping of items (a chapter of the journal)."""

    __tablename__ = "collections"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (CheckConstraint("length(title) > 0", name="ck_collections_title_not_empty"),)


class Vault(Base):
    """Sealed container for items meant to be opened at a later age."""

    __tablename__ = "vaults"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    target_age_years: Mapped[int] = mapped_column(Integer, default=18)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class Item(Base):
    """A journal entry.

    Lives under at most one collection, may instead belong to a vault,
    or be part of the special journal sub-stream (``is_journal_entry``).
    """

    __tablename__ = "items"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    collection_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("collections.id", ondelete="SET NULL"), nullable=True
    )
    vault_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("vaults.id", ondelete="SET NULL"), nullable=True
    )
    is_journal_entry: Mapped[bool] = mapped_column(Boolean, default=False)
    sub_type: Mapped[str] = mapped_column(String(20), default="note")
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    importance: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 0-5, 0 = unset
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        CheckConstraint("sub_type IN ('milestone', 'note', 'letter')", name="ck_items_sub_type"),
        CheckConstraint("importance IS NULL OR importance BETWEEN 0 AND 5", name="ck_items_importance"),
        Index("idx_items_collection_id", "collection_id"),
        Index("idx_items_vault_id", "vault_id"),
    )


class Tag(Base):
    """Named label shared by collections and items."""

    __tablename__ = "tags"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
