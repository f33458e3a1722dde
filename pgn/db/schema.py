"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    tags: Mapped[dict[str, str]] = mapped_column(JSON, default=dict)
    moves_san: Mapped[list[str]] = mapped_column(JSON, default=list)
    history_fen: Mapped[list[str]] = mapped_column(JSON, default=list)
    result: Mapped[str]
    pgn: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
