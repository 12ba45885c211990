from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class DrawRecord(Base):
    """The single persisted Draw Result, keyed by the session identifier.

    Written once right after a successful draw and deleted in full on reset;
    there is no update path.
    """

    __tablename__ = "draw_sessions"

    key = Column(String(64), primary_key=True)
    payload = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self) -> str:
        return f"<DrawRecord(key={self.key}, created_at={self.created_at})>"
