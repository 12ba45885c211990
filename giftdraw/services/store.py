from __future__ import annotations

from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError

from giftdraw.db import SessionScope, get_session, repo
from giftdraw.services.draw import DrawResult


class DrawStoreError(RuntimeError):
    pass


class DrawStore:
    """Durable home of the session's Draw Result: written once, read at startup, deleted on reset."""

    def __init__(self, key: str, session_scope: SessionScope = get_session) -> None:
        self.key = key
        self._session_scope = session_scope

    def load(self) -> Optional[DrawResult]:
        with self._session_scope() as session:
            record = repo.get_draw_record(session, self.key)
            payload = record.payload if record else None
        if payload is None:
            return None
        try:
            return DrawResult.from_payload(payload)
        except ValueError as exc:
            raise DrawStoreError(f"Stored draw {self.key!r} is unreadable: {exc}") from exc

    def save(self, result: DrawResult) -> None:
        try:
            with self._session_scope() as session:
                if repo.get_draw_record(session, self.key) is not None:
                    raise DrawStoreError("A draw is already stored for this session. Reset it first.")
                repo.create_draw_record(session, self.key, result.to_payload())
        except IntegrityError as exc:
            raise DrawStoreError("A draw is already stored for this session. Reset it first.") from exc
        logger.bind(key=self.key, assignments=len(result)).info("Draw saved")

    def clear(self) -> bool:
        with self._session_scope() as session:
            deleted = repo.delete_draw_record(session, self.key)
        logger.bind(key=self.key, deleted=deleted).info("Draw cleared")
        return deleted
