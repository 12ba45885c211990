from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import delete, select

from giftdraw.db.models import DrawRecord


def get_draw_record(session, key: str) -> Optional[DrawRecord]:
    return session.scalar(select(DrawRecord).where(DrawRecord.key == key))


def create_draw_record(session, key: str, payload: Dict[str, Any]) -> DrawRecord:
    record = DrawRecord(key=key, payload=payload)
    session.add(record)
    session.flush()
    return record


def delete_draw_record(session, key: str) -> bool:
    result = session.execute(delete(DrawRecord).where(DrawRecord.key == key))
    return bool(result.rowcount)
