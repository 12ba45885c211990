from giftdraw.db.models import Base, DrawRecord
from giftdraw.db.session import SessionLocal, SessionScope, get_session, init_engine, session_scope_for

__all__ = [
    "Base",
    "DrawRecord",
    "SessionLocal",
    "SessionScope",
    "get_session",
    "init_engine",
    "session_scope_for",
]
