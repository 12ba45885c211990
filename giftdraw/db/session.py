from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from giftdraw.db.models import Base

SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False)

SessionScope = Callable[[], ContextManager[Session]]


def init_engine(database_url: str, create_schema: bool = False):
    engine = create_engine(database_url, pool_pre_ping=True, future=True)
    SessionLocal.configure(bind=engine)
    if create_schema:
        # alembic owns the schema in deployments; this covers local sqlite files
        Base.metadata.create_all(engine)
    return engine


def _ensure_initialized() -> None:
    if SessionLocal.kw.get("bind") is None:
        raise RuntimeError("Database engine not initialized. Call init_engine() before use.")


def session_scope_for(factory: sessionmaker) -> SessionScope:
    """Build a transactional scope: commit on success, roll back on error."""

    @contextmanager
    def scope():
        session = factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return scope


_default_scope = session_scope_for(SessionLocal)


@contextmanager
def get_session():
    _ensure_initialized()
    with _default_scope() as session:
        yield session
