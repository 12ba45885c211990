import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from giftdraw.db import Base, session_scope_for
from giftdraw.services.store import DrawStore


def create_session_scope():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return session_scope_for(sessionmaker(bind=engine, expire_on_commit=False))


@pytest.fixture
def session_scope():
    return create_session_scope()


@pytest.fixture
def store(session_scope):
    return DrawStore("test-session", session_scope=session_scope)
