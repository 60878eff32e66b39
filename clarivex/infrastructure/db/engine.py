from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    pass


@lru_cache(maxsize=4)
def get_engine(dsn: str):
    connect_args = {}
    if dsn.startswith("sqlite"):
        # Repository calls run in worker threads.
        connect_args["check_same_thread"] = False
    return create_engine(dsn, future=True, pool_pre_ping=True, connect_args=connect_args)


@lru_cache(maxsize=4)
def get_session_factory(dsn: str):
    engine = get_engine(dsn)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_db(engine) -> None:
    from clarivex.infrastructure.db.models import entitlements  # noqa: F401

    Base.metadata.create_all(engine)
