"""
core/database.py -- Engine construction for every store.

The process bootstrap (api/main.py lifespan, main.py CLI) calls
create_store_engine() once and hands the Engine to UserStore, SessionStore
and QAStore. Stores never build their own engine, and disposing the engine
is the bootstrap's job, not a store's.

Usage:
    engine = create_store_engine("sqlite:///quora.db")
    users = UserStore(engine)
    ...
    engine.dispose()
"""

from __future__ import annotations

from sqlalchemy import MetaData, create_engine, event, text
from sqlalchemy.engine import Engine

# Every table (auth/store.py, qa/store.py) registers on this one MetaData so
# foreign keys between users, sessions, questions and answers resolve.
metadata = MetaData()


def _set_wal_mode(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode so readers never block on the writer.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")


def _enable_foreign_keys(dbapi_conn, connection_record) -> None:
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


def create_store_engine(db_url: str) -> Engine:
    """Build an Engine for db_url with the SQLite tuning applied when relevant."""
    connect_args: dict = {}
    if db_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(db_url, connect_args=connect_args)
    if db_url.startswith("sqlite"):
        event.listen(engine, "connect", _set_wal_mode)
        event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def ping(engine: Engine) -> bool:
    """Return True if the database answers a trivial query."""
    with engine.connect() as conn:
        return conn.execute(text("SELECT 1")).scalar() == 1
