"""
Engine and session handling.

Resolvers never share a session: each operation opens one with
``DatabaseManager.session_scope``, does its work and leaves. A mutation's
single write is committed inside that scope, so by the time a resolver
returns, its change is durable; if anything fails the scope rolls back and
nothing partial remains.
"""

import logging
from collections.abc import Callable, Generator
from contextlib import contextmanager
from typing import TypeVar

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import get_config
from .schema import Base

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _build_engine(database_url: str) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_size=10, max_overflow=20, pool_pre_ping=True)

    # One shared connection: keeps ``sqlite://`` databases alive between
    # sessions and lets worker threads use the same file handle
    return create_engine(
        database_url,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


class DatabaseManager:
    """
    Lazily creates the engine for one database URL and hands out sessions.

    The server builds one at startup; tests build an in-memory one per test.
    """

    def __init__(self, database_url: str | None = None):
        if database_url is None:
            database_url = get_config().get_database_url()
        self.database_url = database_url
        self._engine: Engine | None = None
        self._sessions: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = _build_engine(self.database_url)
            logger.info("Opened database %s", self._engine.url)
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        if self._sessions is None:
            # Returned models are read after commit, so keep attributes loaded
            self._sessions = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        return self._sessions

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        One unit of work: commit on success, roll back on any exception.

        ```python
        with db.session_scope() as session:
            book = BookRepository(session).create(data)
        ```
        """
        session = self.session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def init_database(self, drop_existing: bool = False) -> None:
        """Create the ``users`` and ``books`` tables if they are missing.

        Args:
            drop_existing: Drop both tables first, discarding all data
        """
        if drop_existing:
            logger.warning("Dropping users and books tables")
            Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema ready")

    def table_names(self) -> list[str]:
        return sorted(inspect(self.engine).get_table_names())

    def verify_connection(self) -> bool:
        """Run a trivial query; False if the database cannot be reached."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError:
            logger.exception("Cannot reach database %s", self.database_url)
            return False
        return True

    def close(self) -> None:
        """Release all pooled connections. The manager can be reused afterwards."""
        if self._engine is not None:
            self._engine.dispose()
            logger.debug("Disposed engine for %s", self.database_url)
        self._engine = None
        self._sessions = None


def safe_commit(session: Session, operation: str) -> None:
    """
    Commit, or roll back and re-raise.

    Args:
        session: Session holding the pending write
        operation: Short label for the log line, e.g. ``"create Book"``
    """
    try:
        session.commit()
    except SQLAlchemyError:
        logger.warning("Commit of %s failed; rolled back", operation)
        session.rollback()
        raise


def safe_query(session: Session, query_func: Callable[[Session], T], error_msg: str) -> T:
    """Run a read through ``query_func``, logging failures before re-raising them."""
    try:
        return query_func(session)
    except SQLAlchemyError:
        logger.exception(error_msg)
        raise
