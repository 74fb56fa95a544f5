"""Database client for Taskboard.

The engine lives on an explicitly constructed ``Database`` object that the
application creates at startup and disposes at shutdown. Use
``db.session.get_session`` for request-scoped sessions.
"""

import logging
from typing import Generator, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from .errors import UpstreamStoreError

# Import models so they're registered with SQLModel.metadata
from .models import Task, TaskList, User  # noqa: F401

logger = logging.getLogger(__name__)


class Database:
    """Owns the SQLAlchemy engine and hands out sessions."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def _create_engine(self) -> Engine:
        kwargs = {"echo": self.echo}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # In-memory databases vanish when their only connection closes
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        logger.info(f"Creating database engine for {self.url.split('@')[-1]}")
        return create_engine(self.url, **kwargs)

    def create_db_and_tables(self) -> None:
        """Create all tables and indexes that do not exist yet."""
        SQLModel.metadata.create_all(self.engine)
        logger.info("Database tables and indexes are in place")

    def ping(self) -> None:
        """Run a trivial query.

        Raises:
            UpstreamStoreError: If the database cannot be reached
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            raise UpstreamStoreError("Database is unavailable") from e

    def session(self) -> Generator[Session, None, None]:
        """Yield a session bound to this database.

        Usage:
            for session in database.session():
                ...
        """
        with Session(self.engine) as session:
            yield session

    def dispose(self) -> None:
        """Release pooled connections."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Database engine disposed")
