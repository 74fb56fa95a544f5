"""Request-scoped database sessions for Taskboard."""

from typing import Generator

from fastapi import Request
from sqlmodel import Session

from ..database import Database


def get_database(request: Request) -> Database:
    """Return the Database attached to the running application."""
    return request.app.state.database


def get_session(request: Request) -> Generator[Session, None, None]:
    """Get a database session for the current request.

    Yields:
        Session: Database session

    Usage:
        @router.get("/")
        def handler(session: Session = Depends(get_session)):
            ...
    """
    yield from get_database(request).session()
