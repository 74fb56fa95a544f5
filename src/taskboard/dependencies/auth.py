from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from sqlmodel import Session

from ..config import Settings
from ..crud import UserStorage
from ..db.session import get_session
from ..models import User
from ..services.session import InvalidSessionToken, decode_session_token


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_principal_email(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> str:
    """Resolve the bearer token to the signed-in principal's email."""
    if not authorization:
        raise _unauthorized()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise _unauthorized()
    try:
        payload = decode_session_token(token.strip(), settings)
    except InvalidSessionToken:
        raise _unauthorized()
    return payload["email"]


def get_current_user(
    email: str = Depends(get_principal_email),
    session: Session = Depends(get_session),
) -> User:
    """
    Map the principal to its User record.

    A valid token without a User means provisioning never ran for this
    principal; that is reported as 404 rather than 401.
    """
    user = UserStorage(session).find_by_email(email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user
