import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Tuple

from jose import JWTError, jwt
from sqlmodel import Session

from ..config import Settings
from ..crud import IdentityProfile, UserStorage
from ..models import User

logger = logging.getLogger(__name__)


class InvalidSessionToken(Exception):
    """The session token is malformed, expired or badly signed."""


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.session_expire_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.session_secret, algorithm=settings.session_algorithm)


def issue_session_token(user: User, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    """Issue the session token handed to the client after sign-in."""
    return create_access_token(
        {"sub": user.id, "email": user.email},
        settings,
        expires_delta=expires_delta,
    )


def decode_session_token(token: str, settings: Settings) -> Dict[str, Any]:
    try:
        payload = jwt.decode(token, settings.session_secret, algorithms=[settings.session_algorithm])
    except JWTError as e:
        raise InvalidSessionToken(str(e)) from e
    if not payload.get("email"):
        raise InvalidSessionToken("Token has no email claim")
    return payload


def sign_in(session: Session, profile: IdentityProfile, settings: Settings) -> Tuple[User, str]:
    """
    Provision the user behind an identity-provider sign-in and open a session.

    The first sign-in creates the User record; later ones reuse it.

    Returns:
        The user and a fresh session token for it
    """
    user = UserStorage(session).find_or_create_user(profile)
    logger.info(f"User {user.id} signed in")
    return user, issue_session_token(user, settings)
