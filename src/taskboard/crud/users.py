"""Storage layer for users provisioned by the identity provider."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlmodel import Session, select

from ..errors import ValidationError
from ..models import User, utcnow
from .base import touch

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("email", "name", "picture")


@dataclass
class IdentityProfile:
    """Profile returned by the identity provider on sign-in."""
    external_id: str
    email: str
    name: str = "Unknown User"
    picture: Optional[str] = None


class UserStorage:
    """Reads and writes users."""

    def __init__(self, session: Session):
        self.session = session

    def find_by_external_id(self, external_id: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.external_id == external_id)).first()

    def find_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self.session.get(User, user_id)

    def create_user(self, profile: IdentityProfile) -> User:
        """Create a user from an identity-provider profile.

        Raises:
            ValidationError: If the external id or email is missing
        """
        if not profile.external_id or not profile.email:
            raise ValidationError("External id and email are required")

        now = utcnow()
        user = User(
            external_id=profile.external_id,
            email=profile.email,
            name=profile.name or "Unknown User",
            picture=profile.picture,
            created_at=now,
            updated_at=now,
        )
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        logger.info(f"Provisioned user {user.id} for {user.email}")
        return user

    def update_user(self, user_id: str, updates: Dict[str, Any]) -> Optional[User]:
        """Update profile fields of a user.

        Returns:
            The updated User, or None if not found
        """
        updates = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS}
        user = self.find_by_id(user_id)
        if user is None:
            return None
        for key, value in updates.items():
            setattr(user, key, value)
        touch(user, utcnow())
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def find_or_create_user(self, profile: IdentityProfile) -> User:
        """Return the user for a sign-in, creating it on first sign-in."""
        existing = self.find_by_external_id(profile.external_id)
        if existing is not None:
            return existing
        return self.create_user(profile)
