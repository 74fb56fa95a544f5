import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, status
from sqlmodel import Session

from ..config import Settings
from ..crud import IdentityProfile
from ..db.session import get_session
from ..dependencies.auth import get_settings
from ..schemas.user import SignInRequest, SignInResponse
from ..services.session import sign_in

logger = logging.getLogger(__name__)

router = APIRouter()


def require_provisioning_key(
    x_provisioning_key: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Only the identity-provider callback, holding the shared key, may sign users in."""
    expected = settings.provisioning_key
    if not expected or not x_provisioning_key or not hmac.compare_digest(
        x_provisioning_key.encode(), expected.encode()
    ):
        logger.warning("Rejected sign-in without a valid provisioning key")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


@router.post("/sign-in", response_model=SignInResponse, dependencies=[Depends(require_provisioning_key)])
def sign_in_user(
    payload: SignInRequest,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """Find or create the user for a completed sign-in and issue a session token."""
    profile = IdentityProfile(
        external_id=payload.external_id,
        email=payload.email,
        name=payload.name or "Unknown User",
        picture=payload.picture,
    )
    user, token = sign_in(session, profile, settings)
    return {"access_token": token, "user": user}
