from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel, ReadModel, as_utc


class SignInRequest(CamelModel):
    # Profile forwarded by the identity-provider callback
    external_id: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    name: Optional[str] = Field(None, max_length=200)
    picture: Optional[str] = Field(None, max_length=2000)


class UserRead(ReadModel):
    id: str
    email: str
    name: str
    picture: Optional[str] = None
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def attach_utc(cls, value):
        return as_utc(value)


class SignInResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
