"""User Pydantic schemas — registration, login, profile output."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from pressbutton.models.user import AccountTypeEnum
from pressbutton.schemas.common import CAMEL_CONFIG

# bcrypt only looks at the first 72 bytes and rejects longer input.
PASSWORD_MAX_BYTES = 72


class RegisterRequest(BaseModel):
    """Fields submitted on registration."""
    email: EmailStr
    password: str = Field(..., min_length=6)
    name: Optional[str] = Field(None, max_length=200)

    @field_validator("password")
    @classmethod
    def _password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes long")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class UserOut(BaseModel):
    """Public user representation returned by the API."""
    id: int
    email: str
    name: Optional[str] = None
    account_type: AccountTypeEnum = AccountTypeEnum.REGULAR
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = CAMEL_CONFIG


class GuestCredentials(BaseModel):
    email: str
    password: str


class AuthResponse(BaseModel):
    user: UserOut
    access_token: str
    token_type: str = "Bearer"
    guest_credentials: Optional[GuestCredentials] = Field(None, alias="guestCredentials")

    # Token fields keep their snake_case names on the wire.
    model_config = {"from_attributes": True, "populate_by_name": True}
