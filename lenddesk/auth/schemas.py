"""Auth domain schemas.

Request and response schemas for authentication operations.
"""

from pydantic import AliasChoices, BaseModel, EmailStr, Field

from lenddesk.user.models import UserRole


class AuthRegister(BaseModel):
    """Request schema for user registration.

    The account role may be sent as `role` or `type`.
    """

    email: EmailStr
    password: str = Field(min_length=8)
    username: str = Field(min_length=3, max_length=50)
    first_name: str = Field(min_length=1, max_length=50)
    last_name: str = Field(min_length=1, max_length=50)
    age: str = Field(default="", max_length=10)
    gender: str = Field(default="", max_length=20)
    contact_number: str = Field(default="", max_length=30)
    address: str = Field(default="", max_length=255)
    role: UserRole = Field(
        default=UserRole.viewer,
        validation_alias=AliasChoices("role", "type"),
    )


class EmailPasswordLoginRequest(BaseModel):
    """Request schema for email/password login via Firebase Identity Toolkit."""

    email: EmailStr
    password: str


class AuthMessage(BaseModel):
    """Generic auth message response."""

    message: str
