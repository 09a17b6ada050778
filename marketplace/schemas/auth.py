"""Auth Schemas - registration, login and the public principal."""

from pydantic import Field, field_validator

from marketplace.schemas.common import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(CamelModel):
    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str = Field(min_length=8, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    university: str = Field(min_length=1, max_length=255)
    student_id: str | None = Field(None, max_length=64)

    @field_validator("first_name", "last_name", "university")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v


class LoginRequest(CamelModel):
    """Password is optional only for the demo account."""
    email: str = Field(pattern=EMAIL_PATTERN, max_length=255)
    password: str | None = Field(None, max_length=128)


class UserResponse(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str
    university: str
    role: str
    email_verified: bool
    is_demo: bool


class AuthResponse(CamelModel):
    token: str
    user: UserResponse
