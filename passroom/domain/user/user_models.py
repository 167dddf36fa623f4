"""User domain models."""

from pydantic import BaseModel


class AuthUser(BaseModel):
    """Identity of an authenticated caller (OAuth mode)."""

    user_id: str
    identifier: str
    name: str | None = None
