"""User and login token ODM schemas (OAuth mode only)."""

from datetime import datetime

from beanie import Document, Indexed


class User(Document):
    """Authenticated user."""

    user_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    # Subject identifier issued by the OAuth provider
    identifier: Indexed(str, unique=True)  # type: ignore[valid-type]
    user_name: str | None = None
    created_at: datetime
    updated_at: datetime

    class Settings:
        name = "user"


class Token(Document):
    """Bearer token issued to a user at login."""

    token_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    user_id: Indexed(str)  # type: ignore[valid-type]
    created_at: datetime

    class Settings:
        name = "token"
