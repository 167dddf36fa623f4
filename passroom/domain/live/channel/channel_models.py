"""Channel domain models."""

from pydantic import BaseModel

from passroom.services.integrations.credential_service import JoinCredential


class Passphrase(BaseModel):
    """Passphrases of a channel; ``host`` is omitted for viewers."""

    host: str | None = None
    view: str


class Pstn(BaseModel):
    number: str
    dtmf: str


class ShareResponse(BaseModel):
    passphrase: Passphrase
    title: str
    channel: str
    pstn: Pstn | None = None


class JoinSession(BaseModel):
    """Everything a participant needs to enter a channel."""

    title: str
    channel: str
    is_host: bool
    secret: str
    main_user: JoinCredential
    screen_share: JoinCredential
