import secrets
import uuid

from ulid import ULID

DTMF_LENGTH = 6


def new_ulid(prefix: str | None = None) -> str:
    value = str(ULID()).lower()
    return f"{prefix}{value}" if prefix else value


def new_channel_id() -> str:
    return new_ulid("ch_")


def new_opaque_id() -> str:
    """Random uuid4 string, used for passphrases."""
    return str(uuid.uuid4())


def new_channel_name() -> str:
    return uuid.uuid4().hex


def new_channel_secret() -> str:
    return uuid.uuid4().hex


def new_dtmf() -> str:
    """Numeric dial-in code for phone participants."""
    return "".join(str(secrets.randbelow(10)) for _ in range(DTMF_LENGTH))
