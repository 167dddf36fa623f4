from enum import Enum


class Role(str, Enum):
    """Access level granted by the passphrase a caller presented."""

    HOST = "host"
    VIEWER = "viewer"

    def __str__(self) -> str:
        return self.value


__all__ = ["Role"]
