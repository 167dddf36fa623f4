from collections.abc import Mapping
from functools import lru_cache

from pydantic import BaseModel

from passroom.shared.config import load_environ


def _str(env: Mapping[str, str | None], key: str, default: str = "") -> str:
    return (env.get(key) or "").strip() or default


def _opt_str(env: Mapping[str, str | None], key: str) -> str | None:
    return (env.get(key) or "").strip() or None


def _bool(env: Mapping[str, str | None], key: str, default: bool = False) -> bool:
    raw = (env.get(key) or "").strip().lower()
    if not raw:
        return default
    return raw in {"true", "1", "yes", "on"}


def _int(env: Mapping[str, str | None], key: str, default: int) -> int:
    return int((env.get(key) or "").strip() or default)


class AppEnvironConfig(BaseModel):
    """Process-wide, read-only settings.

    Built once at startup by :meth:`from_environ` and handed to every component
    constructor. Components never look settings up by key on their own.
    """

    DEBUG: bool = False
    ENABLE_OAUTH: bool = False

    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_WORKERS: int = 1
    API_CORS_ORIGINS: list[str] = ["*"]

    # MongoDB
    MONGO_URL: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "passroom"

    # RTC provider (join credential signing)
    RTC_APP_ID: str | None = None
    RTC_API_KEY: str | None = None
    RTC_API_SECRET: str | None = None
    RTC_TOKEN_TTL_SECONDS: int = 24 * 60 * 60

    # Cloud recording service
    CLOUD_RECORDING_BASE_URL: str = "https://api.agora.io"
    CLOUD_RECORDING_CUSTOMER_ID: str | None = None
    CLOUD_RECORDING_CUSTOMER_CERTIFICATE: str | None = None
    CLOUD_RECORDING_TIMEOUT_SECONDS: float = 30.0
    RECORDING_RESOURCE_EXPIRED_HOUR: int = 24
    RECORDING_MAX_IDLE_TIME: int = 30
    RECORDING_TIMEZONE: str = "America/Los_Angeles"

    # Recording storage destination
    RECORDING_VENDOR: int = 0
    RECORDING_REGION: int = 0
    BUCKET_NAME: str = ""
    BUCKET_ACCESS_KEY: str = ""
    BUCKET_ACCESS_SECRET: str = ""

    # Phone dial-in
    PSTN_NUMBER: str = ""

    # Observability
    LOGFIRE_ENABLE: bool = False
    LOGFIRE_TOKEN: str | None = None

    @classmethod
    def from_environ(cls, env: Mapping[str, str | None]) -> "AppEnvironConfig":
        cors = [x.strip() for x in _str(env, "API_CORS_ORIGINS", "*").split(",") if x.strip()]
        return cls(
            DEBUG=_bool(env, "DEBUG"),
            ENABLE_OAUTH=_bool(env, "ENABLE_OAUTH"),
            API_HOST=_str(env, "API_HOST", "0.0.0.0"),
            API_PORT=_int(env, "API_PORT", 8000),
            API_WORKERS=_int(env, "API_WORKERS", 1),
            API_CORS_ORIGINS=cors,
            MONGO_URL=_str(env, "MONGO_URL", "mongodb://localhost:27017"),
            MONGO_DB_NAME=_str(env, "MONGO_DB_NAME", "passroom"),
            RTC_APP_ID=_opt_str(env, "RTC_APP_ID"),
            RTC_API_KEY=_opt_str(env, "RTC_API_KEY"),
            RTC_API_SECRET=_opt_str(env, "RTC_API_SECRET"),
            RTC_TOKEN_TTL_SECONDS=_int(env, "RTC_TOKEN_TTL_SECONDS", 24 * 60 * 60),
            CLOUD_RECORDING_BASE_URL=_str(env, "CLOUD_RECORDING_BASE_URL", "https://api.agora.io"),
            CLOUD_RECORDING_CUSTOMER_ID=_opt_str(env, "CLOUD_RECORDING_CUSTOMER_ID"),
            CLOUD_RECORDING_CUSTOMER_CERTIFICATE=_opt_str(
                env, "CLOUD_RECORDING_CUSTOMER_CERTIFICATE"
            ),
            CLOUD_RECORDING_TIMEOUT_SECONDS=float(
                _str(env, "CLOUD_RECORDING_TIMEOUT_SECONDS", "30")
            ),
            RECORDING_RESOURCE_EXPIRED_HOUR=_int(env, "RECORDING_RESOURCE_EXPIRED_HOUR", 24),
            RECORDING_MAX_IDLE_TIME=_int(env, "RECORDING_MAX_IDLE_TIME", 30),
            RECORDING_TIMEZONE=_str(env, "RECORDING_TIMEZONE", "America/Los_Angeles"),
            RECORDING_VENDOR=_int(env, "RECORDING_VENDOR", 0),
            RECORDING_REGION=_int(env, "RECORDING_REGION", 0),
            BUCKET_NAME=_str(env, "BUCKET_NAME"),
            BUCKET_ACCESS_KEY=_str(env, "BUCKET_ACCESS_KEY"),
            BUCKET_ACCESS_SECRET=_str(env, "BUCKET_ACCESS_SECRET"),
            PSTN_NUMBER=_str(env, "PSTN_NUMBER"),
            LOGFIRE_ENABLE=_bool(env, "LOGFIRE_ENABLE"),
            LOGFIRE_TOKEN=_opt_str(env, "LOGFIRE_TOKEN"),
        )


@lru_cache(maxsize=1)
def get_app_environ_config() -> AppEnvironConfig:
    return AppEnvironConfig.from_environ(load_environ())
