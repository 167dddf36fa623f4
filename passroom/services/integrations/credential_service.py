"""Join credential signing.

Thin wrapper around the `livekit-api` access token builder. Every participant
identity in a channel is a random non-zero 32-bit integer; the signed token
binds that identity to the channel name, an expiry and the grants for its role.

Usage:
    credentials = CredentialService(get_app_environ_config())

    main_user = credentials.generate(channel_name, is_primary_stream=True)
    screen_share = credentials.generate(channel_name, is_primary_stream=False)
    recorder = credentials.generate_recorder(channel_name)
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from livekit import api
from loguru import logger
from pydantic import BaseModel

from passroom.app_config import AppEnvironConfig
from passroom.utils.app_errors import AppErrorCode, internal_error
from passroom.utils.idgen import new_opaque_id

UID_BITS = 32


class JoinCredential(BaseModel):
    """Short-lived signed access for one participant identity."""

    uid: int
    rtc: str
    channel_name: str
    expires_at: datetime


def random_uid() -> int:
    """Random participant id in [1, 2**32 - 1]."""
    return secrets.randbelow(2**UID_BITS - 1) + 1


class CredentialService:
    """Issues signed join credentials for channel participants."""

    def __init__(
        self,
        cfg: AppEnvironConfig,
        uid_source: Callable[[], int] = random_uid,
    ) -> None:
        self._api_key = cfg.RTC_API_KEY
        self._api_secret = cfg.RTC_API_SECRET
        self._ttl = timedelta(seconds=cfg.RTC_TOKEN_TTL_SECONDS)
        self._uid_source = uid_source

    def generate(self, channel_name: str, is_primary_stream: bool) -> JoinCredential:
        """Credential for a participant.

        The primary stream carries the participant's camera and microphone;
        the auxiliary identity is used for screen sharing and never subscribes,
        so it does not receive its own stream back.
        """
        grants = api.VideoGrants(
            room_join=True,
            room=channel_name,
            can_publish=True,
            can_subscribe=is_primary_stream,
            can_publish_data=is_primary_stream,
        )
        return self._sign(channel_name, grants, kind="standard")

    def generate_recorder(self, channel_name: str) -> JoinCredential:
        """Credential for the cloud recording bot: hidden, subscribe only."""
        grants = api.VideoGrants(
            room_join=True,
            room=channel_name,
            room_record=True,
            recorder=True,
            hidden=True,
            can_publish=False,
            can_subscribe=True,
            can_publish_data=False,
        )
        return self._sign(channel_name, grants, kind="egress")

    @staticmethod
    def generate_opaque_id() -> str:
        return new_opaque_id()

    def _sign(self, channel_name: str, grants: api.VideoGrants, kind: str) -> JoinCredential:
        if not self._api_key or not self._api_secret:
            logger.error("RTC_API_KEY or RTC_API_SECRET not configured")
            raise internal_error(AppErrorCode.E_CREDENTIAL_GENERATION_FAILED)

        try:
            uid = self._uid_source()
            if uid <= 0 or uid >= 2**UID_BITS:
                raise ValueError(f"uid out of range: {uid}")

            expires_at = datetime.now(timezone.utc) + self._ttl
            token = (
                api.AccessToken(self._api_key, self._api_secret)
                .with_identity(str(uid))
                .with_kind(kind)
                .with_ttl(self._ttl)
                .with_grants(grants)
                .to_jwt()
            )
        except Exception as e:
            logger.error(f"Credential generation failed for channel {channel_name}: {e}")
            raise internal_error(AppErrorCode.E_CREDENTIAL_GENERATION_FAILED) from e

        return JoinCredential(
            uid=uid,
            rtc=token,
            channel_name=channel_name,
            expires_at=expires_at,
        )
