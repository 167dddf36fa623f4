"""Tests for joining a channel."""

import pytest
from livekit import api

from passroom.domain.live.channel.channel_domain import ChannelService
from passroom.services.integrations.credential_service import CredentialService
from passroom.utils.app_errors import AppError, AppErrorCode
from tests.fixtures.channel_fixtures import (
    HOST_PASSPHRASE,
    TEST_API_KEY,
    TEST_API_SECRET,
    VIEWER_PASSPHRASE,
)


class TestJoinChannel:
    async def test_host_join(self, channel_service, seeded_channel):
        session = await channel_service.join_channel(HOST_PASSPHRASE)

        assert session.is_host is True
        assert session.title == seeded_channel.title
        assert session.channel == seeded_channel.channel_name
        assert session.secret == seeded_channel.channel_secret

    async def test_viewer_join(self, channel_service, seeded_channel):
        session = await channel_service.join_channel(VIEWER_PASSPHRASE)

        assert session.is_host is False
        assert session.channel == seeded_channel.channel_name

    async def test_credentials_have_distinct_uids(self, channel_service, seeded_channel):
        session = await channel_service.join_channel(HOST_PASSPHRASE)

        assert session.main_user.uid != session.screen_share.uid
        assert session.main_user.uid > 0
        assert session.screen_share.uid > 0
        assert session.main_user.rtc != session.screen_share.rtc

    async def test_credentials_are_bound_to_channel(self, channel_service, seeded_channel):
        session = await channel_service.join_channel(VIEWER_PASSPHRASE)
        verifier = api.TokenVerifier(TEST_API_KEY, TEST_API_SECRET)

        main_claims = verifier.verify(session.main_user.rtc)
        share_claims = verifier.verify(session.screen_share.rtc)

        assert main_claims.identity == str(session.main_user.uid)
        assert main_claims.video.room == seeded_channel.channel_name
        assert main_claims.video.can_subscribe is True
        assert share_claims.identity == str(session.screen_share.uid)
        assert share_claims.video.room == seeded_channel.channel_name

    async def test_colliding_uid_is_redrawn(
        self, app_config, channel_repository, recording_client, seeded_channel
    ):
        uids = iter([7, 7, 7, 9])
        service = ChannelService(
            cfg=app_config,
            repository=channel_repository,
            credentials=CredentialService(app_config, uid_source=lambda: next(uids)),
            recording_client=recording_client,
        )

        session = await service.join_channel(HOST_PASSPHRASE)

        assert session.main_user.uid == 7
        assert session.screen_share.uid == 9

    async def test_unknown_passphrase(self, channel_service, seeded_channel):
        with pytest.raises(AppError) as exc_info:
            await channel_service.join_channel("missing")

        assert exc_info.value.errcode == AppErrorCode.E_INVALID_ACCESS

    async def test_credential_failure_surfaces(
        self, app_config, channel_repository, recording_client, seeded_channel
    ):
        cfg = app_config.model_copy(update={"RTC_API_SECRET": None})
        service = ChannelService(
            cfg=cfg,
            repository=channel_repository,
            credentials=CredentialService(cfg),
            recording_client=recording_client,
        )

        with pytest.raises(AppError) as exc_info:
            await service.join_channel(HOST_PASSPHRASE)

        assert exc_info.value.errcode == AppErrorCode.E_CREDENTIAL_GENERATION_FAILED
        assert exc_info.value.status_code == 500
