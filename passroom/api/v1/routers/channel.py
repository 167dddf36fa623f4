from functools import lru_cache

from fastapi import APIRouter, Depends, Query

from passroom.api.v1.dependency import OptionalUser
from passroom.api.v1.schemas.base import ApiOut
from passroom.api.v1.schemas.channel import CreateChannelIn, JoinChannelOut, ShareOut
from passroom.app_config import get_app_environ_config
from passroom.domain.live.channel.channel_domain import ChannelService
from passroom.services.channel_repository import BeanieChannelRepository
from passroom.services.integrations.cloud_recording.cloud_recording_client import (
    CloudRecordingClient,
)
from passroom.services.integrations.credential_service import CredentialService

router = APIRouter(prefix="/channel")


@lru_cache
def get_channel_service() -> ChannelService:
    """Get the singleton ChannelService instance."""
    cfg = get_app_environ_config()
    return ChannelService(
        cfg=cfg,
        repository=BeanieChannelRepository(),
        credentials=CredentialService(cfg),
        recording_client=CloudRecordingClient.from_config(cfg),
    )


@router.post("/create_channel")
async def create_channel(
    channel: CreateChannelIn,
    user: OptionalUser,
    service: ChannelService = Depends(get_channel_service),
) -> ApiOut[ShareOut]:
    """Create a channel and return its host and viewer passphrases."""
    result = await service.create_channel(
        title=channel.title,
        enable_pstn=channel.enable_pstn,
        user=user,
    )

    return ApiOut[ShareOut](results=ShareOut.from_domain(result))


@router.get("/join_channel")
async def join_channel(
    passphrase: str = Query(..., description="Host or viewer passphrase"),
    service: ChannelService = Depends(get_channel_service),
) -> ApiOut[JoinChannelOut]:
    """Issue media credentials for the channel behind a passphrase."""
    session = await service.join_channel(passphrase)

    return ApiOut[JoinChannelOut](results=JoinChannelOut.from_domain(session))


@router.get("/share")
async def share(
    passphrase: str = Query(..., description="Host or viewer passphrase"),
    service: ChannelService = Depends(get_channel_service),
) -> ApiOut[ShareOut]:
    result = await service.share(passphrase)

    return ApiOut[ShareOut](results=ShareOut.from_domain(result))
