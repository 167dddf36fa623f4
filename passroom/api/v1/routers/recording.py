from fastapi import APIRouter, Depends

from passroom.api.v1.dependency import OptionalUser
from passroom.api.v1.routers.channel import get_channel_service
from passroom.api.v1.schemas.base import ApiOut
from passroom.api.v1.schemas.recording import StartRecordingIn, StopRecordingIn
from passroom.domain.live.channel.channel_domain import ChannelService

router = APIRouter(prefix="/recording")


@router.post("/start_recording")
async def start_recording(
    payload: StartRecordingIn,
    user: OptionalUser,
    service: ChannelService = Depends(get_channel_service),
) -> ApiOut[str]:
    """Start cloud recording of a channel. Host passphrase only."""
    status = await service.start_recording(
        passphrase=payload.passphrase,
        secret=payload.secret,
        user=user,
    )

    return ApiOut[str](results=status)


@router.post("/stop_recording")
async def stop_recording(
    payload: StopRecordingIn,
    service: ChannelService = Depends(get_channel_service),
) -> ApiOut[str]:
    """Stop cloud recording of a channel. Host passphrase only."""
    status = await service.stop_recording(passphrase=payload.passphrase)

    return ApiOut[str](results=status)
