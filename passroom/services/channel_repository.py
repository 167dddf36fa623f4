"""Channel persistence backed by MongoDB/Beanie."""

from typing import Protocol

from beanie.operators import Or, Set
from loguru import logger
from pymongo.errors import PyMongoError

from passroom.schemas import Channel, ChannelRecord, ChannelRecording
from passroom.schemas.schema_utils import utc_now
from passroom.utils.app_errors import AppErrorCode, internal_error


class ChannelRepository(Protocol):
    """Storage operations the channel domain depends on."""

    async def get_channel_by_passphrase(self, passphrase: str) -> ChannelRecord | None:
        """Return the channel whose host or viewer passphrase equals ``passphrase``."""

    async def insert_channel(self, channel: ChannelRecord) -> str:
        """Persist a new channel and return its channel_id."""

    async def update_recording_state(
        self, channel_id: str, recording: ChannelRecording | None
    ) -> None:
        """Replace (or clear) the recording triple of a channel."""


class BeanieChannelRepository(ChannelRepository):
    """ChannelRepository over the ``channel`` collection.

    Driver errors are logged here and surfaced as ``E_UPSTREAM_FAILURE``.
    """

    async def get_channel_by_passphrase(self, passphrase: str) -> ChannelRecord | None:
        try:
            channel = await Channel.find_one(
                Or(
                    Channel.host_passphrase == passphrase,
                    Channel.viewer_passphrase == passphrase,
                )
            )
        except PyMongoError as e:
            logger.error(f"Channel lookup by passphrase failed: {e}")
            raise internal_error(AppErrorCode.E_UPSTREAM_FAILURE) from e

        return channel.to_record() if channel else None

    async def insert_channel(self, channel: ChannelRecord) -> str:
        document = Channel.from_record(channel)
        try:
            await document.insert()
        except PyMongoError as e:
            logger.error(f"Adding new channel {channel.channel_id} to DB failed: {e}")
            raise internal_error(AppErrorCode.E_UPSTREAM_FAILURE) from e

        logger.debug(f"Inserted channel {channel.channel_id}")
        return channel.channel_id

    async def update_recording_state(
        self, channel_id: str, recording: ChannelRecording | None
    ) -> None:
        try:
            result = await Channel.find_one(Channel.channel_id == channel_id).update(
                Set(
                    {
                        "recording": recording.model_dump() if recording else None,
                        "updated_at": utc_now(),
                    }
                )
            )
        except PyMongoError as e:
            logger.error(f"Updating recording state for channel {channel_id} failed: {e}")
            raise internal_error(AppErrorCode.E_UPSTREAM_FAILURE) from e

        if result is None or getattr(result, "matched_count", 1) == 0:
            logger.error(f"Recording state update matched no channel: {channel_id}")
            raise internal_error()
