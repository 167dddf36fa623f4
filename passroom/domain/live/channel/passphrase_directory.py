"""Passphrase → (channel, role) resolution."""

from loguru import logger
from pydantic import BaseModel

from passroom.schemas import ChannelRecord, Role
from passroom.services.channel_repository import ChannelRepository
from passroom.utils.app_errors import (
    AppError,
    AppErrorCode,
    HttpStatusCode,
    internal_error,
    invalid_access_error,
)


class ResolvedChannel(BaseModel):
    channel: ChannelRecord
    role: Role

    @property
    def is_host(self) -> bool:
        return self.role == Role.HOST


class PassphraseDirectory:
    """Maps a passphrase to its channel and the role it grants.

    This is the only place where a passphrase is compared against the host
    and viewer passphrases of a channel.
    """

    def __init__(self, repository: ChannelRepository):
        self._repository = repository

    async def resolve(self, passphrase: str) -> ResolvedChannel:
        """Resolve a passphrase.

        Raises:
            AppError: E_INVALID_REQUEST for an empty passphrase,
                E_INVALID_ACCESS when no channel matches,
                E_INTERNAL_ERROR when the store returns a channel matching neither passphrase
        """
        if not passphrase:
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg="Passphrase cannot be empty",
                status_code=HttpStatusCode.BAD_REQUEST,
            )

        channel = await self._repository.get_channel_by_passphrase(passphrase)
        if channel is None:
            logger.debug(f"Invalid passphrase: {passphrase}")
            raise invalid_access_error()

        if passphrase == channel.host_passphrase:
            role = Role.HOST
        elif passphrase == channel.viewer_passphrase:
            role = Role.VIEWER
        else:
            logger.error(
                f"Passphrase lookup returned channel {channel.channel_id} "
                f"matching neither of its passphrases"
            )
            raise internal_error()

        return ResolvedChannel(channel=channel, role=role)
