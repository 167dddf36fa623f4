"""Channel session service - create, join, share and record channels."""

from collections.abc import Callable

from loguru import logger

from passroom.app_config import AppEnvironConfig
from passroom.domain.live.recording.recording_models import sanitize_title
from passroom.domain.live.recording.recording_orchestrator import RecordingOrchestrator
from passroom.domain.user.user_models import AuthUser
from passroom.schemas import ChannelRecord
from passroom.schemas.schema_utils import utc_now
from passroom.services.channel_repository import ChannelRepository
from passroom.services.integrations.cloud_recording.cloud_recording_client import (
    CloudRecordingClient,
)
from passroom.services.integrations.credential_service import CredentialService, JoinCredential
from passroom.utils.app_errors import (
    ERRMESG_INVALID_TOKEN,
    ERRMESG_UNAUTHORIZED_RECORDING,
    AppError,
    AppErrorCode,
    HttpStatusCode,
)
from passroom.utils.idgen import new_channel_id, new_channel_name, new_channel_secret, new_dtmf

from .channel_models import JoinSession, Passphrase, Pstn, ShareResponse
from .passphrase_directory import PassphraseDirectory, ResolvedChannel

RECORDING_SUCCESS = "success"


class ChannelService:
    """Channel operations exposed to the API layer."""

    def __init__(
        self,
        cfg: AppEnvironConfig,
        repository: ChannelRepository,
        credentials: CredentialService,
        recording_client: CloudRecordingClient,
        orchestrator_factory: Callable[[str], RecordingOrchestrator] | None = None,
    ):
        self._cfg = cfg
        self._repository = repository
        self._credentials = credentials
        self._recording_client = recording_client
        self._directory = PassphraseDirectory(repository)
        self._orchestrator_factory = orchestrator_factory or self._new_orchestrator

    def _new_orchestrator(self, channel_name: str) -> RecordingOrchestrator:
        return RecordingOrchestrator(
            channel_name=channel_name,
            cfg=self._cfg,
            credentials=self._credentials,
            client=self._recording_client,
        )

    def _pstn_for(self, dtmf: str | None) -> Pstn | None:
        if not dtmf:
            return None
        return Pstn(number=self._cfg.PSTN_NUMBER, dtmf=dtmf)

    # ==================== CHANNELS ====================

    async def create_channel(
        self,
        title: str,
        enable_pstn: bool = False,
        user: AuthUser | None = None,
    ) -> ShareResponse:
        """Create a channel with fresh host/viewer passphrases.

        A DTMF dial-in code is provisioned only when ``enable_pstn`` is set.
        """
        logger.info(f"Creating channel title={title!r} enable_pstn={enable_pstn}")

        if self._cfg.ENABLE_OAUTH and user is None:
            logger.debug("Invalid Token")
            raise AppError(
                errcode=AppErrorCode.E_BAD_TOKEN,
                errmesg=ERRMESG_INVALID_TOKEN,
                status_code=HttpStatusCode.UNAUTHORIZED,
            )

        if not title or not title.strip():
            raise AppError(
                errcode=AppErrorCode.E_INVALID_REQUEST,
                errmesg="Title is required",
                status_code=HttpStatusCode.BAD_REQUEST,
            )

        host_passphrase = self._credentials.generate_opaque_id()
        viewer_passphrase = self._credentials.generate_opaque_id()
        while viewer_passphrase == host_passphrase:
            viewer_passphrase = self._credentials.generate_opaque_id()

        now = utc_now()
        channel = ChannelRecord(
            channel_id=new_channel_id(),
            title=title,
            channel_name=new_channel_name(),
            channel_secret=new_channel_secret(),
            host_passphrase=host_passphrase,
            viewer_passphrase=viewer_passphrase,
            dtmf=new_dtmf() if enable_pstn else None,
            created_at=now,
            updated_at=now,
        )

        await self._repository.insert_channel(channel)

        return ShareResponse(
            passphrase=Passphrase(host=channel.host_passphrase, view=channel.viewer_passphrase),
            title=channel.title,
            channel=channel.channel_name,
            pstn=self._pstn_for(channel.dtmf),
        )

    async def join_channel(self, passphrase: str) -> JoinSession:
        """Resolve a passphrase and issue main and screen-share credentials."""
        resolved = await self._directory.resolve(passphrase)
        channel = resolved.channel

        main_user = self._credentials.generate(channel.channel_name, is_primary_stream=True)
        screen_share = self._generate_distinct(channel.channel_name, main_user)

        return JoinSession(
            title=channel.title,
            channel=channel.channel_name,
            is_host=resolved.is_host,
            secret=channel.channel_secret,
            main_user=main_user,
            screen_share=screen_share,
        )

    def _generate_distinct(self, channel_name: str, main_user: JoinCredential) -> JoinCredential:
        screen_share = self._credentials.generate(channel_name, is_primary_stream=False)
        while screen_share.uid == main_user.uid:
            screen_share = self._credentials.generate(channel_name, is_primary_stream=False)
        return screen_share

    async def share(self, passphrase: str) -> ShareResponse:
        """Re-expose a channel's passphrases; viewers do not see the host passphrase."""
        resolved = await self._directory.resolve(passphrase)
        channel = resolved.channel

        return ShareResponse(
            passphrase=Passphrase(
                host=channel.host_passphrase if resolved.is_host else None,
                view=channel.viewer_passphrase,
            ),
            title=channel.title,
            channel=channel.channel_name,
            pstn=self._pstn_for(channel.dtmf),
        )

    # ==================== RECORDING ====================

    async def _resolve_host(self, passphrase: str) -> ResolvedChannel:
        resolved = await self._directory.resolve(passphrase)
        if not resolved.is_host:
            logger.debug(f"Unauthorized to record channel {resolved.channel.channel_name}")
            raise AppError(
                errcode=AppErrorCode.E_UNAUTHORIZED,
                errmesg=ERRMESG_UNAUTHORIZED_RECORDING,
                status_code=HttpStatusCode.FORBIDDEN,
            )
        return resolved

    async def start_recording(
        self,
        passphrase: str,
        secret: str | None = None,
        user: AuthUser | None = None,
    ) -> str:
        """Acquire and start a cloud recording, then persist its identifiers."""
        resolved = await self._resolve_host(passphrase)
        channel = resolved.channel

        title = sanitize_title(user.name if user and user.name else channel.title)

        orchestrator = self._orchestrator_factory(channel.channel_name)
        await orchestrator.acquire()
        recording = await orchestrator.start(title, secret)

        await self._repository.update_recording_state(channel.channel_id, recording)
        logger.info(f"Recording started for channel {channel.channel_id}")
        return RECORDING_SUCCESS

    async def stop_recording(self, passphrase: str) -> str:
        """Stop the channel's cloud recording and clear its identifiers."""
        resolved = await self._resolve_host(passphrase)
        channel = resolved.channel

        orchestrator = self._orchestrator_factory(channel.channel_name)
        await orchestrator.stop(channel.recording)

        await self._repository.update_recording_state(channel.channel_id, None)
        logger.info(f"Recording stopped for channel {channel.channel_id}")
        return RECORDING_SUCCESS
