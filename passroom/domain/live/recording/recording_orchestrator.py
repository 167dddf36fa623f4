"""Cloud recording orchestration: acquire → start → stop."""

from collections.abc import Callable
from datetime import datetime
from zoneinfo import ZoneInfo

import httpx
from loguru import logger

from passroom.app_config import AppEnvironConfig
from passroom.schemas import ChannelRecording
from passroom.schemas.schema_utils import utc_now
from passroom.services.integrations.cloud_recording.cloud_recording_client import (
    CloudRecordingClient,
)
from passroom.services.integrations.cloud_recording.cloud_recording_schemas import (
    AcquireClientRequest,
    AcquireRequest,
    RecordingConfig,
    StartClientRequest,
    StartRecordRequest,
    StopRecordResponse,
    StorageConfig,
    TranscodingConfig,
)
from passroom.services.integrations.credential_service import CredentialService
from passroom.utils.app_errors import (
    ERRMESG_RECORDING_NOT_STARTED,
    AppError,
    AppErrorCode,
    HttpStatusCode,
    internal_error,
)

from .recording_models import RecordingSession
from .recording_state_machine import RecordingState, RecordingStateMachine

# Errors the recording client may raise for one call: transport failures,
# non-2xx responses, undecodable or unexpected JSON bodies.
UPSTREAM_ERRORS = (httpx.HTTPError, ValueError)


class RecordingOrchestrator:
    """Drives one recording attempt for a channel.

    An instance lives for a single request. ``acquire`` and ``start`` are used
    together to begin a recording; ``stop`` takes the identifiers persisted on
    the channel by an earlier request.
    """

    def __init__(
        self,
        channel_name: str,
        cfg: AppEnvironConfig,
        credentials: CredentialService,
        client: CloudRecordingClient,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._cfg = cfg
        self._credentials = credentials
        self._client = client
        self._clock = clock
        self.session = RecordingSession(channel_name=channel_name)

    @property
    def state(self) -> RecordingState:
        return self.session.state

    def _transition(self, new_state: RecordingState) -> None:
        current = self.session.state
        if not RecordingStateMachine.can_transition(current, new_state):
            logger.error(
                f"Invalid recording transition {current} -> {new_state} "
                f"for channel {self.session.channel_name}"
            )
            raise internal_error()
        self.session.state = new_state
        logger.debug(f"Recording {self.session.channel_name}: {current} -> {new_state}")

    def _abort_acquire(self) -> None:
        self.session.uid = None
        self.session.token = None
        self.session.resource_id = None
        self._transition(RecordingState.IDLE)

    async def acquire(self) -> str:
        """Reserve a recording resource and return its resource id."""
        self._transition(RecordingState.ACQUIRING)
        channel_name = self.session.channel_name

        try:
            credential = self._credentials.generate_recorder(channel_name)
        except AppError:
            self._abort_acquire()
            raise internal_error(AppErrorCode.E_ACQUIRE_FAILED)

        self.session.uid = credential.uid
        self.session.token = credential.rtc

        body = AcquireRequest(
            cname=channel_name,
            uid=str(credential.uid),
            client_request=AcquireClientRequest(
                resource_expired_hour=self._cfg.RECORDING_RESOURCE_EXPIRED_HOUR,
            ),
        )
        try:
            response = await self._client.acquire(body)
        except UPSTREAM_ERRORS as e:
            logger.error(f"Acquire failed for channel {channel_name}: {e!r}")
            self._abort_acquire()
            raise internal_error(AppErrorCode.E_ACQUIRE_FAILED) from e

        if not response.resource_id:
            logger.error(f"Acquire response for channel {channel_name} has no resourceId")
            self._abort_acquire()
            raise internal_error(AppErrorCode.E_ACQUIRE_FAILED)

        self.session.resource_id = response.resource_id
        self._transition(RecordingState.ACQUIRED)
        logger.info(f"Acquired recording resource for channel {channel_name}")
        return response.resource_id

    def build_start_request(self, title: str, secret: str | None) -> StartRecordRequest:
        if secret:
            recording_config = RecordingConfig(
                max_idle_time=self._cfg.RECORDING_MAX_IDLE_TIME,
                decryption_mode=1,
                secret=secret,
                transcoding_config=TranscodingConfig(),
            )
        else:
            recording_config = RecordingConfig(
                max_idle_time=self._cfg.RECORDING_MAX_IDLE_TIME,
                transcoding_config=TranscodingConfig(),
            )

        now = self._clock().astimezone(ZoneInfo(self._cfg.RECORDING_TIMEZONE))

        return StartRecordRequest(
            cname=self.session.channel_name,
            uid=str(self.session.uid),
            client_request=StartClientRequest(
                token=self.session.token or "",
                recording_config=recording_config,
                storage_config=StorageConfig(
                    vendor=self._cfg.RECORDING_VENDOR,
                    region=self._cfg.RECORDING_REGION,
                    bucket=self._cfg.BUCKET_NAME,
                    access_key=self._cfg.BUCKET_ACCESS_KEY,
                    secret_key=self._cfg.BUCKET_ACCESS_SECRET,
                    file_name_prefix=[title, now.strftime("%Y%m%d"), now.strftime("%H%M%S")],
                ),
            ),
        )

    async def start(self, title: str, secret: str | None = None) -> ChannelRecording:
        """Start recording on the acquired resource.

        Args:
            title: Sanitized storage file name prefix
            secret: Channel media secret; enables decryption when non-empty

        Returns:
            The resource id / session id / uid triple to persist on the channel

        Raises:
            AppError: E_START_FAILED; the session stays ACQUIRED so start can be retried
        """
        self._transition(RecordingState.STARTING)
        channel_name = self.session.channel_name
        resource_id = self.session.resource_id
        assert resource_id is not None

        body = self.build_start_request(title, secret)
        try:
            response = await self._client.start(resource_id, body)
        except UPSTREAM_ERRORS as e:
            logger.error(f"Start failed for channel {channel_name}: {e!r}")
            self._transition(RecordingState.ACQUIRED)
            raise internal_error(AppErrorCode.E_START_FAILED) from e

        if not response.sid:
            logger.error(f"Start response for channel {channel_name} has no sid")
            self._transition(RecordingState.ACQUIRED)
            raise internal_error(AppErrorCode.E_START_FAILED)

        self.session.session_id = response.sid
        self._transition(RecordingState.RECORDING)
        logger.info(f"Started cloud recording for channel {channel_name}")
        return self.session.to_channel_recording()

    def resume(self, recording: ChannelRecording) -> None:
        self.session.resource_id = recording.resource_id
        self.session.session_id = recording.session_id
        self.session.uid = recording.uid
        self._transition(RecordingState.RECORDING)

    async def stop(self, recording: ChannelRecording | None) -> StopRecordResponse:
        """Stop the recording identified by ``recording``.

        Raises:
            AppError: E_RECORDING_NOT_ACTIVE when no complete triple is given
                (no request is sent), E_UPSTREAM_FAILURE when the call fails
        """
        channel_name = self.session.channel_name
        if recording is None:
            logger.debug(f"Resource id, session id or uid missing for channel {channel_name}")
            raise AppError(
                errcode=AppErrorCode.E_RECORDING_NOT_ACTIVE,
                errmesg=ERRMESG_RECORDING_NOT_STARTED,
                status_code=HttpStatusCode.NOT_FOUND,
            )

        if self.session.state == RecordingState.IDLE:
            self.resume(recording)
        self._transition(RecordingState.STOPPING)

        body = AcquireRequest(
            cname=channel_name,
            uid=str(recording.uid),
            client_request=AcquireClientRequest(),
        )
        try:
            response = await self._client.stop(recording.resource_id, recording.session_id, body)
        except UPSTREAM_ERRORS as e:
            logger.error(f"Stop recording failed for channel {channel_name}: {e!r}")
            self._transition(RecordingState.RECORDING)
            raise internal_error(AppErrorCode.E_UPSTREAM_FAILURE) from e

        logger.info(
            f"Stop cloud recording response for channel {channel_name}: "
            f"{response.model_dump(by_alias=True, exclude_none=True)}"
        )
        self._transition(RecordingState.STOPPED)
        return response
