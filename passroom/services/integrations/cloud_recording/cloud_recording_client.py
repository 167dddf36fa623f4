import httpx
from loguru import logger

from passroom.app_config import AppEnvironConfig
from passroom.services.integrations.cloud_recording.cloud_recording_schemas import (
    AcquireRequest,
    AcquireResponse,
    StartRecordRequest,
    StartRecordResponse,
    StopRecordResponse,
    to_wire,
)


class CloudRecordingClient:
    """HTTP client for the cloud recording acquire/start/stop endpoints.

    Calls are made once with a bounded timeout and never retried: acquire and
    start are not idempotent on the service side. Transport and HTTP errors
    propagate as ``httpx`` exceptions.
    """

    def __init__(
        self,
        base_url: str,
        app_id: str,
        customer_id: str | None,
        customer_certificate: str | None,
        timeout: float = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.app_id = app_id
        self._auth = (
            httpx.BasicAuth(customer_id, customer_certificate)
            if customer_id and customer_certificate
            else None
        )
        self._timeout = timeout
        self._transport = transport

    @classmethod
    def from_config(
        cls,
        cfg: AppEnvironConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CloudRecordingClient":
        return cls(
            base_url=cfg.CLOUD_RECORDING_BASE_URL,
            app_id=cfg.RTC_APP_ID or "",
            customer_id=cfg.CLOUD_RECORDING_CUSTOMER_ID,
            customer_certificate=cfg.CLOUD_RECORDING_CUSTOMER_CERTIFICATE,
            timeout=cfg.CLOUD_RECORDING_TIMEOUT_SECONDS,
            transport=transport,
        )

    def _url(self, path: str) -> str:
        return f"{self.base_url}/v1/apps/{self.app_id}/cloud_recording/{path}"

    async def _post(self, path: str, body: dict) -> dict:
        async with httpx.AsyncClient(transport=self._transport, auth=self._auth) as client:
            response = await client.post(
                self._url(path),
                json=body,
                headers={"Content-Type": "application/json"},
                timeout=self._timeout,
            )
            response.raise_for_status()
            return response.json()

    async def acquire(self, body: AcquireRequest) -> AcquireResponse:
        """Reserve a recording resource for a channel."""
        data = await self._post("acquire", to_wire(body))
        logger.debug(f"acquire response: {data}")
        return AcquireResponse.model_validate(data)

    async def start(self, resource_id: str, body: StartRecordRequest) -> StartRecordResponse:
        """Start a mixed-mode recording on an acquired resource."""
        data = await self._post(f"resourceid/{resource_id}/mode/mix/start", to_wire(body))
        logger.debug(f"start response: {data}")
        return StartRecordResponse.model_validate(data)

    async def stop(
        self, resource_id: str, session_id: str, body: AcquireRequest
    ) -> StopRecordResponse:
        """Stop a running recording and return the upload status reported by the service."""
        data = await self._post(
            f"resourceid/{resource_id}/sid/{session_id}/mode/mix/stop", to_wire(body)
        )
        return StopRecordResponse.model_validate(data)
