"""Request/response bodies of the cloud recording REST API.

Field aliases are the wire names of the external service and must not change.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, serialize_by_alias=True, extra="ignore")


class AcquireClientRequest(_WireModel):
    resource_expired_hour: int | None = Field(default=None, alias="resourceExpiredHour")


class AcquireRequest(_WireModel):
    """Body of ``acquire``; also used (with an empty client request) for ``stop``."""

    cname: str
    uid: str
    client_request: AcquireClientRequest = Field(
        default_factory=AcquireClientRequest, alias="clientRequest"
    )


class TranscodingConfig(_WireModel):
    height: int = 720
    width: int = 1280
    bitrate: int = 2260
    fps: int = 15
    mixed_video_layout: int = Field(default=1, alias="mixedVideoLayout")
    background_color: str = Field(default="#000000", alias="backgroundColor")


class RecordingConfig(_WireModel):
    max_idle_time: int = Field(default=30, alias="maxIdleTime")
    stream_types: int = Field(default=2, alias="streamTypes")
    channel_type: int = Field(default=1, alias="channelType")
    decryption_mode: int | None = Field(default=None, alias="decryptionMode")
    secret: str | None = None
    transcoding_config: TranscodingConfig = Field(
        default_factory=TranscodingConfig, alias="transcodingConfig"
    )


class StorageConfig(_WireModel):
    vendor: int
    region: int
    bucket: str
    access_key: str = Field(alias="accessKey")
    secret_key: str = Field(alias="secretKey")
    file_name_prefix: list[str] = Field(alias="fileNamePrefix")


class StartClientRequest(_WireModel):
    token: str
    recording_config: RecordingConfig = Field(alias="recordingConfig")
    storage_config: StorageConfig = Field(alias="storageConfig")


class StartRecordRequest(_WireModel):
    cname: str
    uid: str
    client_request: StartClientRequest = Field(alias="clientRequest")


class AcquireResponse(_WireModel):
    resource_id: str | None = Field(default=None, alias="resourceId")


class StartRecordResponse(_WireModel):
    resource_id: str | None = Field(default=None, alias="resourceId")
    sid: str | None = None


class StopRecordResponse(_WireModel):
    resource_id: str | None = Field(default=None, alias="resourceId")
    sid: str | None = None
    server_response: dict[str, Any] | None = Field(default=None, alias="serverResponse")


def to_wire(body: BaseModel) -> dict[str, Any]:
    """Serialize with wire aliases, leaving out unset optional fields."""
    return body.model_dump(by_alias=True, exclude_none=True)
