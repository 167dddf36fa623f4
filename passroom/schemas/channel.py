"""Channel ODM schema and its plain record counterpart."""

from datetime import datetime
from typing import Any

from beanie import Document, Indexed
from pydantic import BaseModel, Field, field_validator

from .schema_utils import parse_mongo_datetime, parse_recording_triple


class ChannelRecording(BaseModel):
    """Identifiers of an active cloud recording, always stored together."""

    resource_id: str = Field(min_length=1)
    session_id: str = Field(min_length=1)
    uid: int = Field(gt=0)


class ChannelRecord(BaseModel):
    """Channel data as seen by the domain layer, detached from the ODM."""

    channel_id: str
    title: str
    channel_name: str
    channel_secret: str
    host_passphrase: str
    viewer_passphrase: str
    dtmf: str | None = None
    recording: ChannelRecording | None = None
    created_at: datetime
    updated_at: datetime

    @field_validator("recording", mode="before")
    @classmethod
    def _parse_recording(cls, v: Any) -> Any:
        return parse_recording_triple(v)


class Channel(Document):
    """Channel document model."""

    channel_id: Indexed(str, unique=True)  # type: ignore[valid-type]
    title: str
    channel_name: Indexed(str, unique=True)  # type: ignore[valid-type]
    channel_secret: str
    host_passphrase: Indexed(str, unique=True)  # type: ignore[valid-type]
    viewer_passphrase: Indexed(str, unique=True)  # type: ignore[valid-type]

    # Phone dial-in code, only set when PSTN was requested at creation
    dtmf: str | None = None

    recording: ChannelRecording | None = None

    created_at: datetime
    updated_at: datetime

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _parse_datetime(cls, v: Any) -> Any:
        """Parse MongoDB Extended JSON datetime format."""
        return parse_mongo_datetime(v)

    @field_validator("recording", mode="before")
    @classmethod
    def _parse_recording(cls, v: Any) -> Any:
        return parse_recording_triple(v)

    def to_record(self) -> ChannelRecord:
        return ChannelRecord.model_validate(self.model_dump(exclude={"id", "revision_id"}))

    @classmethod
    def from_record(cls, record: ChannelRecord) -> "Channel":
        return cls(**record.model_dump())

    class Settings:
        name = "channel"
