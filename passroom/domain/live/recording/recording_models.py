"""Recording domain models."""

import re

from pydantic import BaseModel

from passroom.schemas import ChannelRecording

from .recording_state_machine import RecordingState

TITLE_MAX_LENGTH = 100

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")


def sanitize_title(title: str) -> str:
    """Storage-safe file name prefix: ASCII letters and digits only, at most 100 chars."""
    return _NON_ALNUM.sub("", title)[:TITLE_MAX_LENGTH]


class RecordingSession(BaseModel):
    """Per-request state of one recording attempt."""

    channel_name: str
    state: RecordingState = RecordingState.IDLE
    uid: int | None = None
    token: str | None = None
    resource_id: str | None = None
    session_id: str | None = None

    def to_channel_recording(self) -> ChannelRecording:
        assert self.resource_id and self.session_id and self.uid
        return ChannelRecording(
            resource_id=self.resource_id,
            session_id=self.session_id,
            uid=self.uid,
        )
