"""Tests for recording models and title sanitization."""

import pytest

from passroom.domain.live.recording.recording_models import (
    TITLE_MAX_LENGTH,
    RecordingSession,
    sanitize_title,
)


class TestSanitizeTitle:
    def test_strips_non_alphanumerics(self):
        assert sanitize_title("My Channel! #1") == "MyChannel1"

    def test_truncates_to_max_length(self):
        title = ("Room-7 " * 25)[:150]
        assert len(title) == 150

        result = sanitize_title(title)

        assert len(result) == TITLE_MAX_LENGTH == 100
        assert result.isalnum()

    def test_long_alphanumeric_title(self):
        assert sanitize_title("x" * 150) == "x" * 100

    @pytest.mark.parametrize("title", ["", "!!!", "   ", "日本語"])
    def test_nothing_left(self, title):
        assert sanitize_title(title) == ""

    def test_keeps_ascii_only(self):
        assert sanitize_title("Café Ünïcode 42") == "Cafncode42"


class TestRecordingSession:
    def test_to_channel_recording(self):
        session = RecordingSession(
            channel_name="room", uid=42, resource_id="R1", session_id="S1"
        )

        recording = session.to_channel_recording()

        assert recording.resource_id == "R1"
        assert recording.session_id == "S1"
        assert recording.uid == 42
