"""Tests for channel schema validation."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from passroom.schemas import ChannelRecording
from passroom.schemas.schema_utils import parse_mongo_datetime, parse_recording_triple
from tests.fixtures.channel_fixtures import make_channel


class TestParseRecordingTriple:
    def test_complete_triple_kept(self):
        value = {"resource_id": "R1", "session_id": "S1", "uid": 42}

        assert parse_recording_triple(value) == value

    @pytest.mark.parametrize(
        "value",
        [
            {"resource_id": "R1", "session_id": "S1"},
            {"resource_id": "", "session_id": "S1", "uid": 42},
            {"resource_id": "R1", "session_id": "S1", "uid": 0},
            {"resource_id": "R1", "session_id": None, "uid": 42},
        ],
    )
    def test_partial_triple_dropped(self, value):
        assert parse_recording_triple(value) is None

    def test_non_dict_passes_through(self):
        recording = ChannelRecording(resource_id="R1", session_id="S1", uid=1)

        assert parse_recording_triple(recording) is recording
        assert parse_recording_triple(None) is None


class TestChannelRecording:
    @pytest.mark.parametrize(
        "data",
        [
            {"resource_id": "", "session_id": "S1", "uid": 1},
            {"resource_id": "R1", "session_id": "", "uid": 1},
            {"resource_id": "R1", "session_id": "S1", "uid": 0},
        ],
    )
    def test_rejects_incomplete_values(self, data):
        with pytest.raises(ValidationError):
            ChannelRecording(**data)


class TestChannelRecord:
    def test_partial_recording_becomes_none(self):
        channel = make_channel(recording={"resource_id": "R1", "uid": 7})

        assert channel.recording is None

    def test_complete_recording_is_parsed(self):
        channel = make_channel(recording={"resource_id": "R1", "session_id": "S1", "uid": 7})

        assert channel.recording == ChannelRecording(resource_id="R1", session_id="S1", uid=7)


class TestParseMongoDatetime:
    def test_extended_json(self):
        parsed = parse_mongo_datetime({"$date": "2024-11-01T08:00:00Z"})

        assert parsed == datetime(2024, 11, 1, 8, 0, tzinfo=timezone.utc)

    def test_datetime_passes_through(self):
        now = datetime.now(timezone.utc)

        assert parse_mongo_datetime(now) is now
