"""Tests for save display data."""

from datetime import datetime, timedelta

from questvault import constants
from questvault.models.display_save_data import DisplaySaveData


class TestDisplaySaveData:
    """Test DisplaySaveData creation and serialization."""

    def test_from_save_data(self, save_data):
        """Should copy the listed fields and stamp the current version."""
        display = DisplaySaveData.from_save_data(save_data)

        assert display == DisplaySaveData(
            save_version=constants.SAVE_VERSION,
            display_name="My Adventure",
            last_save=datetime(2024, 5, 17, 18, 30, 0),
            playtime=timedelta(hours=3, minutes=25),
            player_name="Ayla",
        )

    def test_round_trip(self, save_data, correcter):
        """Should rebuild equal display data."""
        display = DisplaySaveData.from_save_data(save_data)

        outcome = DisplaySaveData.from_json(display.to_json(), constants.SAVE_VERSION, correcter=correcter)

        assert outcome.success is True
        assert outcome.value == display

    def test_dates_are_iso_strings(self, save_data):
        """Should store dates as ISO 8601 strings."""
        document = DisplaySaveData.from_save_data(save_data).to_json()

        assert document["last_save"] == "2024-05-17T18:30:00"
        assert document["playtime"].startswith("P")

    def test_from_2_1_camel_case(self, correcter):
        """Should rename camelCase keys from before 2.2."""
        document = {
            "saveVersion": "2.1",
            "displayName": "Old",
            "lastSave": "2020-01-02T03:04:05",
            "playtime": "PT1H",
            "playerName": "Bob",
        }

        outcome = DisplaySaveData.from_json(document, "2.1", correcter=correcter)

        assert outcome.success is True
        assert outcome.value.save_version == "2.1"
        assert outcome.value.display_name == "Old"
        assert outcome.value.player_name == "Bob"
        assert outcome.value.last_save == datetime(2020, 1, 2, 3, 4, 5)

    def test_missing_version_uses_file_version(self, correcter):
        """Should fall back to the version the document was read with."""
        outcome = DisplaySaveData.from_json({"display_name": "x"}, "2.3", correcter=correcter)

        assert outcome.success is False
        assert outcome.value.save_version == "2.3"
