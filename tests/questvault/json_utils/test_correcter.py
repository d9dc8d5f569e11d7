"""Tests for the correction chain driver."""

import copy

import pytest

from questvault.json_utils.correcter import CorrectionEntry, JsonDataCorrecter
from questvault.json_utils.corrections import rename_key_if_exists, set_value


def rename_old_name(tree):
    return rename_key_if_exists(tree, "old_name", "name")


def add_level(tree):
    return set_value(tree, "level", 1)


def double_level(tree):
    tree["level"] = tree.get("level", 0) * 2
    return tree


CHAIN = [
    CorrectionEntry(rename_old_name, "2.0"),
    CorrectionEntry(add_level, "2.1"),
    CorrectionEntry(double_level, "2.2"),
]


@pytest.fixture
def old_correcter(event_logger):
    """Provide a correcter whose current version is 2.2."""
    return JsonDataCorrecter(save_version="2.2", logger=event_logger)


class TestCorrectJsonData:
    """Test JsonDataCorrecter.correct_json_data."""

    def test_rename_example(self, event_logger):
        """Should rename old_name to name for a 1.5 document."""
        correcter = JsonDataCorrecter(save_version="2.0", logger=event_logger)
        document = {"old_name": "x"}

        version = correcter.correct_json_data(
            "Thing", document, [CorrectionEntry(rename_old_name, "2.0")], "1.5"
        )

        assert document == {"name": "x"}
        assert version == "2.0"

    def test_runs_pending_entries_in_order(self, old_correcter):
        """Should apply every entry newer than the document."""
        document = {"old_name": "x"}

        version = old_correcter.correct_json_data("Thing", document, CHAIN, "1.0")

        assert document == {"name": "x", "level": 2}
        assert version == "2.2"

    def test_skips_entries_already_applied(self, old_correcter):
        """Should only run the entries after the document's version."""
        document = {"name": "x", "level": 5}

        version = old_correcter.correct_json_data("Thing", document, CHAIN, "2.1")

        assert document == {"name": "x", "level": 10}
        assert version == "2.2"

    def test_idempotent(self, old_correcter):
        """Should not change a document a second time at the corrected version."""
        document = {"old_name": "x"}
        version = old_correcter.correct_json_data("Thing", document, CHAIN, "1.0")
        corrected = copy.deepcopy(document)

        second_version = old_correcter.correct_json_data("Thing", document, CHAIN, version)

        assert document == corrected
        assert second_version == version

    def test_monotonic(self, old_correcter):
        """Should never report a version older than the input."""
        for file_version in ["1.0", "2.0", "2.0.5", "2.1", "2.2", "2.3"]:
            version = old_correcter.correct_json_data("Thing", {}, CHAIN, file_version)
            assert old_correcter.correct_json_data("Thing", {}, CHAIN, version) == version
            assert version in (file_version, "2.2")

    def test_up_to_date_document_is_untouched(self, old_correcter, capturing_logger):
        """Should do nothing for a document at the current version."""
        document = {"old_name": "x"}

        version = old_correcter.correct_json_data("Thing", document, CHAIN, "2.2")

        assert document == {"old_name": "x"}
        assert version == "2.2"
        assert capturing_logger.calls == []

    def test_empty_chain(self, old_correcter):
        """Should return the input version when the type has no corrections."""
        assert old_correcter.correct_json_data("Thing", {}, [], "1.0") == "1.0"

    def test_last_target_already_satisfied(self, event_logger):
        """Should skip the chain when the document is newer than every entry."""
        correcter = JsonDataCorrecter(save_version="3.0", logger=event_logger)
        document = {"old_name": "x"}

        version = correcter.correct_json_data("Thing", document, CHAIN, "2.5")

        assert document == {"old_name": "x"}
        assert version == "2.5"

    def test_logs_each_step(self, old_correcter, capturing_logger):
        """Should log the start, every step and the end of a correction."""
        old_correcter.correct_json_data("Thing", {"old_name": "x"}, CHAIN, "2.0")

        calls = [(call.method_name, call.args[0], call.kwargs.get("detail")) for call in capturing_logger.calls]
        assert calls == [
            ("info", "Thing json data is old", "version: 2.0"),
            ("debug", "Corrected Thing json data", "2.0 -> 2.1"),
            ("debug", "Corrected Thing json data", "2.1 -> 2.2"),
            ("info", "Thing json data corrected", "version: 2.2"),
        ]


class TestCorrectJsonDataVersion:
    """Test a single correction step."""

    def test_applies_newer_entry(self, old_correcter):
        """Should run the mutator and advance the version."""
        document = {}

        version = old_correcter.correct_json_data_version(
            "Thing", document, CorrectionEntry(add_level, "2.1"), "2.0"
        )

        assert document == {"level": 1}
        assert version == "2.1"

    def test_skips_older_entry(self, old_correcter):
        """Should leave the document and version alone."""
        document = {}

        version = old_correcter.correct_json_data_version(
            "Thing", document, CorrectionEntry(add_level, "2.1"), "2.1"
        )

        assert document == {}
        assert version == "2.1"
