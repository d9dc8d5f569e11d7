"""Test the manage_saves CLI module."""

import json

import pytest
import yaml
from click.testing import CliRunner

from questvault.cli.manage_saves import cli
from questvault.saves.manager import SaveManager
from questvault.system.path_resolver import PathResolver


@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def data_root(tmp_path, monkeypatch):
    """Point the CLI at a temporary data folder."""
    root_dir = tmp_path / "data"
    monkeypatch.setenv("QUESTVAULT_ROOT", str(root_dir))
    return root_dir


@pytest.fixture
def legacy_item_file(tmp_path):
    """Write an item document in the 2.0 format."""
    file_path = tmp_path / "item.json"
    file_path.write_text(json.dumps({"type": 0, "amount": 2}), encoding="utf-8")
    return file_path


class TestCompare:
    """Test the compare command."""

    @pytest.mark.parametrize(
        "version_a,version_b,expected",
        [
            ("2.1.1a", "2.2", "2.1.1a < 2.2"),
            ("2.10", "2.9", "2.10 > 2.9"),
            ("2.0", "2.0", "2.0 == 2.0"),
        ],
    )
    def test_compare(self, runner, data_root, version_a, version_b, expected):
        """Should print how the two versions relate."""
        result = runner.invoke(cli, ["compare", version_a, version_b])

        assert result.exit_code == 0
        assert expected in result.output


class TestConvert:
    """Test the convert command."""

    def test_convert_to_json(self, runner, data_root, legacy_item_file):
        """Should print the corrected document."""
        result = runner.invoke(cli, ["convert", "Item", str(legacy_item_file), "--version", "2.0"])

        assert result.exit_code == 0
        assert '"type": "pa:weapon/sword"' in result.output
        assert '"material": "pa:wood"' in result.output

    def test_convert_to_yaml(self, runner, data_root, legacy_item_file):
        """Should print the corrected document as YAML."""
        result = runner.invoke(cli, ["convert", "Item", str(legacy_item_file), "--version", "2.0", "--yaml"])

        assert result.exit_code == 0
        assert yaml.safe_load(result.output) == {"type": "pa:weapon/sword", "material": "pa:wood", "amount": 2}

    def test_unknown_type(self, runner, data_root, legacy_item_file):
        """Should refuse a type that isn't registered."""
        result = runner.invoke(cli, ["convert", "Spaceship", str(legacy_item_file), "--version", "2.0"])

        assert result.exit_code == 1
        assert "Unknown type: Spaceship" in result.output

    def test_invalid_document(self, runner, data_root, tmp_path):
        """Should fail when the document can't be parsed as the type."""
        file_path = tmp_path / "bad.json"
        file_path.write_text(json.dumps({"amount": 2}), encoding="utf-8")

        result = runner.invoke(cli, ["convert", "Item", str(file_path), "--version", "2.4.1"])

        assert result.exit_code == 1
        assert "not a valid Item" in result.output

    def test_invalid_json(self, runner, data_root, tmp_path):
        """Should fail on a file that isn't JSON."""
        file_path = tmp_path / "bad.json"
        file_path.write_text("{nope", encoding="utf-8")

        result = runner.invoke(cli, ["convert", "Item", str(file_path), "--version", "2.4.1"])

        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_non_utf8_file(self, runner, data_root, tmp_path):
        """Should fail with an error message on a file that isn't UTF-8 text."""
        file_path = tmp_path / "latin1.json"
        file_path.write_bytes('{"name": "Zoë"}'.encode("latin-1"))

        result = runner.invoke(cli, ["convert", "Item", str(file_path), "--version", "2.4.1"])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)


class TestSaves:
    """Test the saves command."""

    def test_no_saves(self, runner, data_root):
        """Should say so when there are no saves."""
        result = runner.invoke(cli, ["saves"])

        assert result.exit_code == 0
        assert "No saves found." in result.output

    def test_lists_saves(self, runner, data_root, save_data):
        """Should print one line per save."""
        SaveManager(PathResolver(data_root)).save(save_data)

        result = runner.invoke(cli, ["saves"])

        assert result.exit_code == 0
        assert "adventure: My Adventure (Ayla), v2.4.1, last saved 2024-05-17 18:30:00" in result.output
        assert "playtime 3:25:00" in result.output


class TestResetConfig:
    """Test the reset-config command."""

    def test_reset_keybinds(self, runner, data_root):
        """Should recreate the keybinds file."""
        result = runner.invoke(cli, ["reset-config", "keybinds"])

        assert result.exit_code == 0
        assert "✓ Recreated" in result.output
        assert (data_root / "configs" / "settings" / "keybinds.json").is_file()

    def test_reset_app_settings(self, runner, data_root):
        """Should recreate the app settings with their defaults."""
        result = runner.invoke(cli, ["reset-config", "app"])

        stored = json.loads((data_root / "configs" / "settings" / "app.json").read_text())
        assert result.exit_code == 0
        assert stored["version"] == "v4"
        assert stored["data"]["auto_save"] is True

    def test_unknown_config(self, runner, data_root):
        """Should only accept known config names."""
        result = runner.invoke(cli, ["reset-config", "graphics"])

        assert result.exit_code != 0
