"""Versioned config file management with single-shot recovery."""

import json
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from pydantic_core import to_jsonable_python

from questvault import constants
from questvault.config.models import ConfigEnvelope
from questvault.errors import ConfigStructureError, ConfigVersionError
from questvault.json_utils.parsing import type_adapter
from questvault.json_utils.value_tree import dump_tree, validate_tree
from questvault.system.event_logger import EventLogger, LogSeverity


class ConfigManager:
    """Reads and writes config files wrapped in a ``{version, data}`` envelope.

    Config files live in ``<parent>/<folder>/<name>.<ext>``; names may contain
    ``/`` to place a config in a namespaced sub-folder. No migration chain is
    run here: a file with the wrong version is simply rejected, and the
    ``try_get_*`` methods recreate it from a default.
    """

    def __init__(
        self,
        configs_folder_parent: Path | str,
        configs_folder_name: str = constants.CONFIGS_FOLDER,
        config_extension: str = constants.CONFIG_EXT,
        config_version: str | None = None,
        logger: EventLogger | None = None,
    ):
        """Initialize ConfigManager.

        Args:
            configs_folder_parent: Existing folder the configs folder lives in
            configs_folder_name: Name of the configs folder
            config_extension: File extension of config files
            config_version: Version written into, and expected from, every file.
                If None, stored versions are not checked.
            logger: Logger for recovery records. If None, a default EventLogger is used.

        Raises:
            FileNotFoundError: If ``configs_folder_parent`` does not exist
        """
        self.configs_folder_parent = Path(configs_folder_parent)
        if not self.configs_folder_parent.is_dir():
            raise FileNotFoundError(f"Configs folder parent not found: {self.configs_folder_parent}")
        self.configs_folder = self.configs_folder_parent / configs_folder_name
        self.config_extension = config_extension
        self.config_version = config_version
        self.logger = logger or EventLogger()

    def _ensure_folder(self, folder: Path, display_name: str) -> None:
        if not folder.is_dir():
            folder.mkdir(parents=True, exist_ok=True)
            self.logger.log(
                f"Recreating {display_name} folder", f"folder path: {self._safe_path(folder)}"
            )

    def _safe_path(self, path: Path) -> str:
        """Path relative to the configs folder parent, for log and error messages."""
        return str(path.relative_to(self.configs_folder_parent))

    def get_config_file_path(self, config_name: str) -> Path:
        """Get the full path of a config file, recreating the configs folder if needed."""
        self._ensure_folder(self.configs_folder, "configs")
        return self.configs_folder / f"{config_name}.{self.config_extension}"

    def config_file_exists(self, config_name: str) -> bool:
        """Check whether a config file exists."""
        return self.get_config_file_path(config_name).is_file()

    def _read_envelope(self, config_name: str) -> tuple[Path, ConfigEnvelope]:
        file_path = self.get_config_file_path(config_name)
        safe_path = self._safe_path(file_path)
        text = file_path.read_text(encoding="utf-8")

        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigStructureError(
                f'Invalid JSON in "{safe_path}": {e}', file_path=safe_path
            ) from e

        if not isinstance(raw, dict):
            raise ConfigStructureError(
                f'The config json is not an object in "{safe_path}".', file_path=safe_path
            )
        try:
            envelope = ConfigEnvelope.model_validate(raw)
        except ValidationError as e:
            raise ConfigStructureError(
                f'Incorrect config file structure in "{safe_path}".', file_path=safe_path
            ) from e

        if self.config_version is not None and envelope.version != self.config_version:
            raise ConfigVersionError(
                f'Incorrect config file version in "{safe_path}" '
                f"({self.config_version} => {envelope.version or '[NULL]'}).",
                file_path=safe_path,
                expected_version=self.config_version,
                found_version=envelope.version,
            )
        return file_path, envelope

    def get_config(self, config_name: str, value_type: Any) -> Any:
        """Read a config file and deserialize its data.

        Args:
            config_name: Name of the config file
            value_type: Type of the data, anything a pydantic ``TypeAdapter`` accepts

        Raises:
            FileNotFoundError: If the file doesn't exist
            ConfigStructureError: If the file is not a valid envelope or the data
                doesn't match ``value_type``
            ConfigVersionError: If the stored version differs from the configured one
        """
        file_path, envelope = self._read_envelope(config_name)
        try:
            return type_adapter(value_type).validate_python(envelope.data)
        except ValidationError as e:
            safe_path = self._safe_path(file_path)
            raise ConfigStructureError(
                f'Config data in "{safe_path}" is not a valid {getattr(value_type, "__name__", value_type)}.',
                file_path=safe_path,
            ) from e

    def get_config_dict(
        self,
        config_name: str,
        key_deserializer: Callable[[str], Any],
        value_type: Any,
    ) -> dict[Any, Any]:
        """Read a dictionary config whose keys are not plain JSON strings."""
        data = self.get_config(config_name, dict[str, value_type])
        return {key_deserializer(key): value for key, value in data.items()}

    def _warn_config_error(self, config_name: str, error: Exception) -> None:
        if isinstance(error, FileNotFoundError):
            message = f"File not found: {self._safe_path(self.get_config_file_path(config_name))}"
        else:
            message = str(error)
        self.logger.log("Config file error", message, LogSeverity.WARN)

    def try_get_config(
        self,
        config_name: str,
        value_type: Any,
        default: Any,
        just_recreate: bool = False,
    ) -> Any:
        """Read a config, recreating it from ``default`` if reading fails.

        After recreation the config is read exactly once more; a second
        failure propagates.

        Args:
            just_recreate: Skip the first read and recreate the file straight away
        """
        if not just_recreate:
            try:
                return self.get_config(config_name, value_type)
            except Exception as e:
                self._warn_config_error(config_name, e)
        self.set_config(config_name, default)
        return self.get_config(config_name, value_type)

    def try_get_config_dict(
        self,
        config_name: str,
        default: Mapping[Any, Any],
        key_serializer: Callable[[Any], str],
        key_deserializer: Callable[[str], Any],
        value_type: Any,
        just_recreate: bool = False,
    ) -> dict[Any, Any]:
        """Dictionary variant of :meth:`try_get_config`."""
        if not just_recreate:
            try:
                return self.get_config_dict(config_name, key_deserializer, value_type)
            except Exception as e:
                self._warn_config_error(config_name, e)
        self.set_config_dict(config_name, default, key_serializer)
        return self.get_config_dict(config_name, key_deserializer, value_type)

    def set_config(self, config_name: str, data: Any) -> None:
        """Write a config file wholesale, wrapped in the version envelope."""
        file_path = self.get_config_file_path(config_name)
        if file_path.parent != self.configs_folder:
            self._ensure_folder(file_path.parent, f"{file_path.parent.name} config")

        envelope = validate_tree({"version": self.config_version, "data": to_jsonable_python(data)})
        text = dump_tree(envelope, indent=4)

        temp_path = file_path.with_name(f"{file_path.name}.tmp")
        try:
            temp_path.write_text(text, encoding="utf-8")
            os.replace(temp_path, file_path)
        finally:
            temp_path.unlink(missing_ok=True)
        self.logger.log("Config file recreated", f"file path: {self._safe_path(file_path)}")

    def set_config_dict(
        self,
        config_name: str,
        data: Mapping[Any, Any],
        key_serializer: Callable[[Any], str],
    ) -> None:
        """Write a dictionary config whose keys are not plain JSON strings."""
        self.set_config(config_name, {key_serializer(key): value for key, value in data.items()})
