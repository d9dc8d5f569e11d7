"""Exception taxonomy for config, document and save handling."""

from pathlib import Path


class ConfigError(Exception):
    """Base class for config file errors."""

    def __init__(self, message: str, file_path: Path | str | None = None):
        super().__init__(message)
        self.file_path = file_path


class ConfigStructureError(ConfigError):
    """Raised when a config file is not a well-formed ``{version, data}`` envelope."""


class ConfigVersionError(ConfigError):
    """Raised when a config file was written with a different version than expected."""

    def __init__(
        self,
        message: str,
        file_path: Path | str | None = None,
        expected_version: str | None = None,
        found_version: str | None = None,
    ):
        super().__init__(message, file_path)
        self.expected_version = expected_version
        self.found_version = found_version


class ValueTreeError(ValueError):
    """Raised when a value is not a valid JSON document tree."""


class JsonParseError(ValueError):
    """Raised when a document could not be turned into an object."""


class CriticalFieldError(JsonParseError):
    """Raised when a field the object cannot exist without is missing or malformed."""

    def __init__(self, type_name: str, field_name: str, message: str):
        super().__init__(f"{type_name}: {message}")
        self.type_name = type_name
        self.field_name = field_name


class SaveError(Exception):
    """Base class for save folder errors."""


class SaveVersionError(SaveError):
    """Raised when a save's version is missing or too old to be corrected."""
