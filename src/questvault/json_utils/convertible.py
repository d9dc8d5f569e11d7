"""Base class for objects that persist as versioned JSON documents."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar, Self

from questvault.errors import CriticalFieldError
from questvault.json_utils.correcter import CorrectionEntry, JsonDataCorrecter
from questvault.json_utils.parsing import FieldParser, ParseOutcome
from questvault.json_utils.value_tree import JsonDictionary
from questvault.system.event_logger import LogSeverity
from questvault.versioning import compare_versions

__all__ = ["CorrectionEntry", "JsonConvertible"]


class JsonConvertible(ABC):
    """An object that can be rebuilt from a document of any older version.

    Subclasses declare their correction chain as data and implement two
    halves: :meth:`to_json` and the correction-free :meth:`_from_json_fields`.
    The framework runs the chain before the parser.
    """

    json_type_name: ClassVar[str]
    version_correcters: ClassVar[list[CorrectionEntry]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "json_type_name" not in cls.__dict__:
            cls.json_type_name = cls.__name__

        versions = [entry.target_version for entry in cls.version_correcters]
        for previous, current in zip(versions, versions[1:], strict=False):
            if compare_versions(previous, current) > 0:
                raise ValueError(
                    f"{cls.__name__}.version_correcters must be sorted by target version, "
                    f"found {previous!r} before {current!r}"
                )

    @abstractmethod
    def to_json(self) -> JsonDictionary:
        """Serialize the object in the current shape."""

    @classmethod
    @abstractmethod
    def _from_json_fields(cls, fields: FieldParser, file_version: str) -> Self:
        """Build the object from an already corrected document."""

    @classmethod
    def latest_version(cls) -> str | None:
        """Target version of the last correction entry, if any."""
        if not cls.version_correcters:
            return None
        return cls.version_correcters[-1].target_version

    @classmethod
    def from_json(
        cls,
        document: Any,
        file_version: str | None,
        *,
        correcter: JsonDataCorrecter | None = None,
    ) -> ParseOutcome[Self]:
        """Correct a document to the current shape, then parse it.

        The document is corrected in place. A None version is treated as the
        current save version.
        """
        correcter = correcter or JsonDataCorrecter()
        if not isinstance(document, Mapping):
            correcter.logger.log(
                f"{cls.json_type_name} parse error",
                f"{cls.json_type_name.lower()} json is null",
                LogSeverity.ERROR,
            )
            return ParseOutcome(False, None)

        version = file_version if file_version is not None else correcter.save_version
        correcter.correct_json_data(cls.json_type_name, document, cls.version_correcters, version)
        # nested objects run their own chains, so they need the version the file was written with
        return cls.from_json_without_correction(document, version, correcter=correcter)

    @classmethod
    def from_json_without_correction(
        cls,
        document: JsonDictionary,
        file_version: str,
        *,
        correcter: JsonDataCorrecter | None = None,
    ) -> ParseOutcome[Self]:
        """Parse a document that is already in the current shape."""
        correcter = correcter or JsonDataCorrecter()
        fields = FieldParser(cls.json_type_name, document, file_version, correcter)
        try:
            value = cls._from_json_fields(fields, file_version)
        except CriticalFieldError:
            return ParseOutcome(False, None)
        return ParseOutcome(fields.success, value)
