"""Field-by-field parsing of corrected documents.

:class:`FieldParser` is the accumulator every convertible type pulls its
fields through. Each field is parsed independently and its outcome recorded,
so one bad field never hides the others. Non-critical failures fall back to a
default; critical failures abort the object.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError

from questvault.errors import CriticalFieldError, JsonParseError
from questvault.system.event_logger import EventLogger, LogSeverity

if TYPE_CHECKING:
    from questvault.json_utils.correcter import JsonDataCorrecter
    from questvault.json_utils.convertible import JsonConvertible
    from questvault.json_utils.value_tree import JsonDictionary

T = TypeVar("T")


@dataclass(frozen=True)
class ParseOutcome(Generic[T]):
    """Result of turning a document into an object.

    ``success`` is False as soon as any field fell back to its default.
    ``value`` is None when a critical field failed and no object exists.
    """

    success: bool
    value: T | None = None

    def unwrap(self) -> T:
        """Return the parsed value or raise if there is none."""
        if self.value is None:
            raise JsonParseError("Parsing failed: no value was produced")
        return self.value


@functools.lru_cache(maxsize=256)
def type_adapter(value_type: Any) -> TypeAdapter:
    return TypeAdapter(value_type)


def coerce_value(raw: Any, value_type: Any) -> tuple[bool, Any]:
    """Coerce a raw JSON value into ``value_type``.

    Returns:
        ``(True, value)`` on success, ``(False, None)`` otherwise
    """
    try:
        return True, type_adapter(value_type).validate_python(raw)
    except ValidationError:
        return False, None


def _type_label(value_type: Any) -> str:
    return getattr(value_type, "__name__", str(value_type))


class FieldParser:
    """Accumulates the outcome of every field parsed for one object."""

    def __init__(
        self,
        type_name: str,
        document: JsonDictionary,
        file_version: str,
        correcter: JsonDataCorrecter,
        logger: EventLogger | None = None,
    ):
        self.type_name = type_name
        self.document = document
        self.file_version = file_version
        self.correcter = correcter
        self.logger = logger or correcter.logger
        self._outcomes: list[bool] = []

    @property
    def success(self) -> bool:
        """Whether every recorded field parsed without falling back."""
        return all(self._outcomes)

    def _failed(self, field_name: str, message: str, critical: bool) -> None:
        self._outcomes.append(False)
        if critical:
            self.logger.log(f"{self.type_name} parse error", message, LogSeverity.ERROR)
            raise CriticalFieldError(self.type_name, field_name, message)
        self.logger.log(f"{self.type_name} parse warning", message, LogSeverity.WARN)

    def _raw(self, key: str, critical: bool, allow_null: bool = False) -> tuple[bool, Any]:
        if key not in self.document:
            self._failed(key, f"{key!r} is missing", critical)
            return False, None
        raw = self.document[key]
        if raw is None and not allow_null:
            self._failed(key, f"{key!r} is null", critical)
            return False, None
        return True, raw

    def value(
        self,
        key: str,
        value_type: Any,
        *,
        default: Any = None,
        critical: bool = False,
        allow_null: bool = False,
    ) -> Any:
        """Parse a plain value.

        Args:
            key: Field key in the document
            value_type: Any type a pydantic ``TypeAdapter`` accepts
            default: Returned when the field is missing or invalid
            critical: Whether the object cannot exist without this field
            allow_null: Whether an explicit null is a valid value
        """
        found, raw = self._raw(key, critical, allow_null)
        if not found:
            return default
        if raw is None:
            self._outcomes.append(True)
            return None

        success, value = coerce_value(raw, value_type)
        if not success:
            self._failed(
                key, f"couldn't parse {key!r} as {_type_label(value_type)}: {raw!r}", critical
            )
            return default
        self._outcomes.append(True)
        return value

    def convertible(
        self,
        key: str,
        cls: type[JsonConvertible],
        *,
        default: Any = None,
        critical: bool = False,
    ) -> Any:
        """Parse a nested convertible object with the same correcter and file version."""
        found, raw = self._raw(key, critical)
        if not found:
            return default

        outcome = cls.from_json(raw, self.file_version, correcter=self.correcter)
        if outcome.value is None:
            self._failed(key, f"couldn't parse {key!r} as {cls.json_type_name}", critical)
            return default
        self._outcomes.append(outcome.success)
        return outcome.value

    def convertible_list(
        self,
        key: str,
        cls: type[JsonConvertible],
        *,
        critical: bool = False,
    ) -> list:
        """Parse a list of nested objects, skipping the elements that fail."""
        found, raw = self._raw(key, critical)
        if not found:
            return []
        if not isinstance(raw, list):
            self._failed(key, f"{key!r} is not a list: {raw!r}", critical)
            return []

        values = []
        for index, element in enumerate(raw):
            outcome = cls.from_json(element, self.file_version, correcter=self.correcter)
            if outcome.value is None:
                self._failed(
                    key, f"skipped element {index} of {key!r}: not a valid {cls.json_type_name}", False
                )
                continue
            self._outcomes.append(outcome.success)
            values.append(outcome.value)
        return values

    def custom(
        self,
        key: str,
        parse: Callable[[Any], tuple[bool, Any]],
        *,
        default: Any = None,
        critical: bool = False,
    ) -> Any:
        """Parse a field with a type-specific function returning ``(success, value)``."""
        found, raw = self._raw(key, critical)
        if not found:
            return default

        success, value = parse(raw)
        if not success:
            self._failed(key, f"couldn't parse {key!r}: {raw!r}", critical)
            return default
        self._outcomes.append(True)
        return value

    def fail(self, message: str, *, critical: bool = False, field_name: str = "") -> None:
        """Record a failure the type found itself, e.g. a value out of range."""
        self._failed(field_name, message, critical)
