"""Versioned JSON documents: trees, corrections, parsing and the convertible contract."""

from questvault.json_utils.convertible import JsonConvertible
from questvault.json_utils.correcter import CorrectionEntry, JsonDataCorrecter
from questvault.json_utils.parsing import FieldParser, ParseOutcome
from questvault.json_utils.value_tree import JsonDictionary, JsonValue

__all__ = [
    "CorrectionEntry",
    "FieldParser",
    "JsonConvertible",
    "JsonDataCorrecter",
    "JsonDictionary",
    "JsonValue",
    "ParseOutcome",
]
