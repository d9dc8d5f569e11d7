"""In-memory JSON document trees.

A tree is a plain ``dict`` whose values are JSON scalars, lists or nested
dicts. Documents are owned by a single load or save call: they are parsed,
mutated in place by the correction chain and discarded once the object is
built.
"""

import json
from typing import Any, TypeAlias

from questvault.errors import ValueTreeError

JsonValue: TypeAlias = None | bool | int | float | str | list["JsonValue"] | dict[str, "JsonValue"]
JsonDictionary: TypeAlias = dict[str, JsonValue]

_SCALAR_TYPES = (type(None), bool, int, float, str)


def is_json_value(value: Any) -> bool:
    """Check whether a value can appear in a tree (shallow check)."""
    return isinstance(value, (*_SCALAR_TYPES, list, dict))


def validate_tree(tree: Any) -> JsonDictionary:
    """Validate that ``tree`` is a well-formed, acyclic document.

    Args:
        tree: The candidate document

    Returns:
        The same object, for chaining

    Raises:
        ValueTreeError: If the top level is not a dict, a key is not a string,
            a value has an unsupported type, or a container contains itself
    """
    if not isinstance(tree, dict):
        raise ValueTreeError(f"Document must be an object, got {type(tree).__name__}")
    _validate_node(tree, path="$", ancestors=set())
    return tree


def _validate_node(node: Any, path: str, ancestors: set[int]) -> None:
    if not is_json_value(node):
        raise ValueTreeError(f"Unsupported value of type {type(node).__name__} at {path}")
    if isinstance(node, _SCALAR_TYPES):
        return

    node_id = id(node)
    if node_id in ancestors:
        raise ValueTreeError(f"Cycle detected at {path}")
    ancestors.add(node_id)
    try:
        if isinstance(node, dict):
            for key, value in node.items():
                if not isinstance(key, str):
                    raise ValueTreeError(f"Non-string key {key!r} at {path}")
                _validate_node(value, f"{path}.{key}", ancestors)
        else:
            for index, value in enumerate(node):
                _validate_node(value, f"{path}[{index}]", ancestors)
    finally:
        ancestors.discard(node_id)


def parse_tree(text: str) -> JsonDictionary:
    """Parse a JSON object from text.

    Raises:
        ValueTreeError: If the text is not JSON or the top level is not an object
    """
    try:
        tree = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueTreeError(f"Invalid JSON: {e}") from e
    if not isinstance(tree, dict):
        raise ValueTreeError(f"Document must be an object, got {type(tree).__name__}")
    return tree


def dump_tree(tree: JsonDictionary, indent: int | None = None) -> str:
    """Serialize a document.

    Compact single-line output is used for save files, indented output for
    config files.
    """
    if indent is None:
        return json.dumps(tree, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(tree, ensure_ascii=False, indent=indent)
