"""Structural correction primitives used by version correcters.

Every primitive mutates the tree it receives and, unless noted otherwise,
returns it so corrections can be chained.
"""

from collections.abc import Callable, Mapping
from typing import Any

from questvault.json_utils.parsing import coerce_value
from questvault.json_utils.value_tree import JsonDictionary, JsonValue
from questvault.system.event_logger import EventLogger, LogSeverity


def rename_key_if_exists(tree: JsonDictionary, old_key: str, new_key: str) -> JsonDictionary:
    """Move the value stored at ``old_key`` to ``new_key`` if ``old_key`` exists."""
    if old_key in tree:
        tree[new_key] = tree.pop(old_key)
    return tree


def remap_keys_if_exist(tree: JsonDictionary, remappings: Mapping[str, str]) -> JsonDictionary:
    """Rename every existing key of ``remappings`` to its paired value.

    The old keys are expected to be disjoint from the new keys; chained
    renames (``a -> b``, ``b -> c``) depend on mapping order.
    """
    for old_key, new_key in remappings.items():
        rename_key_if_exists(tree, old_key, new_key)
    return tree


def delete_key(tree: JsonDictionary, key: str) -> JsonDictionary:
    """Remove a key if it is present."""
    tree.pop(key, None)
    return tree


def set_value(
    tree: JsonDictionary, key: str, value: JsonValue, only_if_key_exists: bool = False
) -> JsonDictionary:
    """Set ``key`` to ``value``, optionally only when the key already exists."""
    if not only_if_key_exists or key in tree:
        tree[key] = value
    return tree


def set_multiple_values(
    tree: JsonDictionary, values: Mapping[str, JsonValue], only_if_key_exists: bool = False
) -> JsonDictionary:
    """Assign several keys at once.

    Used to fan a single legacy field out into several new fields.
    """
    for key, value in values.items():
        set_value(tree, key, value, only_if_key_exists)
    return tree


def _coerce_for_correction(
    tree: JsonDictionary, key: str, value_type: Any, logger: EventLogger | None
) -> tuple[bool, Any]:
    raw = tree[key]
    if value_type is None:
        return True, raw

    success, value = coerce_value(raw, value_type)
    if not success:
        (logger or EventLogger()).log(
            "Json correction failed",
            f"couldn't convert value at {key!r} to {getattr(value_type, '__name__', value_type)}: {raw!r}",
            LogSeverity.WARN,
        )
    return success, value


def transform_value(
    tree: JsonDictionary,
    key: str,
    transformer: Callable[[Any], tuple[bool, JsonValue]],
    value_type: Any = None,
    logger: EventLogger | None = None,
) -> bool:
    """Replace the value at ``key`` with the transformed version of itself.

    Args:
        tree: The document to correct
        key: Key of the value to transform
        transformer: Receives the (coerced) old value and returns
            ``(success, new_value)``; the value is only replaced on success
        value_type: Optional type the old value is coerced to first
        logger: Logger for coercion failures

    Returns:
        The success flag. An absent key is not a failure and returns True.
    """
    if key not in tree:
        return True

    success, value = _coerce_for_correction(tree, key, value_type, logger)
    if not success:
        return False

    success, new_value = transformer(value)
    if success:
        tree[key] = new_value
    return success


def transform_multiple_values(
    tree: JsonDictionary,
    key: str,
    condition: Callable[[Any], tuple[bool, Any]],
    transformer: Callable[[Any], Mapping[str, JsonValue]],
    value_type: Any = None,
    logger: EventLogger | None = None,
) -> bool:
    """Set several values derived from the value at ``key``.

    ``condition`` receives the (coerced) value and returns ``(success, extra)``.
    When it succeeds, ``transformer(extra)`` supplies the keys to assign.

    Returns:
        The condition's success flag; True when the key is absent.
    """
    if key not in tree:
        return True

    success, value = _coerce_for_correction(tree, key, value_type, logger)
    if not success:
        return False

    success, extra = condition(value)
    if success:
        set_multiple_values(tree, transformer(extra))
    return success
