"""Dotted version string comparison with mixed numeric/alphabetic segments."""

import functools


def _parse_int(text: str) -> int | None:
    """Return the integer value of a component, or None if it is not a plain number."""
    if text and text.isascii() and text.isdigit():
        return int(text)
    return None


def first_char_or_int(text: str) -> tuple[bool, str, str]:
    """Split the first token off a version component.

    The token is either the maximal leading run of digits or a single
    non-digit character.

    Args:
        text: The remaining part of the version component.

    Returns:
        tuple: (is_int, token, rest). For an empty string the token is empty.
    """
    if not text:
        return False, "", ""

    end = 0
    while end < len(text) and text[end].isascii() and text[end].isdigit():
        end += 1

    if end == 0:
        return False, text[0], text[1:]
    return True, text[:end], text[end:]


def _compare_tokens(current_is_int: bool, current: str, minimum_is_int: bool, minimum: str) -> int:
    if current_is_int and minimum_is_int:
        current_value, minimum_value = int(current), int(minimum)
        return (current_value > minimum_value) - (current_value < minimum_value)
    if current_is_int != minimum_is_int:
        # numbers outrank letters
        return 1 if current_is_int else -1
    return (current > minimum) - (current < minimum)


def _compare_alphanumeric(current: str, minimum: str) -> int:
    """Compare two components that are not both plain numbers, token by token."""
    while current or minimum:
        if not current:
            return -1
        if not minimum:
            return 1

        current_is_int, current_token, current = first_char_or_int(current)
        minimum_is_int, minimum_token, minimum = first_char_or_int(minimum)
        if current_token == minimum_token:
            continue

        result = _compare_tokens(current_is_int, current_token, minimum_is_int, minimum_token)
        if result != 0:
            return result
    return 0


def _compare_components(current: str, minimum: str) -> int:
    if current == minimum:
        return 0

    current_int = _parse_int(current)
    minimum_int = _parse_int(minimum)
    if current_int is not None and minimum_int is not None:
        return (current_int > minimum_int) - (current_int < minimum_int)
    if (current_int is None) != (minimum_int is None):
        return 1 if current_int is not None else -1
    return _compare_alphanumeric(current, minimum)


def compare_versions(current_version: str, minimum_version: str) -> int:
    """Compare two version strings.

    Args:
        current_version: The version being checked.
        minimum_version: The version it is compared against.

    Returns:
        int: 1 if current is newer, -1 if it is older, 0 if they are equal.
    """
    if current_version == minimum_version:
        return 0

    current_parts = current_version.split(".")
    minimum_parts = minimum_version.split(".")

    for current_part, minimum_part in zip(current_parts, minimum_parts, strict=False):
        result = _compare_components(current_part, minimum_part)
        if result != 0:
            return result

    # No difference in the shared prefix: the more specific version wins
    return (len(current_parts) > len(minimum_parts)) - (len(current_parts) < len(minimum_parts))


def is_up_to_date(minimum_version: str, current_version: str) -> bool:
    """Return whether the current version is equal to or newer than the minimum version.

    Args:
        minimum_version: The minimum version number to qualify for being up to date.
        current_version: The version number to check.

    Returns:
        bool: True if ``current_version >= minimum_version``.
    """
    return compare_versions(current_version, minimum_version) >= 0


version_sort_key = functools.cmp_to_key(compare_versions)
