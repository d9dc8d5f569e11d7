"""Version string comparison.

The comparator in this package decides whether a stored document needs
migrating and whether a correction chain has already reached its target.
"""

from .comparator import compare_versions, first_char_or_int, is_up_to_date, version_sort_key

__all__ = [
    "compare_versions",
    "first_char_or_int",
    "is_up_to_date",
    "version_sort_key",
]
