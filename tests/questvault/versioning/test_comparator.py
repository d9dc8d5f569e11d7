"""Tests for version string comparison."""

import itertools

import pytest

from questvault.versioning import compare_versions, first_char_or_int, is_up_to_date, version_sort_key

SAMPLE_VERSIONS = [
    "1",
    "1.0",
    "2.0",
    "2.0.1",
    "2.0.2",
    "2.1",
    "2.1.1",
    "2.1.1a",
    "2.2",
    "2.4",
    "2.4.1",
    "2.10",
    "v4",
    "v10",
    "1.a",
    "1.ab",
    "1.a1",
    "1.a9",
    "1.a10",
]


class TestFirstCharOrInt:
    """Test splitting a component into tokens."""

    def test_leading_digits_form_one_token(self):
        """Should take the whole leading run of digits."""
        assert first_char_or_int("12ab") == (True, "12", "ab")

    def test_letter_is_a_single_token(self):
        """Should take a single non-digit character."""
        assert first_char_or_int("ab12") == (False, "a", "b12")

    def test_empty_string(self):
        """Should return an empty token for an empty string."""
        assert first_char_or_int("") == (False, "", "")

    def test_non_ascii_digits_are_not_numbers(self):
        """Should only treat ASCII digits as numeric."""
        is_int, token, rest = first_char_or_int("٣1")
        assert is_int is False
        assert token == "٣"
        assert rest == "1"


class TestIsUpToDate:
    """Test the current >= minimum check."""

    @pytest.mark.parametrize(
        "minimum, current, expected",
        [
            ("2.0", "2.0", True),
            ("2.0", "2.0.1", True),
            ("2.0.1", "2.0", False),
            ("2.1", "2.0.9", False),
            ("2.0.9", "2.1", True),
            ("2.2", "2.10", True),
            ("2.10", "2.2", False),
            ("2.1.1a", "2.2", True),
            ("2.1.1a", "2.1.1", True),
            ("2.1.1", "2.1.1a", False),
            ("1.a", "1.b", True),
            ("1.b", "1.a", False),
            ("1.a9", "1.a10", True),
            ("1.a", "1.ab", True),
            ("1.ab", "1.a1", True),
            ("v4", "v10", True),
            ("2.1", "2.01", True),
            ("2.01", "2.1", True),
        ],
    )
    def test_is_up_to_date(self, minimum, current, expected):
        """Should compare versions component by component."""
        assert is_up_to_date(minimum, current) is expected

    def test_numeric_component_beats_alphanumeric(self):
        """Should rank a plain number above any component containing letters."""
        assert is_up_to_date("2.1.9z", "2.1.1")
        assert not is_up_to_date("2.1.1", "2.1.9z")


class TestCompareVersions:
    """Test the three-way comparison."""

    def test_reflexive(self):
        """Should consider every version equal to itself."""
        for version in SAMPLE_VERSIONS:
            assert compare_versions(version, version) == 0
            assert is_up_to_date(version, version)

    def test_total_and_antisymmetric(self):
        """Should order every pair one way or the other, consistently."""
        for a, b in itertools.combinations(SAMPLE_VERSIONS, 2):
            assert compare_versions(a, b) == -compare_versions(b, a)
            assert is_up_to_date(a, b) or is_up_to_date(b, a)

    def test_numerically_equal_components(self):
        """Should treat zero-padded numbers as equal."""
        assert compare_versions("2.01", "2.1") == 0

    def test_sort_key_orders_versions(self):
        """Should sort versions from oldest to newest."""
        versions = ["2.2", "2.0", "2.4.1", "2.1.1", "2.0.1", "2.1.1a", "2.4"]

        assert sorted(versions, key=version_sort_key) == [
            "2.0",
            "2.0.1",
            "2.1.1a",
            "2.1.1",
            "2.2",
            "2.4",
            "2.4.1",
        ]
