"""Unit tests for the name search pattern of the PostgreSQL user repository."""

import pytest

from picket.persistence.repository.user import _contains_pattern


class TestContainsPattern:
    @pytest.mark.parametrize(
        ("text", "pattern"),
        [
            ("anna", "%anna%"),
            ("_", "%\\_%"),
            ("50%", "%50\\%%"),
            ("a\\b", "%a\\\\b%"),
        ],
    )
    def test_wildcards_are_escaped(self, text, pattern):
        assert _contains_pattern(text) == pattern
