"""Unit tests for value objects."""

import pytest
from pydantic import ValidationError

from picket.domain.value import Email, InvitationToken, Role


class TestRole:
    def test_ordering(self):
        assert Role.ADMIN.outranks(Role.PICKETER)
        assert Role.PICKETER.outranks(Role.MEMBER)
        assert not Role.MEMBER.outranks(Role.MEMBER)
        assert not Role.PICKETER.outranks(Role.ADMIN)


class TestEmail:
    def test_normalized_to_lower_case(self):
        assert Email("  A@X.com").root == "a@x.com"

    def test_equal_after_normalization(self):
        assert Email("a@x.com") == Email("A@X.COM")

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "plain",
            "a@b",
            "a b@x.com",
            "foo@bar.com,",
            "a..b@x.com",
            "x@-bad-.com",
            "<script>@x.y",
            "a@b..c",
        ],
    )
    def test_malformed_rejected(self, value):
        with pytest.raises(ValidationError):
            Email(value)


class TestInvitationToken:
    def test_masked_keeps_only_a_prefix(self):
        token = InvitationToken("abcdefghijklmnop")

        assert token.masked == "abcdefgh..."
        assert "ijkl" not in token.masked
