"""Bearer parsing - verifies Authorization header handling."""

import pytest

from marketplace.core.bearer import parse_bearer_token
from marketplace.core.errors import AuthenticationError


def test_extracts_token():
    assert parse_bearer_token("Bearer demo-token-12345") == "demo-token-12345"


def test_scheme_is_case_insensitive():
    assert parse_bearer_token("bearer abc") == "abc"


@pytest.mark.parametrize("header", [None, ""])
def test_missing_header_requires_authentication(header):
    with pytest.raises(AuthenticationError) as exc:
        parse_bearer_token(header)
    assert exc.value.code == "AUTHENTICATION_REQUIRED"


@pytest.mark.parametrize("header", ["Basic abc", "Bearer", "Bearer ", "Bearer a b", "token"])
def test_malformed_header_is_invalid_token(header):
    with pytest.raises(AuthenticationError) as exc:
        parse_bearer_token(header)
    assert exc.value.code == "INVALID_TOKEN"
    assert exc.value.http_status == 401
