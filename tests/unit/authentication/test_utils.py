"""Unit tests for functions defined in authentication/utils.py"""

import pytest
from fastapi import HTTPException
from starlette.datastructures import Headers

from authentication.utils import extract_user_token


def test_extract_user_token() -> None:
    """Test extracting user token from headers."""
    headers = Headers({"Authorization": "Bearer abcdef123"})
    assert extract_user_token(headers) == "abcdef123"


def test_extract_user_token_case_insensitive_scheme() -> None:
    """Test that bearer scheme is matched case insensitively."""
    headers = Headers({"Authorization": "  bearer abcdef123 "})
    assert extract_user_token(headers) == "abcdef123"


@pytest.mark.parametrize(
    "value", ["Bearer", "Basic dXNlcjpwYXNz", "Bearer too many parts"]
)
def test_extract_user_token_malformed_header(value: str) -> None:
    """Test that malformed authorization header is refused."""
    with pytest.raises(HTTPException, match="No token found in Authorization header"):
        extract_user_token(Headers({"Authorization": value}))


def test_extract_user_token_missing_header() -> None:
    """Test that missing authorization header is refused."""
    with pytest.raises(HTTPException) as exc_info:
        extract_user_token(Headers({}))
    assert exc_info.value.status_code == 400
