"""
Tests for Authorization header parsing.
"""

import pytest

from auth.dependencies import (
    MalformedAuthorizationError,
    MissingAuthorizationError,
    extract_bearer_token,
)


class TestExtractBearerToken:
    def test_valid_header(self):
        assert extract_bearer_token({"Authorization": "Bearer abc.def"}) == "abc.def"

    def test_header_name_is_case_insensitive(self):
        assert extract_bearer_token({"authorization": "Bearer abc.def"}) == "abc.def"

    def test_missing_header(self):
        with pytest.raises(MissingAuthorizationError):
            extract_bearer_token({"Content-Type": "application/json"})

    @pytest.mark.parametrize(
        "value",
        [
            "bearer abc.def",
            "BEARER abc.def",
            "Basic dXNlcjpwYXNz",
            "Bearer",
            "Bearer ",
            "Bearer  abc.def",
            "Bearer abc def",
            "abc.def",
        ],
    )
    def test_malformed_header(self, value):
        with pytest.raises(MalformedAuthorizationError):
            extract_bearer_token({"Authorization": value})
