"""Unit tests for JWTCallerExtractor.

Tests cover:
- Valid token -> Caller with the token's domain claim
- Path domain overrides the claim ('_global' maps to the global domain)
- Missing, malformed, expired and wrongly signed tokens
"""

from datetime import UTC, datetime, timedelta
from types import SimpleNamespace

import jwt
import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.value_objects import Caller
from src.infrastructure.security.jwt_caller_extractor import JWTCallerExtractor

SECRET = "extractor-test-secret-key-32-chars!!"


@pytest.fixture
def extractor():
    return JWTCallerExtractor(SECRET)


def bearer(token, path_params=None):
    return SimpleNamespace(
        headers={"authorization": f"Bearer {token}"}, path_params=path_params or {}
    )


@pytest.mark.unit
class TestJWTCallerExtractor:
    def test_short_secret_rejected(self):
        with pytest.raises(ValueError):
            JWTCallerExtractor("short")

    def test_valid_token(self, extractor):
        token = extractor.issue(Caller(subject_id="alice", domain="acme"))

        result = extractor.extract_caller(bearer(token))

        assert result == Success(value=Caller(subject_id="alice", domain="acme"))

    def test_path_domain_overrides_claim(self, extractor):
        token = extractor.issue(Caller(subject_id="alice", domain="acme"))

        result = extractor.extract_caller(bearer(token, {"domain": "globex"}))

        assert result.value.domain == "globex"

    def test_global_segment_maps_to_global_domain(self, extractor):
        token = extractor.issue(Caller(subject_id="root", domain="acme"))

        result = extractor.extract_caller(bearer(token, {"domain": "_global"}))

        assert result.value.domain == ""

    def test_missing_header(self, extractor):
        result = extractor.extract_caller(SimpleNamespace(headers={}))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AUTHENTICATION_FAILED

    def test_non_bearer_scheme(self, extractor):
        result = extractor.extract_caller(
            SimpleNamespace(headers={"authorization": "Basic YWxpY2U6cHc="})
        )

        assert result.error.code == ErrorCode.AUTHENTICATION_FAILED

    def test_expired_token(self, extractor):
        token = jwt.encode(
            {
                "sub": "alice",
                "domain": "acme",
                "exp": datetime.now(UTC) - timedelta(minutes=1),
            },
            SECRET,
            algorithm="HS256",
        )

        result = extractor.extract_caller(bearer(token))

        assert result.error.code == ErrorCode.TOKEN_EXPIRED

    def test_wrong_signature(self, extractor):
        token = JWTCallerExtractor("another-secret-key-that-is-32-chars-long").issue(
            Caller(subject_id="alice", domain="acme")
        )

        result = extractor.extract_caller(bearer(token))

        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_missing_subject(self, extractor):
        token = jwt.encode({"domain": "acme"}, SECRET, algorithm="HS256")

        result = extractor.extract_caller(bearer(token))

        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_missing_domain_claim(self, extractor):
        token = jwt.encode({"sub": "alice"}, SECRET, algorithm="HS256")

        result = extractor.extract_caller(bearer(token))

        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_custom_domain_claim(self):
        extractor = JWTCallerExtractor(SECRET, domain_claim="tenant")
        token = jwt.encode({"sub": "alice", "tenant": "acme"}, SECRET, algorithm="HS256")

        assert extractor.extract_caller(bearer(token)).value.domain == "acme"
