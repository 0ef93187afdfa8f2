from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from taskmanager.application.services.token_service import TokenService, TokenSigningConfig
from taskmanager.shared.config.settings import AuthConfig
from taskmanager.shared.errors import ConfigurationError, InvalidTokenError


def test_issue_then_verify_returns_user_id(token_service: TokenService) -> None:
    token = token_service.issue_access_token(42)

    assert token_service.verify_access_token(token) == 42


def test_access_token_claims(token_service: TokenService) -> None:
    token = token_service.issue_access_token(7)
    claims = jwt.decode(token, options={"verify_signature": False})

    assert claims["sub"] == "7"
    assert claims["exp"] - claims["iat"] == 15 * 60
    assert claims["jti"]


def test_tokens_minted_back_to_back_differ(token_service: TokenService) -> None:
    assert token_service.issue_access_token(1) != token_service.issue_access_token(1)


def test_expired_token_is_rejected(signing: TokenSigningConfig) -> None:
    past = datetime.now(UTC) - timedelta(minutes=16)
    issuer = TokenService(signing, clock=lambda: past)
    token = issuer.issue_access_token(1)

    with pytest.raises(InvalidTokenError) as excinfo:
        TokenService(signing).verify_access_token(token)

    assert excinfo.value.context == {"reason": "expired"}


def test_token_signed_with_other_key_is_rejected(token_service: TokenService) -> None:
    other = TokenService(TokenSigningConfig(secret="a-completely-different-signing-key-xyz"))
    token = other.issue_access_token(1)

    with pytest.raises(InvalidTokenError) as excinfo:
        token_service.verify_access_token(token)

    assert excinfo.value.context == {"reason": "invalid"}


@pytest.mark.parametrize("token", ["", None])
def test_missing_token_is_rejected(token_service: TokenService, token: str | None) -> None:
    with pytest.raises(InvalidTokenError) as excinfo:
        token_service.verify_access_token(token)

    assert excinfo.value.context == {"reason": "missing"}


def test_malformed_token_is_rejected(token_service: TokenService) -> None:
    with pytest.raises(InvalidTokenError):
        token_service.verify_access_token("not-a-jwt")


def test_missing_secret_is_a_configuration_error() -> None:
    service = TokenService(TokenSigningConfig(secret=None))

    with pytest.raises(ConfigurationError):
        service.issue_access_token(1)
    with pytest.raises(ConfigurationError):
        service.verify_access_token("anything")


def test_opaque_token_is_hex_of_requested_length() -> None:
    token = TokenService.generate_opaque_token()

    assert len(token) == 64
    int(token, 16)


def test_refresh_envelope_round_trip(token_service: TokenService) -> None:
    signed = token_service.sign_refresh_token(5, "abc123")

    assert token_service.unsign_refresh_token(signed) == (5, "abc123")


def test_tampered_refresh_envelope_is_ignored(token_service: TokenService) -> None:
    signed = token_service.sign_refresh_token(5, "abc123")

    assert token_service.unsign_refresh_token(signed[:-2] + "xx") is None
    assert token_service.unsign_refresh_token("garbage") is None
    assert token_service.unsign_refresh_token(None) is None


def test_signing_config_from_settings() -> None:
    auth = AuthConfig(JWT_SECRET="s3cret-value", ACCESS_TOKEN_TTL=60)

    signing = TokenSigningConfig.from_settings(auth)

    assert signing.secret == "s3cret-value"
    assert signing.algorithm == "HS256"
    assert signing.access_token_ttl == timedelta(seconds=60)
    assert signing.is_configured
