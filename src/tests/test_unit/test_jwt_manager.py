from datetime import timedelta

import pytest

from exceptions.security import TokenExpiredError, InvalidTokenError
from security.interfaces import TokenKind

IDENTITY = {"user_id": "65f1c0a2b3d4e5f6a7b8c9d0", "email": "neo@matrix.com", "name": "Neo"}


@pytest.mark.unit
def test_issue_and_verify_access_token(jwt_manager):
    token = jwt_manager.issue(TokenKind.ACCESS, IDENTITY)
    decoded = jwt_manager.verify(TokenKind.ACCESS, token)
    assert decoded["user_id"] == IDENTITY["user_id"]
    assert decoded["email"] == IDENTITY["email"]
    assert decoded["name"] == IDENTITY["name"]
    assert "exp" in decoded
    assert "jti" in decoded


@pytest.mark.unit
def test_issue_and_verify_refresh_token(jwt_manager):
    token = jwt_manager.issue(TokenKind.REFRESH, IDENTITY)
    decoded = jwt_manager.verify(TokenKind.REFRESH, token)
    assert decoded["user_id"] == IDENTITY["user_id"]
    assert "exp" in decoded


@pytest.mark.unit
def test_access_token_rejected_as_refresh_token(jwt_manager):
    token = jwt_manager.issue(TokenKind.ACCESS, IDENTITY)
    with pytest.raises(InvalidTokenError):
        jwt_manager.verify(TokenKind.REFRESH, token)


@pytest.mark.unit
def test_refresh_token_rejected_as_access_token(jwt_manager):
    token = jwt_manager.issue(TokenKind.REFRESH, IDENTITY)
    with pytest.raises(InvalidTokenError):
        jwt_manager.verify(TokenKind.ACCESS, token)


@pytest.mark.unit
def test_access_token_expiry(jwt_manager):
    token = jwt_manager.issue(
        TokenKind.ACCESS,
        IDENTITY,
        expires_delta=timedelta(seconds=-1)
    )
    with pytest.raises(TokenExpiredError):
        jwt_manager.verify(TokenKind.ACCESS, token)


@pytest.mark.unit
def test_refresh_token_expiry(jwt_manager):
    token = jwt_manager.issue(
        TokenKind.REFRESH,
        IDENTITY,
        expires_delta=timedelta(seconds=-1)
    )
    with pytest.raises(TokenExpiredError):
        jwt_manager.verify(TokenKind.REFRESH, token)


@pytest.mark.unit
def test_expired_token_is_an_invalid_token(jwt_manager):
    token = jwt_manager.issue(
        TokenKind.ACCESS,
        IDENTITY,
        expires_delta=timedelta(seconds=-1)
    )
    with pytest.raises(InvalidTokenError):
        jwt_manager.verify(TokenKind.ACCESS, token)


@pytest.mark.unit
def test_invalid_access_token(jwt_manager):
    with pytest.raises(InvalidTokenError):
        jwt_manager.verify(TokenKind.ACCESS, "invalid.token.value")


@pytest.mark.unit
def test_invalid_refresh_token(jwt_manager):
    with pytest.raises(InvalidTokenError):
        jwt_manager.verify(TokenKind.REFRESH, "invalid.token.value")


@pytest.mark.unit
def test_tokens_issued_together_differ(jwt_manager):
    first = jwt_manager.issue(TokenKind.ACCESS, IDENTITY)
    second = jwt_manager.issue(TokenKind.ACCESS, IDENTITY)
    assert first != second


@pytest.mark.unit
def test_issue_does_not_mutate_claims(jwt_manager):
    claims = dict(IDENTITY)
    jwt_manager.issue(TokenKind.ACCESS, claims)
    assert claims == IDENTITY


@pytest.mark.unit
def test_default_lifetimes_follow_settings(jwt_manager, settings):
    assert jwt_manager.access_expires_delta == timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    assert jwt_manager.refresh_expires_delta == timedelta(
        minutes=settings.REFRESH_TOKEN_EXPIRE_MINUTES
    )
