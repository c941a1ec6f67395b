from datetime import timedelta

import pytest
from jose import jwt

from care_api.exceptions import InvalidSignature, MalformedToken, TokenError, TokenExpired
from care_api.security.tokens import TokenClaims, TokenService

SECRET = "token-test-secret"
B64URL = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


@pytest.fixture
def tokens():
    return TokenService(SECRET)


@pytest.fixture
def claims():
    return TokenClaims(user_id=7, email="medico@ubs.test", role="doctor", is_admin=True)


def _alter_segment(token: str, index: int) -> str:
    parts = token.split(".")
    segment = parts[index]
    middle = len(segment) // 2
    replacement = "A" if segment[middle] != "A" else "B"
    parts[index] = segment[:middle] + replacement + segment[middle + 1:]
    return ".".join(parts)


def _flip_last_signature_bit(token: str) -> str:
    header, payload, signature = token.split(".")
    last = B64URL[B64URL.index(signature[-1]) ^ 1]
    return ".".join([header, payload, signature[:-1] + last])


def test_verify_returns_issued_claims(tokens, claims):
    verified = tokens.verify(tokens.issue(claims))
    assert verified == claims
    assert verified.expires_at is not None


def test_default_lifetime_is_two_hours(tokens, claims):
    payload = jwt.get_unverified_claims(tokens.issue(claims))
    assert payload["exp"] - payload["iat"] == 2 * 3600


def test_custom_ttl(tokens, claims):
    payload = jwt.get_unverified_claims(tokens.issue(claims, ttl=timedelta(minutes=5)))
    assert payload["exp"] - payload["iat"] == 300


def test_expired_token(tokens, claims):
    token = tokens.issue(claims, ttl=timedelta(seconds=-10))
    with pytest.raises(TokenExpired):
        tokens.verify(token)


@pytest.mark.parametrize("segment", [0, 1, 2])
def test_altered_token_fails_signature_check(tokens, claims, segment):
    token = _alter_segment(tokens.issue(claims), segment)
    with pytest.raises(InvalidSignature):
        tokens.verify(token)


def test_altered_last_signature_character(tokens, claims):
    token = tokens.issue(claims)
    altered = _flip_last_signature_bit(token)
    assert altered != token
    with pytest.raises(InvalidSignature):
        tokens.verify(altered)


def test_token_signed_with_other_secret(claims):
    token = TokenService("another-secret").issue(claims)
    with pytest.raises(InvalidSignature):
        TokenService(SECRET).verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b", "a.b.c.d", "a.b.c", "..sig"])
def test_malformed_tokens(tokens, token):
    with pytest.raises(MalformedToken):
        tokens.verify(token)


def test_token_without_identity_claims_is_malformed(tokens):
    token = jwt.encode({"exp": 9999999999}, SECRET, algorithm="HS256")
    with pytest.raises(MalformedToken):
        tokens.verify(token)


def test_all_failures_share_one_category(tokens, claims):
    for bad in ("garbage", tokens.issue(claims, ttl=timedelta(seconds=-1)), _alter_segment(tokens.issue(claims), 2)):
        with pytest.raises(TokenError):
            tokens.verify(bad)


def test_secret_is_required():
    with pytest.raises(ValueError):
        TokenService("")
