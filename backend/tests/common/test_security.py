"""Bearer helpers — header parsing, key stretching, signing and validation."""

from datetime import timedelta

import pytest

from graphql_demos.common.security import (
    Principal, TokenError, TokenSigner, extract_bearer_token, roles_from_claim, stretch_secret,
)


def _signer(**overrides) -> TokenSigner:
    options = {
        "secret": "a-test-secret-that-is-long-enough-for-hs256",
        "issuer": "tests",
        "audience": "test-clients",
    }
    options.update(overrides)
    return TokenSigner(**options)


@pytest.mark.parametrize("header, expected", [
    ("Bearer abc.def", "abc.def"),
    ("bearer abc.def", "abc.def"),
    ("BEARER   abc.def  ", "abc.def"),
    ("abc.def", "abc.def"),
    ("", None),
    (None, None),
    ("Bearer ", None),
    ("  bearer  ", None),
])
def test_extract_bearer_token(header, expected):
    assert extract_bearer_token(header) == expected


def test_short_secret_is_stretched_to_32_bytes():
    key = stretch_secret("dev-secret")
    assert isinstance(key, bytes)
    assert len(key) == 32


def test_long_secret_is_kept():
    secret = "x" * 40
    assert stretch_secret(secret) == secret.encode()


def test_roles_from_claim_accepts_string_and_list():
    assert roles_from_claim("Admin") == ("Admin",)
    assert roles_from_claim(["User", "Admin"]) == ("User", "Admin")
    assert roles_from_claim(None) == ()


def test_encode_then_decode_keeps_claims():
    signer = _signer()
    token, expires_at = signer.encode({"sub": "u-1", "role": "User"}, timedelta(minutes=5))
    claims = signer.decode(token)
    assert claims["sub"] == "u-1"
    assert claims["iss"] == "tests"
    assert claims["aud"] == "test-clients"
    assert claims["exp"] == int(expires_at.timestamp())


def test_decode_rejects_wrong_audience():
    token, _ = _signer().encode({"sub": "u-1"}, timedelta(minutes=5))
    with pytest.raises(TokenError):
        _signer(audience="someone-else").decode(token)


def test_decode_rejects_wrong_issuer():
    token, _ = _signer(issuer="elsewhere").encode({"sub": "u-1"}, timedelta(minutes=5))
    with pytest.raises(TokenError):
        _signer().decode(token)


def test_decode_rejects_expired_token():
    token, _ = _signer().encode({"sub": "u-1"}, timedelta(seconds=-30))
    with pytest.raises(TokenError):
        _signer().decode(token)


def test_leeway_accepts_recently_expired_token():
    token, _ = _signer().encode({"sub": "u-1"}, timedelta(seconds=-2))
    assert _signer(leeway_seconds=5).decode(token)["sub"] == "u-1"


def test_decode_rejects_garbage():
    with pytest.raises(TokenError):
        _signer().decode("not-a-jwt")


def test_principal_role_check_is_case_insensitive():
    principal = Principal(subject="u-1", name="user", roles=("Admin",))
    assert principal.is_in_role("admin")
    assert not principal.is_in_role("User")
