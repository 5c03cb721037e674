"""
Bearer-token helpers shared by the BookStore and ByteDefence APIs.

Signing and validation are delegated to PyJWT. Each service builds a
``TokenSigner`` with its own secret, issuer and audience and maps the decoded
claims to a ``Principal``.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt


class TokenError(RuntimeError):
    pass


@dataclass(frozen=True)
class Principal:
    """Authenticated caller resolved from a bearer token."""

    subject: str
    name: str
    roles: tuple[str, ...] = ()
    authentication_type: str = "jwt"
    claims: dict[str, Any] = field(default_factory=dict, compare=False)

    def is_in_role(self, role: str) -> bool:
        wanted = (role or "").strip().lower()
        return any(r.lower() == wanted for r in self.roles)


def extract_bearer_token(authorization: str | None) -> str | None:
    """
    Return the token from an Authorization header value.

    A case-insensitive ``Bearer `` prefix is stripped; a bare token is
    accepted as-is. Empty headers yield None.
    """
    raw = (authorization or "").strip()
    scheme, _, rest = raw.partition(" ")
    if scheme.lower() == "bearer":
        raw = rest.strip()
    return raw or None


def stretch_secret(secret: str, min_bytes: int = 32) -> bytes:
    # HS256 keys shorter than 256 bits are replaced by their SHA-256 digest.
    secret_bytes = (secret or "").encode("utf-8")
    if len(secret_bytes) < min_bytes:
        secret_bytes = hashlib.sha256(secret_bytes).digest()
    return secret_bytes


def roles_from_claim(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value if str(v).strip())
    text = str(value).strip()
    return (text,) if text else ()


class TokenSigner:
    """HS256 token issuer/validator bound to one issuer and audience."""

    def __init__(
        self,
        *,
        secret: str | bytes,
        issuer: str,
        audience: str,
        algorithm: str = "HS256",
        leeway_seconds: int = 0,
    ) -> None:
        if not secret:
            raise TokenError("Signing secret is empty.")
        self._key = secret
        self.issuer = issuer
        self.audience = audience
        self.algorithm = algorithm
        self.leeway_seconds = leeway_seconds

    def encode(self, claims: dict[str, Any], lifetime: timedelta) -> tuple[str, datetime]:
        """Sign ``claims`` and return ``(token, expires_at_utc)``."""
        issued_at = datetime.now(timezone.utc)
        expires_at = issued_at + lifetime
        payload = {
            **claims,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": int(issued_at.timestamp()),
            "nbf": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(payload, self._key, algorithm=self.algorithm)
        return token, expires_at

    def decode(self, token: str) -> dict[str, Any]:
        """Validate signature, issuer, audience and lifetime."""
        raw = (token or "").strip()
        if not raw:
            raise TokenError("Token is empty.")
        try:
            return jwt.decode(
                raw,
                self._key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                leeway=self.leeway_seconds,
                options={"require": ["exp", "iss", "aud"]},
            )
        except jwt.InvalidTokenError as exc:
            raise TokenError("Invalid token.") from exc
