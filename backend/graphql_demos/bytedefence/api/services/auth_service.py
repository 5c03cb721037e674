"""Auth Service — demo account login and JWT issue/validation for ByteDefence.

Invariants:
    - Username lookup is case-insensitive; password comparison is exact (constant time)
    - Tokens carry sub / unique_name / name / role and expire after jwt_expiry_minutes
    - validate_token() never raises; an invalid token yields None
    - get_user_from_principal() tries the username claim first, then the subject id
"""

import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

from graphql_demos.bytedefence.api.config import Settings, get_settings
from graphql_demos.bytedefence.shared.domain_types import UserRole
from graphql_demos.bytedefence.shared.schemas import AuthResult, LoginRequest, UserDTO
from graphql_demos.common.security import (
    Principal, TokenError, TokenSigner, roles_from_claim, stretch_secret,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DemoAccount:
    password: str
    user: UserDTO


DEMO_ACCOUNTS: dict[str, DemoAccount] = {
    "admin": DemoAccount(
        "admin123",
        UserDTO(id="user-admin", username="admin", display_name="Administrator", role=UserRole.ADMIN),
    ),
    "user": DemoAccount(
        "user123",
        UserDTO(id="user-analyst", username="user", display_name="Analyst", role=UserRole.USER),
    ),
}


class AuthService:
    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.expiry = timedelta(minutes=settings.jwt_expiry_minutes)
        self._signer = TokenSigner(
            secret=stretch_secret(settings.jwt_secret),
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            leeway_seconds=settings.jwt_clock_skew_seconds,
        )
        self._accounts = {name.lower(): account for name, account in DEMO_ACCOUNTS.items()}

    async def login(self, request: LoginRequest) -> AuthResult | None:
        account = self._accounts.get(request.username.lower())
        if account is None:
            return None
        if not hmac.compare_digest(account.password.encode(), request.password.encode()):
            return None

        token, expires_at = self.create_token(account.user)
        logger.info(f"User {account.user.username} logged in")
        return AuthResult(token=token, expires_at_utc=expires_at, user=account.user)

    def create_token(self, user: UserDTO) -> tuple[str, datetime]:
        return self._signer.encode(
            {
                "sub": user.id,
                "unique_name": user.username,
                "name": user.display_name,
                "role": user.role.value,
            },
            self.expiry,
        )

    def validate_token(self, token: str | None) -> Principal | None:
        if not token:
            return None
        try:
            claims = self._signer.decode(token)
        except TokenError as e:
            logger.debug(f"Rejected bearer token: {e}")
            return None
        return Principal(
            subject=str(claims.get("sub", "")),
            name=str(claims.get("unique_name") or claims.get("preferred_username") or ""),
            roles=roles_from_claim(claims.get("role")),
            claims=claims,
        )

    def get_user_from_principal(self, principal: Principal | None) -> UserDTO | None:
        if principal is None:
            return None
        username = principal.name or principal.claims.get("preferred_username")
        if not username or not str(username).strip():
            return None
        account = self._accounts.get(str(username).lower())
        if account is not None:
            return account.user

        user_id = principal.subject
        if not user_id:
            return None
        for account in self._accounts.values():
            if account.user.id.lower() == user_id.lower():
                return account.user
        return None
