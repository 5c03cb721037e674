"""JWT Authentication Service — issues and validates BookStore bearer tokens.

Invariants:
    - Tokens carry nameid / unique_name / role claims, issuer BookStoreApi, audience BookStoreClient
    - The static demo token always resolves to the demo principal
    - validate_token() never raises: any failure yields None and the request continues anonymously
"""

import logging
from datetime import timedelta

from graphql_demos.bookstore.config import Settings, get_settings
from graphql_demos.common.security import (
    Principal, TokenError, TokenSigner, extract_bearer_token, roles_from_claim,
)

logger = logging.getLogger(__name__)

DEMO_USER_ID = "demo-user"
DEMO_USER_NAME = "Demo User"
DEFAULT_ROLE = "User"


class JwtAuthenticationService:
    """Token issuer/validator configured from BookStore settings."""

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.static_demo_token = settings.static_demo_token
        self.lifetime = timedelta(seconds=settings.jwt_lifetime_seconds)
        self._signer = TokenSigner(
            secret=settings.jwt_secret,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
        )

    @property
    def lifetime_seconds(self) -> int:
        return int(self.lifetime.total_seconds())

    def generate_token(self, user_id: str, user_name: str, role: str = DEFAULT_ROLE) -> str:
        token, _ = self._signer.encode(
            {"nameid": user_id, "unique_name": user_name, "role": role},
            self.lifetime,
        )
        return token

    def validate_token(self, token: str | None) -> Principal | None:
        if not token:
            return None
        if token == self.static_demo_token:
            return Principal(
                subject=DEMO_USER_ID,
                name=DEMO_USER_NAME,
                roles=(DEFAULT_ROLE,),
                authentication_type="static",
            )
        try:
            claims = self._signer.decode(token)
        except TokenError as e:
            logger.debug(f"Rejected bearer token: {e}")
            return None
        return Principal(
            subject=str(claims.get("nameid", "")),
            name=str(claims.get("unique_name", "")),
            roles=roles_from_claim(claims.get("role")),
            claims=claims,
        )

    def principal_from_header(self, authorization: str | None) -> Principal | None:
        """Resolve the optional Authorization header to a principal (or None)."""
        return self.validate_token(extract_bearer_token(authorization))
