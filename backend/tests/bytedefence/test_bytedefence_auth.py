"""AuthService — demo login, token claims and principal resolution."""

from datetime import datetime, timedelta, timezone

import jwt

from graphql_demos.bytedefence.api.config import Settings
from graphql_demos.bytedefence.api.services.auth_service import AuthService
from graphql_demos.bytedefence.shared.domain_types import UserRole
from graphql_demos.bytedefence.shared.schemas import LoginRequest
from graphql_demos.common.security import Principal, stretch_secret


class TestLogin:

    async def test_admin_login(self, auth_service):
        result = await auth_service.login(LoginRequest(username="admin", password="admin123"))
        assert result is not None
        assert result.user.role is UserRole.ADMIN
        assert result.token

    async def test_username_is_case_insensitive(self, auth_service):
        result = await auth_service.login(LoginRequest(username="USER", password="user123"))
        assert result is not None
        assert result.user.username == "user"

    async def test_password_is_case_sensitive(self, auth_service):
        assert await auth_service.login(LoginRequest(username="admin", password="ADMIN123")) is None

    async def test_unknown_user(self, auth_service):
        assert await auth_service.login(LoginRequest(username="mallory", password="x")) is None


class TestTokens:

    def test_claims(self, auth_service, analyst_user):
        token, _ = auth_service.create_token(analyst_user)
        claims = jwt.decode(
            token, stretch_secret(Settings().jwt_secret), algorithms=["HS256"],
            audience="bytedefence-clients", issuer="bytedefence-local",
        )
        assert claims["sub"] == "user-analyst"
        assert claims["unique_name"] == "user"
        assert claims["name"] == "Analyst"
        assert claims["role"] == "User"

    def test_expiry_follows_settings(self, auth_service, admin_user):
        _, expires_at = auth_service.create_token(admin_user)
        remaining = expires_at - datetime.now(timezone.utc)
        assert timedelta(minutes=59) < remaining <= timedelta(minutes=60)

    def test_round_trip_principal(self, auth_service, admin_user):
        token, _ = auth_service.create_token(admin_user)
        principal = auth_service.validate_token(token)
        assert principal.subject == "user-admin"
        assert principal.name == "admin"
        assert principal.is_in_role("admin")

    def test_garbage_and_empty_tokens(self, auth_service):
        assert auth_service.validate_token("not-a-jwt") is None
        assert auth_service.validate_token("") is None
        assert auth_service.validate_token(None) is None

    def test_other_secret_rejected(self, auth_service, admin_user):
        other = AuthService(Settings(jwt_secret="another-secret"))
        token, _ = other.create_token(admin_user)
        assert auth_service.validate_token(token) is None

    def test_expired_token_rejected(self, auth_service, admin_user):
        expired = AuthService(Settings(jwt_expiry_minutes=-1))
        token, _ = expired.create_token(admin_user)
        assert auth_service.validate_token(token) is None


class TestUserFromPrincipal:

    def test_by_username(self, auth_service):
        user = auth_service.get_user_from_principal(Principal(subject="whatever", name="Admin"))
        assert user.id == "user-admin"

    def test_falls_back_to_subject(self, auth_service):
        user = auth_service.get_user_from_principal(Principal(subject="USER-ANALYST", name="nobody"))
        assert user.username == "user"

    def test_unknown(self, auth_service):
        assert auth_service.get_user_from_principal(Principal(subject="x", name="nobody")) is None
        assert auth_service.get_user_from_principal(Principal(subject="user-admin", name="")) is None
        assert auth_service.get_user_from_principal(None) is None
