"""Auth Client — signs in against /auth/login and keeps the session in a token store."""

import logging

import httpx
from pydantic import ValidationError

from graphql_demos.bytedefence.client.token_store import (
    TOKEN_KEY, USER_KEY, MemoryTokenStore, TokenStore,
)
from graphql_demos.bytedefence.shared.schemas import AuthResult, LoginRequest, UserDTO

logger = logging.getLogger(__name__)


class AuthClient:
    def __init__(self, http: httpx.AsyncClient, store: TokenStore | None = None):
        self._http = http
        self.store = store or MemoryTokenStore()

    async def login(self, username: str, password: str) -> bool:
        """True and the session stored on success; False on any rejected login."""
        try:
            request = LoginRequest(username=username, password=password)
        except ValidationError:
            logger.info("Login rejected locally: username and password are required")
            return False
        response = await self._http.post(
            "auth/login", json=request.model_dump(mode="json", by_alias=True),
        )
        if not response.is_success:
            logger.info(f"Login rejected with {response.status_code}")
            return False
        try:
            result = AuthResult.model_validate_json(response.content)
        except ValidationError as e:
            logger.warning(f"Unreadable login response: {e}")
            return False
        self._save(result)
        return True

    def logout(self) -> None:
        self.store.remove(TOKEN_KEY)
        self.store.remove(USER_KEY)

    def get_token(self) -> str | None:
        return self.store.get(TOKEN_KEY)

    def get_current_user(self) -> UserDTO | None:
        raw = self.store.get(USER_KEY)
        if raw is None:
            return None
        return UserDTO.model_validate_json(raw)

    def is_authenticated(self) -> bool:
        return self.get_token() is not None

    def auth_headers(self) -> dict[str, str]:
        token = self.get_token()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _save(self, result: AuthResult) -> None:
        self.store.set(TOKEN_KEY, result.token)
        self.store.set(USER_KEY, result.user.model_dump_json(by_alias=True))
