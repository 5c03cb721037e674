"""HTTP surface — login, the authenticated GraphQL endpoint, health and CORS."""


class TestLogin:

    async def test_success_returns_camel_case_result(self, client):
        res = await client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
        assert res.status_code == 200
        body = res.json()
        assert body["token"]
        assert "expiresAtUtc" in body
        assert body["user"] == {
            "id": "user-admin", "username": "admin", "displayName": "Administrator", "role": "ADMIN",
        }

    async def test_wrong_password(self, client):
        res = await client.post("/api/auth/login", json={"username": "admin", "password": "nope"})
        assert res.status_code == 401
        assert res.text == "Invalid credentials"

    async def test_incomplete_payload(self, client):
        res = await client.post("/api/auth/login", json={"username": "admin"})
        assert res.status_code == 400
        assert res.text == "Invalid request payload"

    async def test_malformed_body(self, client):
        res = await client.post(
            "/api/auth/login", content=b"not json", headers={"Content-Type": "application/json"},
        )
        assert res.status_code == 400

    async def test_issued_token_opens_graphql(self, client):
        login = await client.post("/api/auth/login", json={"username": "user", "password": "user123"})
        token = login.json()["token"]
        res = await client.post(
            "/api/graphql", json={"query": "{ me { username } }"},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert res.json()["data"]["me"]["username"] == "user"


class TestGraphQLEndpoint:

    async def test_anonymous_gets_401_challenge(self, client):
        res = await client.post("/api/graphql", json={"query": "{ orders { id } }"})
        assert res.status_code == 401
        assert res.headers["www-authenticate"] == "Bearer"

    async def test_invalid_token_gets_401(self, client):
        res = await client.post(
            "/api/graphql", json={"query": "{ orders { id } }"},
            headers={"Authorization": "Bearer forged"},
        )
        assert res.status_code == 401

    async def test_missing_query(self, client, token_for):
        headers = {"Authorization": f"Bearer {token_for('admin')}"}
        for body in ({}, {"query": "   "}, {"variables": {}}):
            res = await client.post("/api/graphql", json=body, headers=headers)
            assert res.status_code == 400
            assert res.text == "Missing GraphQL query"

    async def test_bare_token_accepted(self, client, token_for):
        res = await client.post(
            "/api/graphql", json={"query": "{ me { role } }"},
            headers={"Authorization": token_for("admin")},
        )
        assert res.status_code == 200
        assert res.json()["data"]["me"]["role"] == "ADMIN"

    async def test_errors_key_omitted_on_success(self, graphql):
        body = await graphql("{ orderStats { total } }")
        assert "errors" not in body

    async def test_syntax_error_returned_as_graphql_error(self, graphql):
        body = await graphql("{ orders { id }")
        assert body["data"] is None
        assert body["errors"]


class TestHealthAndCors:

    async def test_health(self, client):
        res = await client.get("/api/health/")
        assert res.status_code == 200
        assert res.json()["service"] == "bytedefence-api"

    async def test_ready(self, client):
        res = await client.get("/api/health/ready")
        assert res.status_code == 200
        assert res.json()["status"] == "ready"

    async def test_preflight(self, client):
        res = await client.options(
            "/api/graphql",
            headers={
                "Origin": "http://localhost:5001",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Authorization, Content-Type",
            },
        )
        assert res.status_code == 200
        assert res.headers["access-control-allow-origin"] == "*"
        assert "POST" in res.headers["access-control-allow-methods"]
