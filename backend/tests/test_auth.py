"""
Postboard Backend — Bearer Token Gate Tests
=============================================

What we test:
    ✅ Header parsing: required vs invalid messages
    ✅ Token check against the configured token list
    ✅ Gate behavior through the HTTP stack, public routes included
"""

import pytest

from postboard.exceptions import AuthenticationError
from postboard.middleware.auth import extract_bearer_token, verify_token


class TestExtractBearerToken:

    def test_valid_header(self):
        assert extract_bearer_token("Bearer valid-token") == "valid-token"

    @pytest.mark.parametrize("header", [None, ""])
    def test_missing_header(self, header):
        with pytest.raises(AuthenticationError) as exc_info:
            extract_bearer_token(header)
        assert exc_info.value.message == "Token de autorización requerido"

    @pytest.mark.parametrize("header", [
        "malformed-token",
        "Basic dXNlcjpwYXNz",
        "Bearer",
        "Bearer ",
        "bearer valid-token",
        "Bearer valid-token extra",
        "Bearer  valid-token",
    ])
    def test_malformed_header(self, header):
        with pytest.raises(AuthenticationError) as exc_info:
            extract_bearer_token(header)
        assert exc_info.value.message == "Token de autorización inválido"


class TestVerifyToken:

    def test_configured_tokens_pass(self):
        verify_token("valid-token")
        verify_token("second-token")

    def test_unknown_token(self):
        with pytest.raises(AuthenticationError) as exc_info:
            verify_token("invalid-token")
        assert exc_info.value.message == "Token de autorización inválido"


class TestAuthGateOverHttp:

    @pytest.mark.asyncio
    async def test_no_header(self, test_client):
        response = await test_client.get("/users")

        assert response.status_code == 401
        assert response.json()["message"] == "Token de autorización requerido"
        assert response.headers["www-authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_malformed_header(self, test_client):
        response = await test_client.get("/users", headers={"Authorization": "malformed-token"})

        assert response.status_code == 401
        assert response.json()["message"] == "Token de autorización inválido"

    @pytest.mark.asyncio
    async def test_unknown_token(self, test_client):
        response = await test_client.get("/users", headers={"Authorization": "Bearer invalid-token"})

        assert response.status_code == 401
        assert response.json()["error"] == {"code": "unauthorized"}

    @pytest.mark.asyncio
    async def test_gate_runs_before_body_validation(self, test_client):
        response = await test_client.post("/users", json={"email": "bad"})

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_valid_token(self, test_client, auth_headers):
        response = await test_client.get("/users", headers=auth_headers)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_public_routes_need_no_token(self, test_client):
        assert (await test_client.get("/")).status_code == 200
        assert (await test_client.get("/health")).status_code == 200
