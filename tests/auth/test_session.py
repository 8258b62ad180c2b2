"""Tests for session resolution, the session guard and the adapter factory."""

import pytest

from projecthub.auth.adapters.base import AuthenticationError
from projecthub.auth.adapters.jwt import JWTAuthAdapter
from projecthub.auth.adapters.none import NoAuthAdapter
from projecthub.auth.context import AuthContext, require_session
from projecthub.auth.factory import get_auth_adapter
from projecthub.auth.session import get_auth_context


class TestAuthFactory:
    def test_default_is_no_auth(self, monkeypatch):
        monkeypatch.setenv("PROJECTHUB_AUTH_PROVIDER", "none")

        assert isinstance(get_auth_adapter(), NoAuthAdapter)

    def test_jwt_provider(self, jwt_auth):
        adapter = get_auth_adapter()

        assert isinstance(adapter, JWTAuthAdapter)
        assert adapter.secret_key == jwt_auth

    def test_jwt_config_overrides(self, monkeypatch):
        monkeypatch.setenv("PROJECTHUB_AUTH_PROVIDER", "jwt")
        monkeypatch.setenv(
            "PROJECTHUB_AUTH_CONFIG", '{"secret_key": "from-config", "issuer": "elsewhere"}'
        )

        adapter = get_auth_adapter()

        assert adapter.secret_key == "from-config"
        assert adapter.issuer == "elsewhere"

    def test_jwt_requires_secret(self, monkeypatch):
        monkeypatch.setenv("PROJECTHUB_AUTH_PROVIDER", "jwt")
        monkeypatch.setenv("PROJECTHUB_AUTH_CONFIG", "{}")
        monkeypatch.delenv("PROJECTHUB_JWT_SECRET", raising=False)
        monkeypatch.setattr("projecthub.auth.factory.settings.jwt_secret", None)

        with pytest.raises(ValueError, match="JWT secret key is required"):
            get_auth_adapter()

    def test_unknown_provider(self, monkeypatch):
        monkeypatch.setenv("PROJECTHUB_AUTH_PROVIDER", "carrier-pigeon")

        with pytest.raises(ValueError, match="Unsupported auth provider"):
            get_auth_adapter()


class TestGetAuthContext:
    @pytest.mark.asyncio
    async def test_no_auth_mode_without_header(self, monkeypatch):
        monkeypatch.setenv("PROJECTHUB_AUTH_PROVIDER", "none")

        context = await get_auth_context(None)

        assert context.is_authenticated
        assert context.user_id == "dev-user"
        assert context.provider == "none"

    @pytest.mark.asyncio
    async def test_missing_header_is_anonymous(self, jwt_auth):
        context = await get_auth_context(None)

        assert not context.is_authenticated
        assert context.token is None

    @pytest.mark.asyncio
    async def test_valid_bearer_token(self, jwt_auth):
        token = await JWTAuthAdapter(secret_key=jwt_auth).issue_token(subject="user-7")

        context = await get_auth_context(f"Bearer {token}")

        assert context.is_authenticated
        assert context.user_id == "user-7"
        assert context.token == token

    @pytest.mark.asyncio
    @pytest.mark.parametrize("header", ["Token abc", "Bearer ", "Bearer not-a-jwt"])
    async def test_bad_credentials_are_anonymous(self, jwt_auth, header):
        context = await get_auth_context(header)

        assert not context.is_authenticated


class TestRequireSession:
    def test_returns_authenticated_context(self):
        context = AuthContext(
            user_id="user-7",
            principal={"provider": "jwt", "subject": "user-7"},
            token="t",
        )

        assert require_session(context) is context

    @pytest.mark.parametrize("context", [None, AuthContext.anonymous()])
    def test_rejects_missing_session(self, context):
        with pytest.raises(AuthenticationError, match="^Not authenticated!$"):
            require_session(context)
