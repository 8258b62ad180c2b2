"""Tests for startup configuration checks."""

import pytest

from projecthub import startup
from projecthub.startup import validate_auth_configuration, validate_startup_configuration


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.setattr(startup.settings, "auth_provider", "none")
    monkeypatch.setattr(startup.settings, "environment", "development")
    monkeypatch.setattr(startup.settings, "jwt_secret", None)
    monkeypatch.setattr(startup.settings, "auth_config", {})
    monkeypatch.setattr(startup.settings, "project_store", "memory")
    return startup.settings


class TestAuthValidation:
    def test_no_auth_in_development(self, settings):
        results = validate_auth_configuration()

        assert results["valid"]
        assert results["warnings"] == []

    def test_no_auth_in_production_warns(self, settings):
        settings.environment = "production"

        results = validate_auth_configuration()

        assert results["valid"]
        assert len(results["warnings"]) == 1

    def test_jwt_without_secret(self, settings):
        settings.auth_provider = "jwt"

        results = validate_auth_configuration()

        assert not results["valid"]
        assert "secret" in results["errors"][0]

    def test_jwt_with_secret(self, settings):
        settings.auth_provider = "jwt"
        settings.jwt_secret = "s3cret"

        assert validate_auth_configuration()["valid"]

    def test_unknown_provider(self, settings):
        settings.auth_provider = "kerberos"

        assert not validate_auth_configuration()["valid"]


class TestStartupValidation:
    @pytest.mark.asyncio
    async def test_memory_store_skips_database(self, settings):
        results = await validate_startup_configuration()

        assert results["overall_valid"]
        assert results["database"]["store"] == "memory"

    @pytest.mark.asyncio
    async def test_sql_store_checks_database(self, settings, sqlite_database):
        settings.project_store = "sql"

        results = await validate_startup_configuration()

        assert results["overall_valid"]
