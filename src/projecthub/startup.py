"""
Configuration validation for ProjectHub application.

These checks run during application startup so misconfiguration shows
up in the logs before the first request.
"""

from __future__ import annotations

from typing import Any

from .config import is_production, settings
from .database.connection import check_database_connection
from .logging import get_logger

logger = get_logger(__name__)


class StartupValidationError(Exception):
    """Raised when application validation fails."""

    pass


def _results(**extra: Any) -> dict[str, Any]:
    return {"valid": True, "warnings": [], "errors": [], **extra}


async def validate_database_connection() -> dict[str, Any]:
    """Validate that the project store is reachable."""
    results = _results(store=settings.project_store)

    if settings.project_store.lower() == "memory":
        logger.info("Database validation skipped for in-memory project store")
        return results

    success, error_message = await check_database_connection()
    if success:
        logger.info("Database connection validation successful")
    else:
        results["valid"] = False
        results["errors"].append(error_message)
        logger.error("Database connection validation failed", error=error_message)

    return results


def validate_auth_configuration() -> dict[str, Any]:
    """Validate authentication configuration."""
    results = _results(provider=settings.auth_provider)

    if settings.auth_provider == "none":
        if is_production():
            warning = "No-auth mode detected in production environment - this is a security risk!"
            results["warnings"].append(warning)
            logger.warning(warning)
        else:
            logger.info("Auth validation: No-auth mode enabled for development")

    elif settings.auth_provider == "jwt":
        if not settings.jwt_secret and not settings.auth_config.get("secret_key"):
            error = "JWT authentication enabled but JWT secret not configured"
            results["errors"].append(error)
            results["valid"] = False
            logger.error(error)
        else:
            logger.info("Auth validation: JWT authentication configured")

    else:
        error = f"Unsupported auth provider: {settings.auth_provider}"
        results["errors"].append(error)
        results["valid"] = False
        logger.error(error)

    return results


async def validate_startup_configuration() -> dict[str, Any]:
    """Run every startup check and combine the results."""
    logger.info("Starting application configuration validation")

    db_results = await validate_database_connection()
    auth_results = validate_auth_configuration()

    combined_results = {
        "overall_valid": db_results["valid"] and auth_results["valid"],
        "database": db_results,
        "auth": auth_results,
        "environment": {
            "environment": settings.environment,
            "debug": settings.debug,
        },
    }

    if combined_results["overall_valid"]:
        logger.info("Application configuration validation completed successfully")
    else:
        logger.error(
            "Application configuration validation failed",
            errors=db_results["errors"] + auth_results["errors"],
        )

    warnings = db_results["warnings"] + auth_results["warnings"]
    if warnings:
        logger.warning("Configuration warnings detected", warnings=warnings)

    return combined_results
