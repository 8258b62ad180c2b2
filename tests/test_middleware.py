"""Tests for request logging helpers."""

import logging

import pytest

from projecthub.logging import (
    add_request_context,
    bind_user,
    clear_request_context,
    configure_logging,
    generate_request_id,
    set_request_context,
)
from projecthub.middleware import operation_name_from_payload, sanitize_query_params


class TestSanitizeQueryParams:
    def test_redacts_sensitive_keys(self):
        sanitized = sanitize_query_params(
            {"access_token": "abc", "Authorization": "Bearer x", "page": "2"}
        )

        assert sanitized == {
            "access_token": "[REDACTED]",
            "Authorization": "[REDACTED]",
            "page": "2",
        }


class TestOperationName:
    @pytest.mark.parametrize(
        "payload, expected",
        [
            ({"operationName": "Create", "query": "mutation Other { x }"}, "Create"),
            ({"query": "mutation CreateProject { createProject }"}, "mutation:CreateProject"),
            ({"query": "query IsProject($userId: Int!) { isProject }"}, "IsProject"),
            ({"query": "{ projects { id } }"}, "unnamed_operation"),
            ({"query": "query IntrospectionQuery { __schema { types { name } } }"}, "__introspection"),
            ({}, None),
        ],
    )
    def test_operation_name_from_payload(self, payload, expected):
        assert operation_name_from_payload(payload) == expected


class TestRequestContext:
    def test_set_and_clear(self):
        request_id = set_request_context(user_id="user-7")

        assert add_request_context(None, "info", {"event": "x"}) == {
            "event": "x",
            "request_id": request_id,
            "user_id": "user-7",
        }

        clear_request_context()

        assert add_request_context(None, "info", {"event": "x"}) == {"event": "x"}

    def test_keeps_supplied_request_id(self):
        assert set_request_context("abc123") == "abc123"
        clear_request_context()

    def test_bind_user_after_request_start(self):
        set_request_context()
        bind_user("user-9")

        assert add_request_context(None, "info", {})["user_id"] == "user-9"
        clear_request_context()

    def test_request_ids_are_unique(self):
        ids = {generate_request_id() for _ in range(100)}

        assert len(ids) == 100


class TestConfigureLogging:
    @pytest.mark.parametrize(
        "debug, level, expected",
        [
            (False, "warning", logging.WARNING),
            (False, "nonsense", logging.INFO),
            (True, "error", logging.DEBUG),
        ],
    )
    def test_root_level(self, debug, level, expected):
        configure_logging(debug=debug, level=level)

        assert logging.getLogger().level == expected
