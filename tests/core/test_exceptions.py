"""Tests for the permission-gate exception hierarchy."""

import pytest

from permission_gate.core.exceptions import (
    AuthorizationError,
    ConfigurationError,
    FetchError,
    ParseError,
    PermissionGateError,
    Unauthorized,
    UnknownPermissionError,
    create_error_response,
    get_http_status_code,
)


class TestExceptionHierarchy:
    """Test cases for exception kinds and status mapping."""

    def test_unauthorized_is_distinct_from_configuration_error(self):
        error = Unauthorized("User is not authorized", permission="one")

        assert isinstance(error, AuthorizationError)
        assert not isinstance(error, ConfigurationError)
        assert error.error_code == "UNAUTHORIZED"
        assert error.details == {"permission": "one"}

    def test_default_error_code_is_class_name(self):
        assert ConfigurationError("broken").error_code == "ConfigurationError"

    def test_unknown_permission_message(self):
        error = UnknownPermissionError("two", "A")

        assert str(error) == "Permission 'two' does not exist for app 'A'"
        assert error.details == {"permission": "two", "app": "A"}

    @pytest.mark.parametrize("error,status_code", [
        (Unauthorized(), 403),
        (UnknownPermissionError("x", "A"), 403),
        (ConfigurationError("broken"), 500),
        (ParseError(), 500),
        (FetchError("down"), 503),
        (PermissionGateError("generic"), 500),
        (ValueError("not ours"), 500),
    ])
    def test_http_status_codes(self, error, status_code):
        assert get_http_status_code(error) == status_code

    def test_create_error_response(self):
        response = create_error_response(Unauthorized("User is not authorized", permission="one"))

        assert response == {
            "error": {
                "code": "UNAUTHORIZED",
                "message": "User is not authorized",
                "details": {"permission": "one"},
                "type": "Unauthorized",
            }
        }
