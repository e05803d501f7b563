"""Tests for the exception hierarchy and error handling helpers."""

import logging

import pytest
import requests
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from wleddraw.exceptions import (
    ConfigFileInvalidError,
    ConfigValidationError,
    DeviceUnreachableError,
    ErrorContext,
    InvalidColorError,
    InvalidDeviceResponseError,
    NetworkError,
    StoredDataError,
    ValidationError,
    WledDrawError,
    format_error_for_display,
    handle_errors,
    wrap_pydantic_error,
    wrap_request_error,
)

URL = "http://4.3.2.1/json"


class Limited(BaseModel):
    level: int = Field(ge=0, le=10)


@pytest.mark.unit
class TestHierarchy:
    """Test exception attributes."""

    def test_everything_is_a_wleddraw_error(self):
        """All custom exceptions share the base class."""
        for error in (
            DeviceUnreachableError(URL),
            InvalidDeviceResponseError(URL, status_code=404),
            InvalidColorError("#12"),
            StoredDataError("pixelData", "x", "bad"),
            ConfigFileInvalidError("config.json", "Expecting value"),
        ):
            assert isinstance(error, WledDrawError)

    def test_validation_errors_are_recoverable(self):
        assert InvalidColorError("nope").recoverable
        assert isinstance(InvalidColorError("nope"), ValidationError)

    def test_str_is_user_message(self):
        error = DeviceUnreachableError(URL, "refused")
        assert str(error) == "WLED device is not reachable."
        assert "refused" in error.technical_message
        assert "Suggestion:" in error.get_full_message()

    def test_stored_data_preview_is_truncated(self):
        error = StoredDataError("drawHistory", "x" * 200, "not JSON")
        assert len(error.technical_message) < 150

    def test_config_hints_name_the_command_and_valid_values(self):
        error = ConfigValidationError("encoding", "zigzag", "bad value", "config.json")
        assert "wleddraw config set encoding" in error.recovery_hint
        assert "serpentine" in error.recovery_hint
        assert "config.json" in error.recovery_hint

        combined = ConfigValidationError("multiple fields", None, "2 errors")
        assert "wleddraw config show" in combined.recovery_hint

    def test_empty_config_file(self):
        error = ConfigFileInvalidError("config.json", "File is empty")
        assert error.user_message == "Config file is empty"
        assert "config reset" in error.recovery_hint


@pytest.mark.unit
class TestHandlers:
    """Test the decorator and context manager."""

    def test_handle_errors_fallback(self):
        """Errors are logged and the fallback value returned."""

        @handle_errors(operation_name="explode", re_raise=False, fallback_value=-1)
        def explode():
            raise InvalidColorError("bad")

        assert explode() == -1

    def test_handle_errors_re_raise(self):
        @handle_errors(operation_name="explode")
        def explode():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            explode()

    def test_handle_errors_user_notification(self):
        """The user message is passed to the notification callback."""
        messages = []

        @handle_errors(operation_name="send", user_notification=messages.append, re_raise=False)
        def send():
            raise DeviceUnreachableError(URL)

        send()
        assert messages and "not reachable" in messages[0]

    def test_error_context_suppresses(self, caplog):
        """With re_raise=False the error is stored and logged."""
        with caplog.at_level(logging.ERROR):
            with ErrorContext("load state", re_raise=False) as ctx:
                raise StoredDataError("pixelData", "x", "bad")

        assert isinstance(ctx.error, StoredDataError)
        assert "Failed to load state" in caplog.text

    def test_error_context_re_raises(self):
        with pytest.raises(ValueError):
            with ErrorContext("parse"):
                raise ValueError("nope")

    def test_error_context_success(self):
        with ErrorContext("nothing") as ctx:
            pass
        assert ctx.error is None


@pytest.mark.unit
class TestWrappers:
    """Test conversion of library errors."""

    def test_wrap_single_pydantic_error(self):
        with pytest.raises(PydanticValidationError) as exc_info:
            Limited(level=99)
        error = wrap_pydantic_error(exc_info.value, "config.json")
        assert isinstance(error, ConfigValidationError)
        assert "level" in error.user_message

    def test_wrap_invalid_json(self):
        with pytest.raises(PydanticValidationError) as exc_info:
            Limited.model_validate_json("{oops")
        assert isinstance(wrap_pydantic_error(exc_info.value, "config.json"), ConfigFileInvalidError)

    def test_wrap_request_errors(self):
        assert isinstance(wrap_request_error(requests.ConnectionError("x"), URL), DeviceUnreachableError)
        assert isinstance(wrap_request_error(requests.Timeout("x"), URL), DeviceUnreachableError)
        assert isinstance(wrap_request_error(ValueError("x"), URL), InvalidDeviceResponseError)
        generic = wrap_request_error(requests.TooManyRedirects("x"), URL)
        assert type(generic) is NetworkError
        assert generic.url == URL

    def test_wrap_keeps_network_errors(self):
        error = DeviceUnreachableError(URL)
        assert wrap_request_error(error, URL) is error

    def test_format_for_display(self):
        assert format_error_for_display(InvalidColorError("x"))[1] == "Use a hex color such as '#ff2500'."
        assert format_error_for_display(KeyError("k")) == ("KeyError: 'k'", None)
