# SPDX-License-Identifier: Apache-2.0
"""Unit tests for the unified error handler."""

import json
import subprocess

import pytest

from utils.error_handler import (
    AudioXRefError,
    EnumerationError,
    ErrorCategory,
    ErrorHandler,
    InvalidInputError,
    UnsupportedPlatformError,
)


def test_invalid_input_error_info():
    info = ErrorHandler.handle_error(InvalidInputError("native_devices must be a sequence"))

    assert info["user_message"] == "native_devices must be a sequence"
    assert info["category"] == "validation"
    assert info["retry_possible"] is False


def test_enumeration_error_is_retryable():
    info = ErrorHandler.handle_error(EnumerationError(command="aplay -l"))

    assert info["user_message"] == "Device enumeration failed"
    assert ErrorHandler.is_retryable(info) is True


def test_unsupported_platform_message_names_system():
    error = UnsupportedPlatformError("Plan9")
    info = ErrorHandler.handle_error(error)

    assert "Plan9" in info["user_message"]
    assert info["category"] == ErrorCategory.PLATFORM.value
    assert error.system == "Plan9"


@pytest.mark.parametrize(
    "error, category, retry",
    [
        (FileNotFoundError("devices.json"), "validation", False),
        (json.JSONDecodeError("Expecting value", "", 0), "validation", False),
        (subprocess.TimeoutExpired(cmd="pactl", timeout=10), "enumeration", True),
        (ValueError("bad direction"), "configuration", False),
        (RuntimeError("unexpected"), "unknown", False),
    ],
)
def test_builtin_errors_are_categorized(error, category, retry):
    info = ErrorHandler.handle_error(error, {"command": "match"})

    assert info["category"] == category
    assert info["retry_possible"] is retry


def test_format_user_message_appends_action():
    info = ErrorHandler.handle_error(InvalidInputError())

    assert ErrorHandler.format_user_message(info) == (
        "Input validation failed\nPass lists of device records (JSON arrays of objects)"
    )
    assert ErrorHandler.format_user_message(info, include_action=False) == "Input validation failed"


def test_custom_errors_share_base_class():
    for error in (InvalidInputError(), UnsupportedPlatformError(""), EnumerationError()):
        assert isinstance(error, AudioXRefError)


def test_category_display_names():
    assert ErrorCategory.ENUMERATION.get_display_name() == "Device Enumeration"
