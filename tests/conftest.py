# SPDX-License-Identifier: Apache-2.0
"""
Pytest configuration for AudioXRef tests.
"""

import json
import logging

import pytest

from core.devices.models import DeviceRecord, ForeignDeviceRecord


@pytest.fixture
def native_devices():
    """Typical macOS output device list."""
    return [
        DeviceRecord(
            name="MacBook Pro Speakers",
            id="BuiltInSpeakerDevice",
            manufacturer="Apple Inc.",
            is_default=True,
            direction="output",
        ),
        DeviceRecord(name="AirPods Pro", id="AA-BB-CC-DD", manufacturer="Apple Inc."),
        DeviceRecord(name="USB Audio Device", id="AppleUSBAudioEngine:1"),
    ]


@pytest.fixture
def foreign_devices():
    """Browser enumerateDevices() output matching ``native_devices``."""
    return [
        ForeignDeviceRecord(label="Default - MacBook Pro Speakers (Built-in)", device_id="default"),
        ForeignDeviceRecord(label="AirPods Pro (Bluetooth)", device_id="f3a9c0d1e2", group_id="g1"),
        ForeignDeviceRecord(label="USB Audio Device", device_id="77be01", group_id="g2"),
    ]


@pytest.fixture
def write_json(tmp_path):
    """Write ``data`` as JSON under tmp_path and return the path."""

    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def reset_audioxref_logger():
    """Drop handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("audioxref")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
