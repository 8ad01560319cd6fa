# SPDX-License-Identifier: Apache-2.0
"""Unit tests for device list and match report rendering."""

import json

from core.devices.matcher import match
from core.devices.models import DeviceRecord, DeviceType, ForeignDeviceRecord
from core.devices.report import (
    devices_to_json,
    low_confidence_matches,
    render_device_list,
    render_match_report,
    report_to_json,
)


def test_render_device_list_lists_each_device():
    devices = [
        DeviceRecord(
            name="MacBook Pro Speakers",
            id="BuiltInSpeakerDevice",
            device_type=DeviceType.SPEAKER,
            is_default=True,
            extra={"channels": 2},
        ),
        DeviceRecord(name="", id="hw:1,0"),
    ]

    text = render_device_list(devices, platform="Darwin")

    assert text.startswith("Found 2 native audio device(s) on Darwin - 1 default")
    assert "1. MacBook Pro Speakers" in text
    assert "Type: speaker | Connectivity: unknown" in text
    assert "channels: 2" in text
    assert "2. Unknown Device" in text


def test_render_empty_device_list():
    assert render_device_list([]) == "No native audio devices found."


def test_render_match_report_sections(native_devices, foreign_devices):
    extra_foreign = foreign_devices + [ForeignDeviceRecord(label="", device_id="hidden", group_id="g9")]

    text = render_match_report(match(native_devices, extra_foreign))

    assert "Cross-Reference Summary" in text
    assert "Match rate:         100%" in text
    assert "[HIGH] Exact Name Match (score 100/100)" in text
    assert "Unmatched foreign devices" in text
    assert "- Unknown Device (hidden) group g9" in text
    assert "Unmatched native devices" not in text


def test_report_to_json_is_parseable(native_devices, foreign_devices):
    data = json.loads(report_to_json(match(native_devices, foreign_devices)))

    assert data["summary"]["matched"] == 3
    assert {m["matchType"] for m in data["matches"]} == {
        "name-exact",
        "default-device",
        "name-substring",
    }


def test_devices_to_json_uses_camel_case_keys():
    data = json.loads(devices_to_json([DeviceRecord(name="Speakers", id="n1", is_default=True)]))

    assert data == [
        {
            "name": "Speakers",
            "id": "n1",
            "manufacturer": "Unknown",
            "deviceType": "unknown",
            "connectivity": "unknown",
            "isDefault": True,
        }
    ]


def test_low_confidence_matches():
    report = match(
        [DeviceRecord(name="NVIDIA Output", id="n1"), DeviceRecord(name="USB Speakers", id="n2")],
        [
            ForeignDeviceRecord(label="Port NVIDIA Digital", device_id="w1"),
            ForeignDeviceRecord(label="USB Speakers", device_id="w2"),
        ],
    )

    review = low_confidence_matches(report)

    assert [m.native.id for m in review] == ["n1"]
