# SPDX-License-Identifier: Apache-2.0
"""Unit tests for device type and connectivity classification."""

import pytest

from core.devices.classifier import classify, classify_connectivity, classify_device
from core.devices.keywords import HEADPHONE_KEYWORDS
from core.devices.models import Connectivity, DeviceRecord, DeviceType


@pytest.mark.parametrize("keyword", HEADPHONE_KEYWORDS)
def test_headphone_keywords_classify_as_headphone(keyword):
    result = classify(f"Generic {keyword.title()} 7", "")

    assert result.device_type == DeviceType.HEADPHONE


def test_unrecognized_device_is_unknown_on_both_axes():
    result = classify("Unknown Device XYZ", "")

    assert result.device_type == DeviceType.UNKNOWN
    assert result.connectivity == Connectivity.UNKNOWN


@pytest.mark.parametrize("name", ["", None])
def test_empty_name_is_unknown(name):
    assert classify(name) == (DeviceType.UNKNOWN, Connectivity.UNKNOWN)


def test_headset_brand_wins_over_speaker_and_microphone_words():
    result = classify("SteelSeries Arctis Speaker Mic", "")

    assert result.device_type == DeviceType.HEADPHONE


def test_speaker_before_microphone():
    assert classify("Speaker with Mic").device_type == DeviceType.SPEAKER
    assert classify("LG HDR Monitor").device_type == DeviceType.SPEAKER


def test_microphone_keywords():
    assert classify("Blue Yeti Microphone").device_type == DeviceType.MICROPHONE
    assert classify("HD Pro Webcam C920").device_type == DeviceType.MICROPHONE


def test_integrated_audio_is_wired_speaker():
    result = classify("Realtek High Definition Audio", "Realtek")

    assert result.device_type == DeviceType.SPEAKER
    assert result.connectivity == Connectivity.WIRED


def test_manufacturer_contributes_to_classification():
    assert classify("Model 5", "Sennheiser").device_type == DeviceType.HEADPHONE


def test_wireless_wins_over_wired_words():
    result = classify("Bluetooth USB Dongle Headset")

    assert result.connectivity == Connectivity.WIRELESS


def test_bt_suffix_at_end_of_name_is_wireless():
    assert classify_connectivity("Party Speaker BT") == Connectivity.WIRELESS
    assert classify_connectivity("JBL Charge BTX") == Connectivity.UNKNOWN


def test_airpods_are_wireless_headphones():
    result = classify("AirPods Pro", "Apple Inc.")

    assert result.device_type == DeviceType.HEADPHONE
    assert result.connectivity == Connectivity.WIRELESS


def test_usb_device_is_wired():
    assert classify("Yeti USB Microphone").connectivity == Connectivity.WIRED


def test_classify_device_returns_updated_copy():
    device = DeviceRecord(name="Jabra Evolve 65", id="dev-1", is_default=True, extra={"channels": 2})

    classified = classify_device(device)

    assert classified is not device
    assert classified.device_type == DeviceType.HEADPHONE
    assert classified.id == "dev-1"
    assert classified.is_default is True
    assert classified.extra == {"channels": 2}
    assert device.device_type == DeviceType.UNKNOWN


def test_classified_copy_does_not_share_extra():
    device = DeviceRecord(name="AirPods Pro", id="dev-2", extra={"channels": 2})

    classified = classify_device(device)

    assert classified.extra is not device.extra
    with pytest.raises(TypeError):
        classified.extra["channels"] = 1
    assert device.extra == {"channels": 2}
