# SPDX-License-Identifier: Apache-2.0
#
# Copyright (c) 2025-2026 AudioXRef Contributors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Heuristic device type and connectivity classification from device names."""

from __future__ import annotations

import dataclasses
from typing import NamedTuple, Optional, Sequence, Tuple

from core.devices.keywords import (
    HEADPHONE_KEYWORDS,
    HEADSET_BRAND_KEYWORDS,
    INTEGRATED_AUDIO_KEYWORDS,
    MICROPHONE_KEYWORDS,
    SPEAKER_KEYWORDS,
    WIRED_KEYWORDS,
    WIRELESS_KEYWORDS,
)
from core.devices.models import Connectivity, DeviceRecord, DeviceType

# First matching rule wins.
DEVICE_TYPE_RULES: Tuple[Tuple[Tuple[str, ...], DeviceType], ...] = (
    (HEADPHONE_KEYWORDS + HEADSET_BRAND_KEYWORDS, DeviceType.HEADPHONE),
    (SPEAKER_KEYWORDS, DeviceType.SPEAKER),
    (MICROPHONE_KEYWORDS, DeviceType.MICROPHONE),
    (INTEGRATED_AUDIO_KEYWORDS, DeviceType.SPEAKER),
)

CONNECTIVITY_RULES: Tuple[Tuple[Tuple[str, ...], Connectivity], ...] = (
    (WIRELESS_KEYWORDS, Connectivity.WIRELESS),
    (WIRED_KEYWORDS + INTEGRATED_AUDIO_KEYWORDS, Connectivity.WIRED),
)


class Classification(NamedTuple):
    device_type: DeviceType
    connectivity: Connectivity


def _normalize(name: Optional[str], manufacturer: Optional[str]) -> str:
    """Join name and manufacturer into one lowercase haystack.

    A trailing space is kept so that suffix tokens such as ``"bt "`` can still
    match at the end of a name.
    """
    parts = [str(part) for part in (name, manufacturer) if part]
    if not parts:
        return ""
    return " ".join(parts).lower() + " "


def _first_match(text: str, rules: Sequence, default):
    for keywords, result in rules:
        if any(keyword in text for keyword in keywords):
            return result
    return default


def classify_device_type(name: Optional[str], manufacturer: Optional[str] = "") -> DeviceType:
    """Return the device type for a device name, ``UNKNOWN`` if nothing matches."""
    text = _normalize(name, manufacturer)
    if not text:
        return DeviceType.UNKNOWN
    return _first_match(text, DEVICE_TYPE_RULES, DeviceType.UNKNOWN)


def classify_connectivity(name: Optional[str], manufacturer: Optional[str] = "") -> Connectivity:
    """Return how a device is attached, ``UNKNOWN`` if nothing matches."""
    text = _normalize(name, manufacturer)
    if not text:
        return Connectivity.UNKNOWN
    return _first_match(text, CONNECTIVITY_RULES, Connectivity.UNKNOWN)


def classify(name: Optional[str], manufacturer: Optional[str] = "") -> Classification:
    """Classify a device from its name and manufacturer.

    Never raises; unrecognized or empty input yields ``unknown`` on both axes.

    Args:
        name: Device name as reported by the platform
        manufacturer: Manufacturer string, may be empty

    Returns:
        Classification with ``device_type`` and ``connectivity``
    """
    return Classification(
        device_type=classify_device_type(name, manufacturer),
        connectivity=classify_connectivity(name, manufacturer),
    )


def classify_device(device: DeviceRecord) -> DeviceRecord:
    """Return a copy of ``device`` with type and connectivity filled in."""
    result = classify(device.name, device.manufacturer)
    return dataclasses.replace(
        device,
        device_type=result.device_type,
        connectivity=result.connectivity,
    )
