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
"""macOS audio device enumeration via ``system_profiler SPAudioDataType -json``."""

import json
import logging
from typing import Any, Dict, List

from config.constants import DIRECTION_INPUT, UNKNOWN_DEVICE_ID, UNKNOWN_MANUFACTURER
from core.devices.models import DeviceRecord
from engines.enumeration.base import SingleListingEnumerator
from utils.error_handler import EnumerationError

logger = logging.getLogger("audioxref.engines.enumeration.macos")

SYSTEM_PROFILER_COMMAND = ("system_profiler", "SPAudioDataType", "-json")

# system_profiler renamed several keys across macOS releases; newest first.
_CHANNEL_KEYS = {
    "input": ("coreaudio_device_input", "coreaudio_inputs"),
    "output": ("coreaudio_device_output", "coreaudio_outputs"),
}
_SOURCE_KEYS = {
    "input": "coreaudio_input_source",
    "output": "coreaudio_output_source",
}
_DEFAULT_KEYS = {
    "input": ("coreaudio_default_audio_input_device",),
    "output": ("coreaudio_default_audio_output_device", "coreaudio_default_audio_system_device"),
}
_SAMPLE_RATE_KEYS = ("coreaudio_device_srate", "coreaudio_current_sample_rate")
_YES_VALUES = ("spaudio_yes", "yes")


def _first(device: Dict[str, Any], keys) -> Any:
    for key in keys:
        if key in device and device[key] not in (None, ""):
            return device[key]
    return None


def _supports_direction(device: Dict[str, Any], direction: str) -> bool:
    channels = _first(device, _CHANNEL_KEYS[direction])
    if channels not in (None, 0, "0"):
        return True

    source = device.get(_SOURCE_KEYS[direction])
    if source and source != "No":
        return True

    label = "Input" if direction == DIRECTION_INPUT else "Output"
    return label in str(device.get("_name", ""))


def _is_default(device: Dict[str, Any], direction: str) -> bool:
    return any(
        str(device.get(key, "")).lower() in _YES_VALUES for key in _DEFAULT_KEYS[direction]
    )


def parse_system_profiler_json(text: str, direction: str) -> List[DeviceRecord]:
    """Turn ``system_profiler SPAudioDataType -json`` output into device records.

    Raises:
        EnumerationError: If ``text`` is not valid JSON
    """
    if not text or not text.strip():
        return []
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise EnumerationError(
            f"Invalid system_profiler output: {exc}", command="system_profiler"
        ) from exc

    devices: List[DeviceRecord] = []
    sections = data.get("SPAudioDataType") if isinstance(data, dict) else None
    for section in sections or []:
        if not isinstance(section, dict):
            continue
        for device in section.get("_items") or []:
            if not isinstance(device, dict) or not device.get("_name"):
                continue
            if not _supports_direction(device, direction):
                continue

            extra = {
                "channels": _first(device, _CHANNEL_KEYS[direction]),
                "sampleRate": _first(device, _SAMPLE_RATE_KEYS),
                "transport": device.get("coreaudio_device_transport"),
            }
            devices.append(
                DeviceRecord(
                    name=str(device["_name"]),
                    id=str(device.get("coreaudio_device_id") or UNKNOWN_DEVICE_ID),
                    manufacturer=str(
                        device.get("coreaudio_device_manufacturer") or UNKNOWN_MANUFACTURER
                    ),
                    is_default=_is_default(device, direction),
                    direction=direction,
                    platform="darwin",
                    source="system_profiler",
                    extra={k: v for k, v in extra.items() if v is not None},
                )
            )
    return devices


class MacOSEnumerator(SingleListingEnumerator):
    """Enumerate Core Audio devices through ``system_profiler``."""

    system = "Darwin"

    def _read_listing(self) -> str:
        return self._run_command(SYSTEM_PROFILER_COMMAND)

    def _parse_listing(self, output: str, direction: str) -> List[DeviceRecord]:
        return parse_system_profiler_json(output, direction)
