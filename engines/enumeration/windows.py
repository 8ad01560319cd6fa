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
"""Windows audio device enumeration via PowerShell and ``Win32_SoundDevice``."""

import json
import logging
import shutil
from typing import Any, List, Optional

from config.constants import DIRECTION_INPUT, UNKNOWN_DEVICE_ID, UNKNOWN_MANUFACTURER
from core.devices.models import DeviceRecord
from engines.enumeration.base import SingleListingEnumerator
from utils.error_handler import EnumerationError

logger = logging.getLogger("audioxref.engines.enumeration.windows")

CIM_SOUND_DEVICE_SCRIPT = (
    "Get-CimInstance -ClassName Win32_SoundDevice | "
    "Select-Object Name, Manufacturer, DeviceID, Status | "
    "ConvertTo-Json"
)

# Win32_SoundDevice has no direction field; capture endpoints are recognised by name/id.
CAPTURE_MARKERS = ("capture", "microphone", "input")


def is_capture_device(name: str, device_id: str) -> bool:
    """Return whether a sound device looks like a capture (input) device."""
    text = f"{name} {device_id}".lower()
    return any(marker in text for marker in CAPTURE_MARKERS)


def parse_cim_sound_devices_json(text: str) -> List[DeviceRecord]:
    """Turn ``ConvertTo-Json`` output of ``Win32_SoundDevice`` into records.

    PowerShell emits a bare object instead of an array when a single device
    exists; both shapes are accepted.

    Raises:
        EnumerationError: If ``text`` is not valid JSON
    """
    if not text or not text.strip():
        return []
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise EnumerationError(
            f"Invalid PowerShell output: {exc}", command="powershell"
        ) from exc

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        return []

    devices: List[DeviceRecord] = []
    for entry in data:
        if not isinstance(entry, dict) or not entry.get("Name"):
            continue
        name = str(entry["Name"])
        device_id = str(entry.get("DeviceID") or UNKNOWN_DEVICE_ID)
        direction = "input" if is_capture_device(name, device_id) else "output"
        extra = {"status": entry["Status"]} if entry.get("Status") else {}
        devices.append(
            DeviceRecord(
                name=name,
                id=device_id,
                manufacturer=str(entry.get("Manufacturer") or UNKNOWN_MANUFACTURER),
                direction=direction,
                platform="win32",
                source="windows-wmi",
                extra=extra,
            )
        )
    return devices


class WindowsEnumerator(SingleListingEnumerator):
    """Enumerate sound devices through PowerShell CIM queries."""

    system = "Windows"

    def _powershell_executable(self) -> Optional[str]:
        """Return available PowerShell executable name."""
        for command in ("powershell", "pwsh"):
            if shutil.which(command):
                return command
        return None

    def _read_listing(self) -> str:
        executable = self._powershell_executable()
        if executable is None:
            raise EnumerationError("PowerShell is not available", command="powershell")

        return self._run_command(
            [executable, "-NoProfile", "-NonInteractive", "-Command", CIM_SOUND_DEVICE_SCRIPT]
        )

    def _parse_listing(self, output: str, direction: str) -> List[DeviceRecord]:
        devices = parse_cim_sound_devices_json(output)
        wanted = "input" if direction == DIRECTION_INPUT else "output"
        return [device for device in devices if device.direction == wanted]
