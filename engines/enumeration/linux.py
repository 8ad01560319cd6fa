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
"""Linux audio device enumeration via ALSA utilities with a PulseAudio fallback."""

import logging
import re
from typing import List, Optional, Sequence

from config.constants import (
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    DIRECTION_INPUT,
    LINUX_BACKEND_ALSA,
    LINUX_BACKEND_PULSEAUDIO,
    UNKNOWN_DEVICE_ID,
    UNKNOWN_MANUFACTURER,
)
from core.devices.models import DeviceRecord
from engines.enumeration.base import NativeDeviceEnumerator
from utils.error_handler import EnumerationError

logger = logging.getLogger("audioxref.engines.enumeration.linux")

# card 0: PCH [HDA Intel PCH], device 0: ALC3246 Analog [ALC3246 Analog]
_ALSA_DEVICE_PATTERN = re.compile(
    r"^card (\d+): (\S+) \[(.+?)\], device (\d+): (.+?) \[(.+?)\]"
)
_ALSA_CARD_PATTERN = re.compile(r"^card (\d+): (.+?) \[(.+?)\]")

PULSEAUDIO_MONITOR_SUFFIX = ".monitor"


def parse_alsa_listing(text: str, direction: str) -> List[DeviceRecord]:
    """Parse ``arecord -l`` / ``aplay -l`` output into one record per PCM device."""
    devices: List[DeviceRecord] = []
    for line in (text or "").splitlines():
        line = line.strip()
        device_match = _ALSA_DEVICE_PATTERN.match(line)
        if device_match:
            card, card_id, card_name, device, _, device_name = device_match.groups()
            devices.append(
                DeviceRecord(
                    name=f"{card_name} - {device_name}",
                    id=f"hw:{card},{device}",
                    manufacturer=UNKNOWN_MANUFACTURER,
                    direction=direction,
                    platform="linux",
                    source="alsa",
                    extra={"driver": "ALSA", "card": card_id, "description": card_name},
                )
            )
            continue

        card_match = _ALSA_CARD_PATTERN.match(line)
        if card_match:
            card, card_id, card_name = card_match.groups()
            devices.append(
                DeviceRecord(
                    name=card_id,
                    id=f"hw:{card}",
                    direction=direction,
                    platform="linux",
                    source="alsa",
                    extra={"driver": "ALSA", "description": card_name},
                )
            )
    return devices


def parse_pactl_short(
    text: str, direction: str, default_name: Optional[str] = None
) -> List[DeviceRecord]:
    """Parse ``pactl list sources|sinks short`` output.

    Monitor sources mirror an output sink and are skipped for input listings.
    """
    devices: List[DeviceRecord] = []
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        parts = line.split("\t")
        name = parts[1].strip() if len(parts) > 1 and parts[1].strip() else "Unknown"
        if direction == DIRECTION_INPUT and name.endswith(PULSEAUDIO_MONITOR_SUFFIX):
            continue
        extra = {"driver": parts[2].strip() if len(parts) > 2 and parts[2].strip() else "PulseAudio"}
        if len(parts) > 4 and parts[4].strip():
            extra["state"] = parts[4].strip()
        devices.append(
            DeviceRecord(
                name=name,
                id=parts[0].strip() or UNKNOWN_DEVICE_ID,
                is_default=bool(default_name) and name == default_name,
                direction=direction,
                platform="linux",
                source="pulseaudio",
                extra=extra,
            )
        )
    return devices


class LinuxEnumerator(NativeDeviceEnumerator):
    """Enumerate devices with ALSA tools, falling back to PulseAudio's ``pactl``."""

    system = "Linux"

    def __init__(
        self,
        timeout: float = DEFAULT_COMMAND_TIMEOUT_SECONDS,
        backends: Sequence[str] = (LINUX_BACKEND_ALSA, LINUX_BACKEND_PULSEAUDIO),
    ):
        super().__init__(timeout=timeout)
        self.backends = tuple(backends)

    def _list_devices(self, direction: str) -> List[DeviceRecord]:
        errors = []
        for backend in self.backends:
            try:
                if backend == LINUX_BACKEND_ALSA:
                    devices = self._list_alsa(direction)
                elif backend == LINUX_BACKEND_PULSEAUDIO:
                    devices = self._list_pulseaudio(direction)
                else:
                    logger.warning("Ignoring unknown Linux audio backend: %s", backend)
                    continue
            except EnumerationError as exc:
                logger.info("%s enumeration failed, trying next backend: %s", backend, exc)
                errors.append(str(exc))
                continue

            if devices:
                return devices
            logger.info("%s reported no %s devices", backend, direction)

        if errors and len(errors) == len(self.backends):
            raise EnumerationError(
                "Neither ALSA nor PulseAudio could be queried: " + "; ".join(errors)
            )
        return []

    def _list_alsa(self, direction: str) -> List[DeviceRecord]:
        command = "arecord" if direction == DIRECTION_INPUT else "aplay"
        return parse_alsa_listing(self._run_command([command, "-l"]), direction)

    def _list_pulseaudio(self, direction: str) -> List[DeviceRecord]:
        kind = "sources" if direction == DIRECTION_INPUT else "sinks"
        output = self._run_command(["pactl", "list", kind, "short"])
        return parse_pactl_short(output, direction, default_name=self._pactl_default(direction))

    def _pactl_default(self, direction: str) -> Optional[str]:
        """Return the default sink/source name; older pactl releases lack the subcommand."""
        subcommand = "get-default-source" if direction == DIRECTION_INPUT else "get-default-sink"
        try:
            output = self._run_command(["pactl", subcommand])
        except EnumerationError as exc:
            logger.debug("Could not query PulseAudio default device: %s", exc)
            return None
        lines = output.strip().splitlines()
        return lines[-1].strip() if lines else None
