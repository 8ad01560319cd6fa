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
"""Unified interface that all native device enumerators must implement."""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Sequence

from config.constants import (
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    DIRECTION_ALL,
    DIRECTION_INPUT,
    DIRECTION_OUTPUT,
    VALID_DIRECTIONS,
)
from core.devices.models import DeviceRecord
from utils.error_handler import EnumerationError

logger = logging.getLogger("audioxref.engines.enumeration")


def expand_direction(direction: str) -> List[str]:
    """Return the concrete directions covered by ``direction``.

    Raises:
        ValueError: If ``direction`` is not input, output or all
    """
    if direction not in VALID_DIRECTIONS:
        raise ValueError(f"direction must be one of {list(VALID_DIRECTIONS)}, got {direction!r}")
    if direction == DIRECTION_ALL:
        return [DIRECTION_OUTPUT, DIRECTION_INPUT]
    return [direction]


class NativeDeviceEnumerator(ABC):
    """Base class for shell-based audio device enumerators."""

    #: ``platform.system()`` value this enumerator serves
    system = ""

    def __init__(self, timeout: float = DEFAULT_COMMAND_TIMEOUT_SECONDS):
        self.timeout = timeout

    def list_devices(self, direction: str = DIRECTION_OUTPUT) -> List[DeviceRecord]:
        """Enumerate devices for ``direction`` (input, output or all).

        Raises:
            EnumerationError: If a platform command fails or prints unparsable output
        """
        devices: List[DeviceRecord] = []
        for concrete in expand_direction(direction):
            found = self._list_devices(concrete)
            logger.debug("%s found %d %s device(s)", self.__class__.__name__, len(found), concrete)
            devices.extend(found)
        return devices

    @abstractmethod
    def _list_devices(self, direction: str) -> List[DeviceRecord]:
        """Enumerate devices for a single concrete direction."""
        pass

    def _run_command(self, args: Sequence[str]) -> str:
        """Run a platform command and return its stdout.

        Raises:
            EnumerationError: If the command is missing, times out or exits non-zero
        """
        command = " ".join(args[:2])
        try:
            result = subprocess.run(
                list(args), capture_output=True, text=True, timeout=self.timeout
            )
        except FileNotFoundError as exc:
            raise EnumerationError(f"Command not found: {args[0]}", command=command) from exc
        except subprocess.TimeoutExpired as exc:
            raise EnumerationError(
                f"Command timed out after {self.timeout}s: {command}", command=command
            ) from exc
        except OSError as exc:
            raise EnumerationError(f"Could not run {command}: {exc}", command=command) from exc

        if result.returncode != 0:
            error = (result.stderr or result.stdout or "").strip()
            raise EnumerationError(
                f"{command} exited with code {result.returncode}: {error or 'unknown error'}",
                command=command,
            )
        return result.stdout or ""


class SingleListingEnumerator(NativeDeviceEnumerator):
    """Enumerator whose platform command reports every direction in one listing.

    The command runs once per ``list_devices`` call, even for ``all``.
    """

    def list_devices(self, direction: str = DIRECTION_OUTPUT) -> List[DeviceRecord]:
        directions = expand_direction(direction)
        output = self._read_listing()

        devices: List[DeviceRecord] = []
        for concrete in directions:
            found = self._parse_listing(output, concrete)
            logger.debug("%s found %d %s device(s)", self.__class__.__name__, len(found), concrete)
            devices.extend(found)
        return devices

    def _list_devices(self, direction: str) -> List[DeviceRecord]:
        return self._parse_listing(self._read_listing(), direction)

    @abstractmethod
    def _read_listing(self) -> str:
        """Run the platform command and return its raw output."""
        pass

    @abstractmethod
    def _parse_listing(self, output: str, direction: str) -> List[DeviceRecord]:
        """Extract the devices of one concrete direction from ``output``."""
        pass
