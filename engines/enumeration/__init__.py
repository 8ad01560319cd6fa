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
"""Native audio device enumerators and saved device list loaders."""

import logging
import platform
from typing import List, Optional, Sequence

from config.constants import (
    DEFAULT_COMMAND_TIMEOUT_SECONDS,
    DIRECTION_OUTPUT,
    VALID_LINUX_BACKENDS,
)
from core.devices.models import DeviceRecord
from engines.enumeration.base import NativeDeviceEnumerator
from engines.enumeration.linux import LinuxEnumerator
from engines.enumeration.macos import MacOSEnumerator
from engines.enumeration.windows import WindowsEnumerator
from utils.error_handler import EnumerationError, UnsupportedPlatformError

logger = logging.getLogger("audioxref.engines.enumeration")

_ENUMERATORS = {
    MacOSEnumerator.system: MacOSEnumerator,
    WindowsEnumerator.system: WindowsEnumerator,
    LinuxEnumerator.system: LinuxEnumerator,
}


def get_native_enumerator(
    system: Optional[str] = None,
    timeout: float = DEFAULT_COMMAND_TIMEOUT_SECONDS,
    linux_backends: Sequence[str] = VALID_LINUX_BACKENDS,
) -> NativeDeviceEnumerator:
    """Return the enumerator for ``system`` (defaults to ``platform.system()``).

    Raises:
        UnsupportedPlatformError: If no enumerator exists for the platform
    """
    system = system or platform.system()
    enumerator_cls = _ENUMERATORS.get(system)
    if enumerator_cls is None:
        raise UnsupportedPlatformError(system)
    if enumerator_cls is LinuxEnumerator:
        return LinuxEnumerator(timeout=timeout, backends=linux_backends)
    return enumerator_cls(timeout=timeout)


def enumerate_native_devices(
    direction: str = DIRECTION_OUTPUT,
    system: Optional[str] = None,
    timeout: float = DEFAULT_COMMAND_TIMEOUT_SECONDS,
    linux_backends: Sequence[str] = VALID_LINUX_BACKENDS,
) -> List[DeviceRecord]:
    """Enumerate native devices, returning ``[]`` when the platform tools fail.

    Raises:
        UnsupportedPlatformError: If no enumerator exists for the platform
    """
    enumerator = get_native_enumerator(system, timeout=timeout, linux_backends=linux_backends)
    try:
        devices = enumerator.list_devices(direction)
    except EnumerationError as exc:
        logger.warning("Native device enumeration failed: %s", exc)
        return []

    logger.info(
        "Enumerated %d native %s device(s) on %s", len(devices), direction, enumerator.system
    )
    return devices


__all__ = [
    "LinuxEnumerator",
    "MacOSEnumerator",
    "NativeDeviceEnumerator",
    "WindowsEnumerator",
    "enumerate_native_devices",
    "get_native_enumerator",
]
