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
"""
Device cross-reference manager.

Ties the native enumerators, the classifier and the matcher together using
settings from ``ConfigManager``.
"""

import platform
from typing import Any, Dict, List, Optional, Sequence

from config.constants import DEFAULT_COMMAND_TIMEOUT_SECONDS, VALID_LINUX_BACKENDS
from core.base_manager import BaseManager
from core.devices.classifier import classify_device
from core.devices.matcher import CrossReferenceMatcher, MatchOptions, coerce_native_records
from core.devices.models import DeviceRecord, ForeignDeviceRecord, MatchReport
from engines.enumeration import enumerate_native_devices


class DeviceCrossReferenceManager(BaseManager):
    """Enumerate, classify and cross-reference audio devices."""

    def __init__(self, config_manager=None, system: Optional[str] = None):
        """
        Args:
            config_manager: Optional ConfigManager; built-in defaults are used without one
            system: Override for ``platform.system()``
        """
        super().__init__("DeviceCrossReferenceManager")
        self.config_manager = config_manager
        self.system = system or platform.system()
        self.matcher: Optional[CrossReferenceMatcher] = None
        self.direction = "output"
        self.timeout = DEFAULT_COMMAND_TIMEOUT_SECONDS
        self.linux_backends = VALID_LINUX_BACKENDS
        self._last_report: Optional[MatchReport] = None

    def _setting(self, key: str, default: Any) -> Any:
        if self.config_manager is None:
            return default
        return self.config_manager.get(key, default)

    def initialize(self, enable_position_correlation: Optional[bool] = None) -> bool:
        """Load settings and build the matcher."""
        try:
            options = MatchOptions.from_dict(self._setting("matching", {}))
            if enable_position_correlation is not None:
                options.enable_position_correlation = enable_position_correlation
            self.matcher = CrossReferenceMatcher(options)
            self.direction = self._setting("enumeration.direction", self.direction)
            self.timeout = self._setting("enumeration.command_timeout_seconds", self.timeout)
            self.linux_backends = tuple(
                self._setting("enumeration.linux_backends", list(self.linux_backends))
            )
        except (TypeError, ValueError) as e:
            self._handle_error("initialize", e)
            return False

        self._mark_initialized()
        return True

    def _ensure_initialized(self) -> None:
        if not self.is_initialized and not self.initialize():
            raise ValueError(f"{self.name} could not be initialized; check the matching settings")

    def classify_devices(self, devices: Sequence[DeviceRecord]) -> List[DeviceRecord]:
        """Return classified copies of ``devices``."""
        return [classify_device(device) for device in devices]

    def list_native_devices(self, direction: Optional[str] = None) -> List[DeviceRecord]:
        """Enumerate and classify native devices of this host.

        Raises:
            UnsupportedPlatformError: If the host platform has no enumerator
        """
        self._ensure_initialized()
        direction = direction or self.direction
        devices = enumerate_native_devices(
            direction,
            system=self.system,
            timeout=self.timeout,
            linux_backends=self.linux_backends,
        )
        return self.classify_devices(devices)

    def cross_reference(
        self,
        foreign_devices: Sequence[ForeignDeviceRecord],
        native_devices: Optional[Sequence[DeviceRecord]] = None,
        direction: Optional[str] = None,
    ) -> MatchReport:
        """Match ``foreign_devices`` against native devices.

        When ``native_devices`` is omitted the host is enumerated first.
        Supplied native devices are (re)classified before matching.

        Raises:
            InvalidInputError: If either list is not a sequence of records
            UnsupportedPlatformError: If enumeration is needed on an unsupported host
        """
        self._ensure_initialized()
        if native_devices is None:
            natives = self.list_native_devices(direction)
        else:
            natives = self.classify_devices(coerce_native_records(native_devices))

        report = self.matcher.match(natives, foreign_devices)
        self._last_report = report
        self.logger.info(
            "Matched %d of %d native device(s) (%.0f%%)",
            len(report.matches),
            report.native_count,
            report.match_rate * 100,
        )
        return report

    def get_status(self) -> Dict[str, Any]:
        status = super().get_status()
        status.update(
            {
                "system": self.system,
                "direction": self.direction,
                "position_correlation": bool(
                    self.matcher and self.matcher.options.enable_position_correlation
                ),
                "last_match_count": len(self._last_report.matches) if self._last_report else None,
            }
        )
        return status
