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
Load device lists saved as JSON.

Foreign lists are ``navigator.mediaDevices.enumerateDevices()`` dumps
(``[{"label", "deviceId", "groupId", "kind"}, ...]``). Native lists use the
record shape produced by the enumerators, optionally wrapped as
``{"devices": [...], "platform": "..."}``.
"""

import json
import logging
from pathlib import Path
from typing import IO, Any, Iterable, List, Optional, Union

from core.devices.models import DeviceRecord, ForeignDeviceRecord
from utils.error_handler import InvalidInputError

logger = logging.getLogger("audioxref.engines.enumeration.snapshots")

PathOrStream = Union[str, Path, IO[str]]
KindFilter = Optional[Union[str, Iterable[str]]]


def _read_json(source: PathOrStream) -> Any:
    if hasattr(source, "read"):
        return json.load(source)
    with open(source, "r", encoding="utf-8") as f:
        return json.load(f)


def _unwrap_device_list(data: Any, argument: str) -> list:
    if isinstance(data, dict) and "devices" in data:
        data = data["devices"]
    if not isinstance(data, list):
        raise InvalidInputError(
            f"{argument} must be a JSON array of device objects, got {type(data).__name__}",
            argument=argument,
        )
    return data


def _kind_set(kind: KindFilter) -> frozenset:
    if not kind:
        return frozenset()
    if isinstance(kind, str):
        return frozenset((kind,))
    return frozenset(kind)


def parse_foreign_devices(data: Any, kind: KindFilter = None) -> List[ForeignDeviceRecord]:
    """Convert decoded ``enumerateDevices()`` data into foreign records.

    Entries that are not objects are skipped with a warning. ``kind`` is one
    ``MediaDeviceInfo.kind`` or a collection of them; entries of any other kind
    are dropped and entries without a kind are kept.

    Raises:
        InvalidInputError: If the top level is not a list (or ``{"devices": [...]}``)
    """
    entries = _unwrap_device_list(data, "foreign_devices")
    kinds = _kind_set(kind)
    devices: List[ForeignDeviceRecord] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Skipping foreign device entry %d: not an object", index)
            continue
        device = ForeignDeviceRecord.from_dict(entry)
        if kinds and device.kind and device.kind not in kinds:
            continue
        devices.append(device)
    return devices


def parse_native_devices(data: Any) -> List[DeviceRecord]:
    """Convert decoded native device data into records, skipping non-objects.

    Raises:
        InvalidInputError: If the top level is not a list (or ``{"devices": [...]}``)
    """
    entries = _unwrap_device_list(data, "native_devices")
    devices: List[DeviceRecord] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Skipping native device entry %d: not an object", index)
            continue
        devices.append(DeviceRecord.from_dict(entry))
    return devices


def load_foreign_devices(source: PathOrStream, kind: KindFilter = None) -> List[ForeignDeviceRecord]:
    """Read a foreign device list from a JSON file or stream."""
    devices = parse_foreign_devices(_read_json(source), kind=kind)
    logger.info("Loaded %d foreign device(s)", len(devices))
    return devices


def load_native_devices(source: PathOrStream) -> List[DeviceRecord]:
    """Read a saved native device list from a JSON file or stream."""
    devices = parse_native_devices(_read_json(source))
    logger.info("Loaded %d native device(s)", len(devices))
    return devices
