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
Device records and cross-reference result types.

Native records come from OS-level enumeration, foreign records from a
browser-style ``enumerateDevices()`` call. Both are immutable; classification
produces a new ``DeviceRecord`` via ``dataclasses.replace``.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple

from config.constants import UNKNOWN_MANUFACTURER
from utils.error_handler import InvalidInputError


class DeviceType(str, Enum):
    """Physical device type inferred from the device name."""

    SPEAKER = "speaker"
    HEADPHONE = "headphone"
    MICROPHONE = "microphone"
    UNKNOWN = "unknown"


class Connectivity(str, Enum):
    """How the device is attached to the host."""

    WIRED = "wired"
    WIRELESS = "wireless"
    UNKNOWN = "unknown"


class MatchType(str, Enum):
    """Strategy that produced a similarity score."""

    ID_EXACT = "id-exact"
    NAME_EXACT = "name-exact"
    NAME_SUBSTRING = "name-substring"
    KEYWORDS_MATCH = "keywords-match"
    FUZZY_SIMILARITY = "fuzzy-similarity"
    BRAND_MATCH = "brand-match"
    DEFAULT_DEVICE = "default-device"
    POSITION_CORRELATION = "position-correlation"
    NO_MATCH = "no-match"

    def get_display_name(self) -> str:
        """Return a human readable label for reports."""
        display_names = {
            MatchType.ID_EXACT: "Exact ID Match",
            MatchType.NAME_EXACT: "Exact Name Match",
            MatchType.NAME_SUBSTRING: "Substring Match",
            MatchType.KEYWORDS_MATCH: "Keyword Match",
            MatchType.FUZZY_SIMILARITY: "Fuzzy Text Similarity",
            MatchType.BRAND_MATCH: "Brand/Manufacturer Match",
            MatchType.DEFAULT_DEVICE: "Default Device",
            MatchType.POSITION_CORRELATION: "Position Correlation",
            MatchType.NO_MATCH: "No Match",
        }
        return display_names[self]


class Confidence(str, Enum):
    """Coarse reliability tier attached to a similarity score."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        """Sort key; higher is more reliable."""
        return _CONFIDENCE_RANKS[self]


_CONFIDENCE_RANKS = {
    Confidence.NONE: 0,
    Confidence.LOW: 1,
    Confidence.MEDIUM: 2,
    Confidence.HIGH: 3,
}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


@dataclass(frozen=True)
class DeviceRecord:
    """Audio device reported by the operating system."""

    name: str
    id: str
    manufacturer: str = UNKNOWN_MANUFACTURER
    device_type: DeviceType = DeviceType.UNKNOWN
    connectivity: Connectivity = Connectivity.UNKNOWN
    is_default: bool = False
    direction: str = ""
    platform: str = ""
    source: str = ""
    # Per-OS details such as channels, sample rate, driver or status
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    _KNOWN_KEYS = frozenset(
        {
            "name",
            "id",
            "manufacturer",
            "deviceType",
            "device_type",
            "connectivity",
            "isDefault",
            "is_default",
            "direction",
            "type",
            "platform",
            "source",
        }
    )

    def __post_init__(self) -> None:
        # Copies made by dataclasses.replace must not share a writable dict.
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra or {})))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeviceRecord":
        """Build a record from supplier output (camelCase or snake_case keys).

        Raises:
            InvalidInputError: If ``data`` is not a mapping
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Native device entries must be objects, got {type(data).__name__}",
                argument="native_devices",
            )

        try:
            device_type = DeviceType(data.get("deviceType", data.get("device_type")))
        except ValueError:
            device_type = DeviceType.UNKNOWN
        try:
            connectivity = Connectivity(data.get("connectivity"))
        except ValueError:
            connectivity = Connectivity.UNKNOWN

        manufacturer = _text(data.get("manufacturer")).strip() or UNKNOWN_MANUFACTURER
        extra = {k: v for k, v in data.items() if k not in cls._KNOWN_KEYS}

        return cls(
            name=_text(data.get("name")),
            id=_text(data.get("id")),
            manufacturer=manufacturer,
            device_type=device_type,
            connectivity=connectivity,
            is_default=_flag(data.get("isDefault", data.get("is_default", False))),
            direction=_text(data.get("direction", data.get("type"))),
            platform=_text(data.get("platform")),
            source=_text(data.get("source")),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase keys of the supplier format."""
        result: Dict[str, Any] = {
            "name": self.name,
            "id": self.id,
            "manufacturer": self.manufacturer,
            "deviceType": self.device_type.value,
            "connectivity": self.connectivity.value,
            "isDefault": self.is_default,
        }
        if self.direction:
            result["direction"] = self.direction
        if self.platform:
            result["platform"] = self.platform
        if self.source:
            result["source"] = self.source
        result.update(self.extra)
        return result


@dataclass(frozen=True)
class ForeignDeviceRecord:
    """Audio device reported by a browser ``enumerateDevices()`` call."""

    label: str
    device_id: str
    group_id: str = ""
    kind: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ForeignDeviceRecord":
        """Build a record from ``MediaDeviceInfo``-shaped data.

        Raises:
            InvalidInputError: If ``data`` is not a mapping
        """
        if not isinstance(data, Mapping):
            raise InvalidInputError(
                f"Foreign device entries must be objects, got {type(data).__name__}",
                argument="foreign_devices",
            )
        return cls(
            label=_text(data.get("label")),
            device_id=_text(data.get("deviceId", data.get("device_id"))),
            group_id=_text(data.get("groupId", data.get("group_id"))),
            kind=_text(data.get("kind")),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "label": self.label,
            "deviceId": self.device_id,
            "groupId": self.group_id,
        }
        if self.kind:
            result["kind"] = self.kind
        return result


@dataclass(frozen=True)
class SimilarityResult:
    """Score produced by the first matching strategy for a device pair."""

    score: float
    match_type: MatchType
    confidence: Confidence

    @classmethod
    def no_match(cls) -> "SimilarityResult":
        return cls(score=0.0, match_type=MatchType.NO_MATCH, confidence=Confidence.NONE)

    @property
    def is_match(self) -> bool:
        return self.score > 0


@dataclass(frozen=True)
class Match:
    """A native device paired with the foreign device it most likely is."""

    native: DeviceRecord
    foreign: ForeignDeviceRecord
    match_type: MatchType
    confidence: Confidence
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "native": self.native.to_dict(),
            "foreign": self.foreign.to_dict(),
            "matchType": self.match_type.value,
            "confidence": self.confidence.value,
            "score": round(self.score, 2),
        }


@dataclass(frozen=True)
class MatchReport:
    """Result of cross-referencing a native list against a foreign list.

    Every input record appears exactly once: either inside one ``Match`` or
    in the unmatched tuple for its side, in input order.
    """

    matches: Tuple[Match, ...] = ()
    unmatched_native: Tuple[DeviceRecord, ...] = ()
    unmatched_foreign: Tuple[ForeignDeviceRecord, ...] = ()

    @property
    def native_count(self) -> int:
        return len(self.matches) + len(self.unmatched_native)

    @property
    def foreign_count(self) -> int:
        return len(self.matches) + len(self.unmatched_foreign)

    @property
    def match_rate(self) -> float:
        """Fraction of native devices that were matched (0.0 when there are none)."""
        if self.native_count == 0:
            return 0.0
        return len(self.matches) / self.native_count

    def confidence_counts(self) -> Dict[str, int]:
        counts = {level.value: 0 for level in (Confidence.HIGH, Confidence.MEDIUM, Confidence.LOW)}
        for match in self.matches:
            counts[match.confidence.value] = counts.get(match.confidence.value, 0) + 1
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": [match.to_dict() for match in self.matches],
            "unmatchedNative": [device.to_dict() for device in self.unmatched_native],
            "unmatchedForeign": [device.to_dict() for device in self.unmatched_foreign],
            "summary": {
                "nativeCount": self.native_count,
                "foreignCount": self.foreign_count,
                "matched": len(self.matches),
                "matchRate": round(self.match_rate, 4),
                "confidence": self.confidence_counts(),
            },
        }
