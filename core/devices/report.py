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
"""Plain-text and JSON rendering of device lists and match reports."""

import json
from typing import List, Optional, Sequence

from config.constants import REPORT_SEPARATOR_LENGTH
from core.devices.models import Confidence, DeviceRecord, MatchReport

# Label shown for foreign devices whose label is hidden until permission is granted
UNLABELED_DEVICE = "Unknown Device"


def _device_line(index: int, device: DeviceRecord) -> List[str]:
    lines = [f"{index}. {device.name or UNLABELED_DEVICE}"]
    lines.append(f"   ID: {device.id}")
    lines.append(
        f"   Type: {device.device_type.value} | Connectivity: {device.connectivity.value}"
    )
    if device.manufacturer:
        lines.append(f"   Manufacturer: {device.manufacturer}")
    if device.is_default:
        lines.append("   Default device")
    for key, value in device.extra.items():
        lines.append(f"   {key}: {value}")
    return lines


def render_device_list(devices: Sequence[DeviceRecord], platform: Optional[str] = None) -> str:
    """Render classified native devices as indented text."""
    if not devices:
        return "No native audio devices found."

    header = f"Found {len(devices)} native audio device(s)"
    if platform:
        header += f" on {platform}"
    default_count = sum(1 for device in devices if device.is_default)
    if default_count:
        header += f" - {default_count} default"

    lines = [header, ""]
    for index, device in enumerate(devices, start=1):
        lines.extend(_device_line(index, device))
    return "\n".join(lines)


def render_match_report(report: MatchReport) -> str:
    """Render a match report: summary, matches by confidence, then leftovers."""
    separator = "=" * REPORT_SEPARATOR_LENGTH
    counts = report.confidence_counts()
    lines = [
        separator,
        "Cross-Reference Summary",
        separator,
        f"Native devices:     {report.native_count}",
        f"Foreign devices:    {report.foreign_count}",
        f"Matched:            {len(report.matches)}",
        f"Unmatched native:   {len(report.unmatched_native)}",
        f"Unmatched foreign:  {len(report.unmatched_foreign)}",
        f"Match rate:         {round(report.match_rate * 100)}%",
        "Confidence:         "
        + ", ".join(f"{level} {counts[level]}" for level in ("high", "medium", "low")),
    ]

    if report.matches:
        lines += ["", "Matched devices"]
        # Stable sort keeps score order within each confidence tier
        ordered = sorted(report.matches, key=lambda m: -m.confidence.rank)
        for index, match in enumerate(ordered, start=1):
            lines.append(
                f"{index}. [{match.confidence.value.upper()}] "
                f"{match.match_type.get_display_name()} (score {round(match.score)}/100)"
            )
            lines.append(f"   Native:  {match.native.name} ({match.native.id})")
            lines.append(
                f"   Foreign: {match.foreign.label or UNLABELED_DEVICE} ({match.foreign.device_id})"
            )

    if report.unmatched_native:
        lines += ["", "Unmatched native devices"]
        for device in report.unmatched_native:
            lines.append(
                f"- {device.name or UNLABELED_DEVICE} ({device.id}) "
                f"{device.device_type.value}/{device.connectivity.value}"
            )

    if report.unmatched_foreign:
        lines += ["", "Unmatched foreign devices"]
        for device in report.unmatched_foreign:
            lines.append(
                f"- {device.label or UNLABELED_DEVICE} ({device.device_id}) group {device.group_id}"
            )

    return "\n".join(lines)


def report_to_json(report: MatchReport, indent: int = 2) -> str:
    return json.dumps(report.to_dict(), indent=indent, ensure_ascii=False)


def devices_to_json(devices: Sequence[DeviceRecord], indent: int = 2) -> str:
    return json.dumps([device.to_dict() for device in devices], indent=indent, ensure_ascii=False)


def low_confidence_matches(report: MatchReport):
    """Return matches a reviewer should double-check."""
    return [match for match in report.matches if match.confidence.rank <= Confidence.LOW.rank]
