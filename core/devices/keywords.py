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
"""Keyword vocabularies shared by the device classifier and the matcher.

All entries are lowercase; callers lowercase the text before lookup. Order
matters only where a tuple is documented as a priority list.
"""

from typing import Tuple

# ---------------------------------------------------------------------------
# Device type vocabulary (classifier)
# ---------------------------------------------------------------------------

HEADPHONE_KEYWORDS: Tuple[str, ...] = (
    "headphone",
    "headset",
    "earbud",
    "earphone",
)

# Brands that almost exclusively ship headsets or earbuds.
HEADSET_BRAND_KEYWORDS: Tuple[str, ...] = (
    "airpods",
    "beats",
    "sennheiser",
    "bose",
    "jabra",
    "steelseries",
    "hyperx",
    "razer",
    "corsair",
    "logitech g",
    "sony wh",
    "skullcandy",
    "plantronics",
)

SPEAKER_KEYWORDS: Tuple[str, ...] = (
    "speaker",
    "monitor",
    "soundbar",
    "subwoofer",
    "built-in output",
    "built-in speaker",
)

MICROPHONE_KEYWORDS: Tuple[str, ...] = (
    "microphone",
    "mic",
    "input",
    "capture",
    "webcam",
    "camera",
)

# Generic on-board audio; treated as speakers and as wired.
INTEGRATED_AUDIO_KEYWORDS: Tuple[str, ...] = (
    "audio",
    "sound",
    "realtek",
    "amd",
    "nvidia",
    "intel",
)

# ---------------------------------------------------------------------------
# Connectivity vocabulary (classifier)
# ---------------------------------------------------------------------------

WIRELESS_KEYWORDS: Tuple[str, ...] = (
    "bluetooth",
    "wireless",
    "wifi",
    "2.4ghz",
    "true wireless",
    "airpods",
    "bt ",
)

WIRED_KEYWORDS: Tuple[str, ...] = (
    "usb",
    "analog",
    "digital",
    "3.5mm",
    "jack",
    "line",
    "xlr",
    "trs",
    "built-in",
    "internal",
    "wired",
    "cable",
    "high definition audio",
)

# ---------------------------------------------------------------------------
# Matching vocabulary (similarity scorer)
# ---------------------------------------------------------------------------

DEVICE_TYPE_MATCH_KEYWORDS: Tuple[str, ...] = (
    "speaker",
    "headphone",
    "headset",
    "earbud",
)

AUDIO_MATCH_KEYWORDS: Tuple[str, ...] = DEVICE_TYPE_MATCH_KEYWORDS + (
    "airpods",
    "bluetooth",
    "usb",
    "hdmi",
    "realtek",
    "nvidia",
    "amd",
    "intel",
)

BRAND_KEYWORDS: Tuple[str, ...] = (
    "apple",
    "beats",
    "sony",
    "bose",
    "sennheiser",
    "jabra",
    "logitech",
    "corsair",
    "razer",
    "steelseries",
)

MATCH_VOCABULARY: Tuple[str, ...] = AUDIO_MATCH_KEYWORDS + BRAND_KEYWORDS
