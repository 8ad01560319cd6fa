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
Pairwise similarity between a native device and a foreign device.

Strategies are tried in a fixed order and the first one that yields a
nonzero score wins; scores from different strategies are never summed.
"""

from __future__ import annotations

import re
from collections import Counter
from typing import FrozenSet, List

from config.constants import (
    DEFAULT_DEVICE_MATCH_SCORE,
    FOREIGN_COMMUNICATIONS_DEVICE_ID,
    FOREIGN_DEFAULT_DEVICE_ID,
    MAX_MATCH_SCORE,
    POSITION_CORRELATION_SCORE,
    UNKNOWN_DEVICE_ID,
)
from core.devices.keywords import BRAND_KEYWORDS, DEVICE_TYPE_MATCH_KEYWORDS, MATCH_VOCABULARY
from core.devices.models import Confidence, MatchType, SimilarityResult

# Ids that never identify hardware on their own.
PLACEHOLDER_IDS = frozenset(
    {UNKNOWN_DEVICE_ID, FOREIGN_DEFAULT_DEVICE_ID, FOREIGN_COMMUNICATIONS_DEVICE_ID}
)

# Shorter ids (ALSA card numbers, PulseAudio indices) only count on exact equality.
MIN_ID_CONTAINMENT_LENGTH = 4

MIN_TOKEN_LENGTH = 3
FUZZY_SIMILARITY_THRESHOLD = 0.6
FUZZY_MEDIUM_CONFIDENCE_THRESHOLD = 0.8
SUBSTRING_HIGH_CONFIDENCE_RATIO = 0.7

_TOKEN_PATTERN = re.compile(r"[^\W_]+", re.UNICODE)


def normalize_name(value) -> str:
    """Lowercase and trim a device name; ``None`` becomes ``""``."""
    if value is None:
        return ""
    return str(value).strip().lower()


def tokenize(text: str) -> List[str]:
    """Split on whitespace and punctuation, keeping tokens of 3+ characters."""
    return [token for token in _TOKEN_PATTERN.findall(text.lower()) if len(token) >= MIN_TOKEN_LENGTH]


def vocabulary_terms(text: str, vocabulary=MATCH_VOCABULARY) -> FrozenSet[str]:
    """Return the vocabulary terms found inside the tokens of ``text``.

    Terms are matched inside tokens so plurals such as ``speakers`` count.
    """
    tokens = tokenize(text)
    return frozenset(term for term in vocabulary if any(term in token for token in tokens))


def bigrams(text: str) -> List[str]:
    """Return the 2-character shingles of ``text`` in order."""
    return [text[i:i + 2] for i in range(len(text) - 1)]


def bigram_similarity(first: str, second: str) -> float:
    """Dice coefficient over bigram multisets, in [0, 1]."""
    first_bigrams = Counter(bigrams(first))
    second_bigrams = Counter(bigrams(second))
    total = sum(first_bigrams.values()) + sum(second_bigrams.values())
    if total == 0:
        return 1.0 if first == second else 0.0
    overlap = sum((first_bigrams & second_bigrams).values())
    return (2.0 * overlap) / total


def _ids_related(native_id: str, foreign_id: str) -> bool:
    native_id = (native_id or "").strip()
    foreign_id = (foreign_id or "").strip()
    if not native_id or not foreign_id:
        return False
    if native_id.lower() in PLACEHOLDER_IDS or foreign_id.lower() in PLACEHOLDER_IDS:
        return False
    if native_id == foreign_id:
        return True

    shorter, longer = sorted((native_id, foreign_id), key=len)
    return len(shorter) >= MIN_ID_CONTAINMENT_LENGTH and shorter in longer


def _keyword_result(native: str, foreign: str) -> SimilarityResult:
    common = vocabulary_terms(native) & vocabulary_terms(foreign)
    if not common:
        return SimilarityResult.no_match()

    score = 60.0 + 10.0 * len(common)
    confidence = Confidence.MEDIUM if len(common) > 1 else Confidence.LOW
    if common & set(DEVICE_TYPE_MATCH_KEYWORDS):
        score += 10.0
        confidence = Confidence.MEDIUM

    return SimilarityResult(
        score=min(score, MAX_MATCH_SCORE),
        match_type=MatchType.KEYWORDS_MATCH,
        confidence=confidence,
    )


def _brand_result(native: str, foreign: str) -> SimilarityResult:
    # Every brand is also in MATCH_VOCABULARY, so the keyword step claims shared
    # brands first; this only scores if the two vocabularies are tuned apart.
    common = [brand for brand in BRAND_KEYWORDS if brand in native and brand in foreign]
    if not common:
        return SimilarityResult.no_match()
    return SimilarityResult(
        score=min(40.0 + 10.0 * len(common), MAX_MATCH_SCORE),
        match_type=MatchType.BRAND_MATCH,
        confidence=Confidence.LOW,
    )


def name_similarity(native_name: str, foreign_label: str) -> SimilarityResult:
    """Score two device names using only text strategies.

    The result is symmetric in its two arguments.
    """
    native = normalize_name(native_name)
    foreign = normalize_name(foreign_label)
    if not native or not foreign:
        return SimilarityResult.no_match()

    if native == foreign:
        return SimilarityResult(MAX_MATCH_SCORE, MatchType.NAME_EXACT, Confidence.HIGH)

    if native in foreign or foreign in native:
        shorter, longer = sorted((native, foreign), key=len)
        ratio = len(shorter) / len(longer)
        return SimilarityResult(
            score=85.0 + ratio * 10.0,
            match_type=MatchType.NAME_SUBSTRING,
            confidence=Confidence.HIGH if ratio > SUBSTRING_HIGH_CONFIDENCE_RATIO else Confidence.MEDIUM,
        )

    result = _keyword_result(native, foreign)
    if result.is_match:
        return result

    ratio = bigram_similarity(native, foreign)
    if ratio > FUZZY_SIMILARITY_THRESHOLD:
        return SimilarityResult(
            score=ratio * 60.0,
            match_type=MatchType.FUZZY_SIMILARITY,
            confidence=(
                Confidence.MEDIUM if ratio > FUZZY_MEDIUM_CONFIDENCE_THRESHOLD else Confidence.LOW
            ),
        )

    return _brand_result(native, foreign)


def similarity(
    native_name: str,
    foreign_label: str,
    native_id: str = "",
    foreign_device_id: str = "",
    native_is_default: bool = False,
    same_position: bool = False,
    enable_position_correlation: bool = False,
    default_device_score: float = DEFAULT_DEVICE_MATCH_SCORE,
    position_score: float = POSITION_CORRELATION_SCORE,
) -> SimilarityResult:
    """Score how likely a native device and a foreign device are the same hardware.

    Args:
        native_name: Name reported by the operating system
        foreign_label: Label reported by the browser, may be empty
        native_id: Operating system device id
        foreign_device_id: Browser device id, possibly the ``"default"`` sentinel
        native_is_default: Whether the OS reports the native device as default
        same_position: Whether both devices sit at the same index of their lists
        enable_position_correlation: Allow the positional fallback strategy
        default_device_score: Score for the default-device strategy
        position_score: Score for the positional fallback

    Returns:
        SimilarityResult of the first strategy that produced a nonzero score
    """
    # Unlabeled devices (no media permission yet) are never paired, even by id.
    if not normalize_name(native_name) or not normalize_name(foreign_label):
        return SimilarityResult.no_match()

    if _ids_related(native_id, foreign_device_id):
        return SimilarityResult(MAX_MATCH_SCORE, MatchType.ID_EXACT, Confidence.HIGH)

    if native_is_default and (foreign_device_id or "").strip() == FOREIGN_DEFAULT_DEVICE_ID:
        if default_device_score > 0:
            return SimilarityResult(
                float(default_device_score), MatchType.DEFAULT_DEVICE, Confidence.HIGH
            )

    result = name_similarity(native_name, foreign_label)
    if result.is_match:
        return result

    if enable_position_correlation and same_position and position_score > 0:
        return SimilarityResult(
            float(position_score), MatchType.POSITION_CORRELATION, Confidence.LOW
        )

    return SimilarityResult.no_match()
