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
Cross-reference matcher between native and foreign device lists.

Every (native, foreign) pair is scored, then pairs are claimed greedily from
the highest score down. Ties are broken by confidence, then by native input
order, then by foreign input order, so identical inputs always produce an
identical report.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, fields
from typing import Any, Callable, List, Optional, Tuple, Type

import numpy as np

from config.constants import (
    DEFAULT_DEVICE_MATCH_SCORE,
    FOREIGN_COMMUNICATIONS_DEVICE_ID,
    POSITION_CORRELATION_SCORE,
)
from core.devices.models import (
    DeviceRecord,
    ForeignDeviceRecord,
    Match,
    MatchReport,
    SimilarityResult,
)
from core.devices.similarity import similarity
from utils.error_handler import InvalidInputError

logger = logging.getLogger("audioxref.core.matcher")


@dataclass
class MatchOptions:
    """Tunable behaviour of the cross-reference matcher."""

    # Positional fallback pairs devices that sit at the same list index.
    enable_position_correlation: bool = False
    default_device_score: float = DEFAULT_DEVICE_MATCH_SCORE
    position_score: float = POSITION_CORRELATION_SCORE
    # Candidates must score strictly above this value.
    min_score: float = 0.0
    excluded_foreign_ids: Tuple[str, ...] = (FOREIGN_COMMUNICATIONS_DEVICE_ID,)

    @classmethod
    def from_dict(cls, config_dict: Optional[Mapping]) -> "MatchOptions":
        """Create options from the ``matching`` config section, ignoring unknown keys."""
        valid_keys = {f.name for f in fields(cls)}
        filtered_args = {k: v for k, v in (config_dict or {}).items() if k in valid_keys}
        if "excluded_foreign_ids" in filtered_args:
            filtered_args["excluded_foreign_ids"] = tuple(filtered_args["excluded_foreign_ids"])
        return cls(**filtered_args)


def _coerce_records(
    value: Any,
    record_type: Type,
    factory: Callable[[Mapping], Any],
    argument: str,
) -> List[Any]:
    """Validate a device collection and convert mapping entries to records."""
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Sequence):
        raise InvalidInputError(
            f"{argument} must be a sequence of device records, got {type(value).__name__}",
            argument=argument,
        )

    records = []
    for index, item in enumerate(value):
        if isinstance(item, record_type):
            records.append(item)
        elif isinstance(item, Mapping):
            records.append(factory(item))
        else:
            raise InvalidInputError(
                f"{argument}[{index}] must be a device record or mapping, "
                f"got {type(item).__name__}",
                argument=argument,
            )
    return records


def coerce_native_records(value: Any) -> List[DeviceRecord]:
    """Validate a native device collection, converting mappings to records."""
    return _coerce_records(value, DeviceRecord, DeviceRecord.from_dict, "native_devices")


def coerce_foreign_records(value: Any) -> List[ForeignDeviceRecord]:
    """Validate a foreign device collection, converting mappings to records."""
    return _coerce_records(
        value, ForeignDeviceRecord, ForeignDeviceRecord.from_dict, "foreign_devices"
    )


class CrossReferenceMatcher:
    """Pairs native devices with foreign devices one-to-one."""

    def __init__(self, options: Optional[MatchOptions] = None):
        self.options = options or MatchOptions()

    def _score_pair(
        self, native: DeviceRecord, foreign: ForeignDeviceRecord, same_position: bool
    ) -> SimilarityResult:
        if foreign.device_id in self.options.excluded_foreign_ids:
            return SimilarityResult.no_match()
        return similarity(
            native.name,
            foreign.label,
            native_id=native.id,
            foreign_device_id=foreign.device_id,
            native_is_default=native.is_default,
            same_position=same_position,
            enable_position_correlation=self.options.enable_position_correlation,
            default_device_score=self.options.default_device_score,
            position_score=self.options.position_score,
        )

    def score_matrix(
        self,
        native_devices: Sequence[DeviceRecord],
        foreign_devices: Sequence[ForeignDeviceRecord],
    ) -> Tuple[np.ndarray, List[List[SimilarityResult]]]:
        """Score every pair.

        Returns:
            Tuple of (scores, results) where ``scores[i, j]`` is the score of
            native ``i`` against foreign ``j`` and ``results[i][j]`` the full
            SimilarityResult
        """
        scores = np.zeros((len(native_devices), len(foreign_devices)), dtype=float)
        results: List[List[SimilarityResult]] = []
        for i, native in enumerate(native_devices):
            row = []
            for j, foreign in enumerate(foreign_devices):
                result = self._score_pair(native, foreign, same_position=(i == j))
                scores[i, j] = result.score
                row.append(result)
            results.append(row)
        return scores, results

    def match(self, native_devices, foreign_devices) -> MatchReport:
        """Cross-reference two device lists.

        Args:
            native_devices: Sequence of DeviceRecord (or supplier mappings)
            foreign_devices: Sequence of ForeignDeviceRecord (or
                ``MediaDeviceInfo``-shaped mappings)

        Returns:
            MatchReport partitioning both inputs into matches and leftovers

        Raises:
            InvalidInputError: If either argument is not a sequence of records
        """
        natives = coerce_native_records(native_devices)
        foreigns = coerce_foreign_records(foreign_devices)

        scores, results = self.score_matrix(natives, foreigns)

        native_idx, foreign_idx = np.nonzero(scores > max(self.options.min_score, 0.0))
        candidate_scores = scores[native_idx, foreign_idx]
        candidate_ranks = np.array(
            [results[i][j].confidence.rank for i, j in zip(native_idx, foreign_idx)],
            dtype=int,
        )
        # np.lexsort uses the last key as the primary one
        order = np.lexsort((foreign_idx, native_idx, -candidate_ranks, -candidate_scores))

        claimed_native = set()
        claimed_foreign = set()
        matches = []
        for position in order:
            i = int(native_idx[position])
            j = int(foreign_idx[position])
            if i in claimed_native or j in claimed_foreign:
                continue
            result = results[i][j]
            matches.append(
                Match(
                    native=natives[i],
                    foreign=foreigns[j],
                    match_type=result.match_type,
                    confidence=result.confidence,
                    score=result.score,
                )
            )
            claimed_native.add(i)
            claimed_foreign.add(j)
            logger.debug(
                "Matched native %r with foreign %r via %s (score=%.1f, confidence=%s)",
                natives[i].name,
                foreigns[j].label,
                result.match_type.value,
                result.score,
                result.confidence.value,
            )

        report = MatchReport(
            matches=tuple(matches),
            unmatched_native=tuple(
                device for i, device in enumerate(natives) if i not in claimed_native
            ),
            unmatched_foreign=tuple(
                device for j, device in enumerate(foreigns) if j not in claimed_foreign
            ),
        )
        logger.info(
            "Cross-reference complete: %d matches, %d unmatched native, %d unmatched foreign",
            len(report.matches),
            len(report.unmatched_native),
            len(report.unmatched_foreign),
        )
        return report


def match(native_devices, foreign_devices, options: Optional[MatchOptions] = None) -> MatchReport:
    """Cross-reference ``native_devices`` against ``foreign_devices``.

    Convenience wrapper around ``CrossReferenceMatcher(options).match``.
    """
    return CrossReferenceMatcher(options).match(native_devices, foreign_devices)
