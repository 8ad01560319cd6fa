"""Audio device classification and cross-reference matching."""

from core.devices.classifier import classify, classify_device
from core.devices.matcher import CrossReferenceMatcher, MatchOptions, match
from core.devices.models import (
    Confidence,
    Connectivity,
    DeviceRecord,
    DeviceType,
    ForeignDeviceRecord,
    Match,
    MatchReport,
    MatchType,
    SimilarityResult,
)
from core.devices.similarity import similarity

__all__ = [
    'Confidence',
    'Connectivity',
    'CrossReferenceMatcher',
    'DeviceRecord',
    'DeviceType',
    'ForeignDeviceRecord',
    'Match',
    'MatchOptions',
    'MatchReport',
    'MatchType',
    'SimilarityResult',
    'classify',
    'classify_device',
    'match',
    'similarity',
]
