# SPDX-License-Identifier: Apache-2.0
"""Unit tests for pairwise device similarity scoring."""

import pytest

from core.devices.models import Confidence, MatchType
from core.devices.similarity import (
    _brand_result,
    bigram_similarity,
    name_similarity,
    similarity,
    tokenize,
    vocabulary_terms,
)


def test_identical_names_are_exact_match():
    result = similarity("USB Speakers", "  usb speakers ")

    assert result.score == 100
    assert result.match_type == MatchType.NAME_EXACT
    assert result.confidence == Confidence.HIGH


def test_substring_score_scales_with_length_ratio():
    result = similarity("Realtek High Definition Audio", "Realtek")

    assert result.match_type == MatchType.NAME_SUBSTRING
    assert 85 <= result.score <= 95
    assert result.confidence == Confidence.MEDIUM


def test_long_substring_is_high_confidence():
    result = similarity("Scarlett 2i2 USB", "Scarlett 2i2 USB 1")

    assert result.match_type == MatchType.NAME_SUBSTRING
    assert result.confidence == Confidence.HIGH
    assert result.score > 93


def test_shared_keywords_with_device_type_word():
    result = similarity("Jabra Evolve Headset", "Headset Jabra Link")

    assert result.match_type == MatchType.KEYWORDS_MATCH
    assert result.score == 90
    assert result.confidence == Confidence.MEDIUM


def test_single_shared_keyword_is_low_confidence():
    result = similarity("NVIDIA Output", "Port NVIDIA Digital")

    assert result.match_type == MatchType.KEYWORDS_MATCH
    assert result.score == 70
    assert result.confidence == Confidence.LOW


def test_keyword_terms_match_inside_tokens():
    assert "speaker" in vocabulary_terms("MacBook Pro Speakers")
    assert vocabulary_terms("Internal Mic") == frozenset()


def test_tokenize_drops_short_tokens_and_punctuation():
    assert tokenize("HD-Audio (Rear) L/R 2ch") == ["audio", "rear", "2ch"]


def test_fuzzy_similarity_for_near_identical_names():
    result = similarity("Scarlett Solo", "Scarlet Solo")

    assert result.match_type == MatchType.FUZZY_SIMILARITY
    assert result.confidence == Confidence.MEDIUM
    assert 50 < result.score < 60


def test_bigram_similarity_bounds():
    assert bigram_similarity("speaker", "speaker") == 1.0
    assert bigram_similarity("abc", "xyz") == 0.0
    assert bigram_similarity("", "") == 1.0
    assert bigram_similarity("a", "b") == 0.0


def test_brand_strategy_scores_shared_brands():
    result = _brand_result("sony srs-xb13", "sony wireless")

    assert result.match_type == MatchType.BRAND_MATCH
    assert result.score == 50
    assert result.confidence == Confidence.LOW


def test_shared_brand_is_scored_by_keyword_step():
    result = similarity("Sony SRS-XB13", "Sony Wireless")

    assert result.match_type == MatchType.KEYWORDS_MATCH
    assert result.score == 70
    assert result.confidence == Confidence.LOW


def test_unrelated_names_do_not_match():
    result = similarity("Internal Mic", "External Camera")

    assert result.match_type == MatchType.NO_MATCH
    assert result.score == 0
    assert result.confidence == Confidence.NONE


@pytest.mark.parametrize("label", ["", None, "   "])
def test_empty_label_never_matches_by_name(label):
    assert not similarity("USB Speakers", label).is_match


@pytest.mark.parametrize("label", ["", None, "   "])
def test_unlabeled_default_sentinel_is_not_matched(label):
    result = similarity(
        "MacBook Pro Speakers",
        label,
        native_id="BuiltIn",
        foreign_device_id="default",
        native_is_default=True,
    )

    assert result.match_type == MatchType.NO_MATCH
    assert result.score == 0


def test_equal_ids_without_names_are_not_matched():
    result = similarity("", "", native_id="abcdef123", foreign_device_id="abcdef123")

    assert result.match_type == MatchType.NO_MATCH
    assert result.confidence == Confidence.NONE


def test_related_ids_win_over_names():
    result = similarity(
        "Speakers",
        "Headphones",
        native_id="{0.0.0.00000000}.{a1b2c3d4}",
        foreign_device_id="a1b2c3d4",
    )

    assert result.match_type == MatchType.ID_EXACT
    assert result.score == 100
    assert result.confidence == Confidence.HIGH


def test_short_ids_only_match_exactly():
    assert similarity("Alpha", "Omega", native_id="1", foreign_device_id="a1b").match_type == MatchType.NO_MATCH
    assert similarity("Alpha", "Omega", native_id="42", foreign_device_id="42").match_type == MatchType.ID_EXACT


def test_placeholder_ids_are_never_id_matches():
    result = similarity("Alpha", "Omega", native_id="default", foreign_device_id="default")

    assert result.match_type == MatchType.NO_MATCH


def test_default_native_matches_default_foreign_sentinel():
    result = similarity(
        "MacBook Pro Speakers",
        "Default - Something Else",
        native_id="BuiltInSpeakerDevice",
        foreign_device_id="default",
        native_is_default=True,
    )

    assert result.match_type == MatchType.DEFAULT_DEVICE
    assert result.score == 98
    assert result.confidence == Confidence.HIGH


def test_default_device_score_is_configurable():
    result = similarity(
        "Alpha", "Omega", foreign_device_id="default", native_is_default=True, default_device_score=0
    )

    assert result.match_type == MatchType.NO_MATCH


def test_position_correlation_requires_opt_in():
    assert not similarity("Alpha Box", "Zeta Unit", same_position=True).is_match

    result = similarity(
        "Alpha Box", "Zeta Unit", same_position=True, enable_position_correlation=True
    )

    assert result.match_type == MatchType.POSITION_CORRELATION
    assert result.score == 20
    assert result.confidence == Confidence.LOW


def test_position_correlation_needs_both_names():
    result = similarity("Alpha Box", "", same_position=True, enable_position_correlation=True)

    assert not result.is_match


@pytest.mark.parametrize(
    "first, second",
    [
        ("USB Speakers", "usb speakers"),
        ("Realtek High Definition Audio", "Realtek"),
        ("Jabra Evolve Headset", "Headset Jabra Link"),
        ("Scarlett Solo", "Scarlet Solo"),
        ("Internal Mic", "External Camera"),
    ],
)
def test_name_similarity_is_symmetric(first, second):
    assert name_similarity(first, second) == name_similarity(second, first)
