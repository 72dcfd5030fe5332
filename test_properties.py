"""
Property-based tests for the similarity algorithms using Hypothesis.

Inputs mix CJK ideographs, Latin letters, digits, punctuation and arbitrary
Unicode so every script branch of the normalizer and tokenizer is exercised.
"""
import os, sys
sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

import pytest

hypothesis = pytest.importorskip(
    "hypothesis",
    reason="hypothesis not installed - run 'pip install hypothesis' to enable property-based tests"
)

from hypothesis import assume, given, settings, strategies as st

import Levenshtein

from detector import (
    calculate_cosine_similarity,
    calculate_jaccard_similarity,
    calculate_levenshtein_similarity,
    compare_ensemble,
)

ALGORITHMS = [
    calculate_cosine_similarity,
    calculate_jaccard_similarity,
    calculate_levenshtein_similarity,
    compare_ensemble,
]

mixed_text = st.text(
    alphabet=st.one_of(
        st.sampled_from(list("我爱北京天安门中文字")),
        st.sampled_from(list("abcdeXYZ")),
        st.sampled_from(list("0123456789")),
        st.sampled_from(list(" \t\n,.!?;，。！")),
        st.characters(blacklist_categories=("Cs",)),
    ),
    max_size=40,
)


@settings(max_examples=100, deadline=None)
@given(mixed_text, mixed_text)
def test_scores_stay_in_unit_range(text1, text2):
    for algorithm in ALGORITHMS:
        assert 0.0 <= algorithm(text1, text2) <= 1.0


@settings(max_examples=100, deadline=None)
@given(mixed_text, mixed_text)
def test_scores_are_symmetric(text1, text2):
    for algorithm in ALGORITHMS:
        assert algorithm(text1, text2) == algorithm(text2, text1)


@settings(max_examples=100, deadline=None)
@given(mixed_text)
def test_self_match_scores_one(text):
    assume(text.strip())
    for algorithm in ALGORITHMS:
        assert algorithm(text, text) == 1.0


@settings(max_examples=100, deadline=None)
@given(mixed_text, mixed_text, mixed_text)
def test_edit_distance_is_a_metric(a, b, c):
    assert Levenshtein.distance(a, a) == 0
    assert Levenshtein.distance(a, c) <= Levenshtein.distance(a, b) + Levenshtein.distance(b, c)
