"""Similarity algorithms and the ensemble that averages them."""
import math
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import Levenshtein
from sklearn.feature_extraction.text import CountVectorizer

from logging_config import get_logger
from preprocessor import character_set, is_blank, iter_tokens, normalize

logger = get_logger('detector')

# Floor applied to near-identical strings, see calculate_levenshtein_similarity
NEAR_MATCH_FLOOR = 0.6
NEAR_MATCH_MAX_LENGTH_DIFF = 1
NEAR_MATCH_MAX_DISTANCE = 2


class SimilarityError(Exception):
    """Base class for errors raised by the detector."""


class AlgorithmNotFoundError(SimilarityError, LookupError):
    """Raised when an algorithm is requested by a name nobody registered."""

    def __init__(self, name, available=()):
        self.name = name
        self.available = list(available)
        super().__init__(f"Algorithm not found: {name!r} (available: {', '.join(self.available)})")


def calculate_jaccard_similarity(text1, text2):
    """
    Calculates Jaccard similarity over the character sets of both texts.
    Two blank texts count as identical.
    """
    if is_blank(text1) and is_blank(text2):
        return 1.0
    if is_blank(text1) or is_blank(text2):
        return 0.0
    if text1 == text2:
        return 1.0

    set1 = character_set(normalize(text1))
    set2 = character_set(normalize(text2))

    union = set1 | set2
    if not union:
        return 1.0
    return len(set1 & set2) / len(union)


def _analyze(text):
    return list(iter_tokens(normalize(text)))


def calculate_cosine_similarity(text1, text2):
    """
    Calculates Cosine similarity of term-frequency vectors.

    Both vectors are built by CountVectorizer over the vocabulary shared by
    the two texts, counting every token occurrence. A blank text on either
    side scores 0.0, even when both are blank.
    """
    if is_blank(text1) or is_blank(text2):
        return 0.0
    if text1 == text2:
        return 1.0

    try:
        counts = CountVectorizer(analyzer=_analyze).fit_transform([text1, text2]).toarray()
    except ValueError:
        # Empty vocabulary: nothing survived normalization on either side
        return 0.0

    vector1, vector2 = counts[0], counts[1]
    # Integer products keep identical vectors at exactly 1.0
    dot = int(vector1 @ vector2)
    norms = int(vector1 @ vector1) * int(vector2 @ vector2)
    if norms == 0:
        return 0.0
    return dot / math.sqrt(norms)


def calculate_levenshtein_similarity(text1, text2):
    """
    Calculates similarity based on Levenshtein distance of the raw texts.
    Similarity = 1 - distance / max(len(text1), len(text2))

    Texts whose lengths differ by at most one and that are at most two edits
    apart never score below NEAR_MATCH_FLOOR.
    """
    if is_blank(text1) and is_blank(text2):
        return 1.0
    if is_blank(text1) or is_blank(text2):
        return 0.0
    if text1 == text2:
        return 1.0

    distance = Levenshtein.distance(text1, text2)
    max_length = max(len(text1), len(text2))
    similarity = 1.0 - distance / max_length

    if abs(len(text1) - len(text2)) <= NEAR_MATCH_MAX_LENGTH_DIFF and distance <= NEAR_MATCH_MAX_DISTANCE:
        similarity = max(similarity, NEAR_MATCH_FLOOR)

    return similarity


@dataclass(frozen=True)
class SimilarityAlgorithm:
    name: str
    score: Callable[[Optional[str], Optional[str]], float]


COSINE = SimilarityAlgorithm("Cosine Similarity", calculate_cosine_similarity)
LEVENSHTEIN = SimilarityAlgorithm("Levenshtein Distance", calculate_levenshtein_similarity)
JACCARD = SimilarityAlgorithm("Jaccard Similarity", calculate_jaccard_similarity)

DEFAULT_ALGORITHMS = (COSINE, LEVENSHTEIN, JACCARD)


class SimilarityEnsemble:
    """
    Holds an ordered set of algorithms and averages their scores.

    Instances keep no per-call state, so one ensemble can serve concurrent
    callers. Pass a PerformanceMonitor to collect per-algorithm timings.
    """

    def __init__(self, algorithms: Sequence[SimilarityAlgorithm] = DEFAULT_ALGORITHMS, monitor=None):
        names = [algorithm.name for algorithm in algorithms]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate algorithm names: {', '.join(duplicates)}")
        self._algorithms = tuple(algorithms)
        self.monitor = monitor

    def list_algorithm_names(self) -> List[str]:
        return [algorithm.name for algorithm in self._algorithms]

    def _run(self, algorithm, text1, text2):
        start = time.perf_counter()
        try:
            score = algorithm.score(text1, text2)
        except Exception:
            if self.monitor is not None:
                self.monitor.record_failure(algorithm.name)
            raise
        if self.monitor is not None:
            self.monitor.record_execution_time(algorithm.name, (time.perf_counter() - start) * 1000)
        return score

    def score_breakdown(self, text1, text2) -> Dict[str, float]:
        """
        Returns the score of every algorithm that ran without error, keyed by
        name in registration order. Failures are logged and left out.
        """
        scores = {}
        for algorithm in self._algorithms:
            try:
                scores[algorithm.name] = self._run(algorithm, text1, text2)
            except Exception as e:
                logger.warning("Algorithm %s failed: %s", algorithm.name, e)
        return scores

    def score_all(self, text1, text2) -> float:
        """
        Returns the mean score of the algorithms that succeed, 0.0 if none do.
        Blank input on either side scores 0.0 and equal texts 1.0 without
        running any algorithm.
        """
        if is_blank(text1) or is_blank(text2):
            return 0.0
        if text1 == text2:
            return 1.0

        scores = self.score_breakdown(text1, text2)
        if not scores:
            return 0.0
        return sum(scores.values()) / len(scores)

    def score_by_name(self, text1, text2, name) -> float:
        """
        Runs the algorithm registered under name with its own edge-case rules.
        Raises AlgorithmNotFoundError for unknown names.
        """
        for algorithm in self._algorithms:
            if algorithm.name == name:
                return self._run(algorithm, text1, text2)
        raise AlgorithmNotFoundError(name, self.list_algorithm_names())


_default_ensemble = SimilarityEnsemble()


def compare_ensemble(text1, text2):
    return _default_ensemble.score_all(text1, text2)


def compare_with(text1, text2, algorithm_name):
    return _default_ensemble.score_by_name(text1, text2, algorithm_name)


def list_algorithms():
    return _default_ensemble.list_algorithm_names()


def calculate_combined_similarity(text1, text2):
    """
    Returns a dictionary of algorithm name -> score in registration order.
    Algorithms that raise are logged and left out.
    """
    return _default_ensemble.score_breakdown(text1, text2)
