"""Template matching engine using OpenCV."""

from typing import List, Tuple

import cv2
import numpy as np

from screenkit.data.models import Image, MatchResult, Region
from screenkit.errors import EngineFailure
from screenkit.utils.logger import get_logger
from screenkit.vision.interfaces import MatchingEngine

# Only normalized methods: confidences must be comparable scores in [0, 1]
MATCHING_METHODS = {
    "sqdiff_normed": cv2.TM_SQDIFF_NORMED,
    "ccorr_normed": cv2.TM_CCORR_NORMED,
    "ccoeff_normed": cv2.TM_CCOEFF_NORMED,
}


class OpenCVMatchingEngine(MatchingEngine):
    """
    Candidate search with cv2.matchTemplate.

    Needle and haystack are matched as given; colour-space decisions
    belong to the caller. Candidate locations are relative to the
    haystack.
    """

    DEFAULT_METHOD = cv2.TM_CCOEFF_NORMED

    # Minimum distance between candidate centers to consider them distinct
    DEFAULT_MIN_DISTANCE = 10

    DEFAULT_MAX_CANDIDATES = 100

    # Raw locations examined per returned candidate during suppression
    SCAN_FACTOR = 50

    def __init__(
        self,
        method: int = DEFAULT_METHOD,
        min_distance: int = DEFAULT_MIN_DISTANCE,
        max_candidates: int = DEFAULT_MAX_CANDIDATES,
    ):
        """
        Initialize matching engine.

        Args:
            method: Normalized OpenCV matching method (default: TM_CCOEFF_NORMED)
            min_distance: Minimum pixel distance between candidate centers
            max_candidates: Maximum number of candidates to return
        """
        if method not in MATCHING_METHODS.values():
            raise ValueError(f"Unsupported matching method: {method}")
        self.method = method
        self.min_distance = min_distance
        self.max_candidates = max_candidates
        self.log = get_logger()

    @classmethod
    def from_method_name(cls, name: str, **kwargs) -> "OpenCVMatchingEngine":
        """Build an engine from a MATCHING_METHODS key (e.g. "ccoeff_normed")."""
        try:
            method = MATCHING_METHODS[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown matching method: {name}") from None
        return cls(method=method, **kwargs)

    def _score_map(self, haystack: Image, needle: Image) -> np.ndarray:
        if needle.width > haystack.width or needle.height > haystack.height:
            raise EngineFailure(
                f"Needle {needle.width}x{needle.height} is larger than "
                f"haystack {haystack.width}x{haystack.height}"
            )
        if needle.channels != haystack.channels:
            raise EngineFailure(
                f"Channel mismatch: needle has {needle.channels}, "
                f"haystack has {haystack.channels}"
            )

        try:
            result = cv2.matchTemplate(haystack.data, needle.data, self.method)
        except cv2.error as e:
            raise EngineFailure(f"Template matching failed: {e}") from e

        # SQDIFF: lower is better, flip so higher is always better
        if self.method == cv2.TM_SQDIFF_NORMED:
            result = 1.0 - result

        # Flat images produce NaN/inf scores; CCOEFF_NORMED goes down to -1
        result = np.nan_to_num(result, nan=0.0, posinf=0.0, neginf=0.0)
        return np.clip(result, 0.0, 1.0)

    def find_candidates(
        self,
        haystack: Image,
        needle: Image,
        min_confidence: float,
    ) -> List[MatchResult]:
        """
        Find candidate matches of needle in haystack.

        Args:
            haystack: Image to search in
            needle: Image to search for
            min_confidence: Scores at or above this are candidates

        Returns:
            Candidates sorted by confidence (highest first, raster order on
            ties). If nothing reaches min_confidence, the single best
            location is returned so the caller can report its score.
        """
        result = self._score_map(haystack, needle)
        h, w = needle.height, needle.width

        ys, xs = np.where(result >= min_confidence)

        if len(ys) == 0:
            _, max_val, _, max_loc = cv2.minMaxLoc(result)
            self.log.debug(f"No candidate >= {min_confidence:.2f}, best {max_val:.3f}")
            return [MatchResult(
                confidence=float(max_val),
                location=Region(int(max_loc[0]), int(max_loc[1]), w, h),
            )]

        # Stable sort keeps raster order among equal scores
        scores = result[ys, xs]
        order = np.argsort(-scores, kind="stable")[:self.max_candidates * self.SCAN_FACTOR]
        candidates = [
            MatchResult(
                confidence=float(scores[i]),
                location=Region(int(xs[i]), int(ys[i]), w, h),
            )
            for i in order
        ]
        filtered = self._filter_nearby(candidates)

        return filtered[:self.max_candidates]

    def _filter_nearby(self, candidates: List[MatchResult]) -> List[MatchResult]:
        """
        Drop candidates whose centers are closer than min_distance to a
        better candidate (non-maximum suppression).

        Args:
            candidates: Candidates sorted by confidence

        Returns:
            Filtered list of candidates
        """
        accepted: List[MatchResult] = []

        for candidate in candidates:
            center = _center(candidate.location)
            if all(
                _distance(center, _center(kept.location)) >= self.min_distance
                for kept in accepted
            ):
                accepted.append(candidate)
                if len(accepted) >= self.max_candidates:
                    break

        return accepted


def _center(region: Region) -> Tuple[int, int]:
    return (region.left + region.width // 2, region.top + region.height // 2)


def _distance(p1: Tuple[int, int], p2: Tuple[int, int]) -> float:
    """Calculate Euclidean distance between two points."""
    return ((p1[0] - p2[0]) ** 2 + (p1[1] - p2[1]) ** 2) ** 0.5
