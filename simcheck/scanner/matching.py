"""
Pairwise matching module for the scanner package.

Brute-force O(n^2) comparison of every fingerprint against every other.
Each comparison is a fixed-width Hamming distance, so this stays practical
for collections of hundreds to low thousands of images.
"""

from __future__ import annotations

import threading
from typing import Optional

from ..config import (
    DEFAULT_PROGRESS_MODE,
    LOAD_PHASE_SHARE,
    PROGRESS_MAX,
    PROGRESS_PROPORTIONAL,
)
from ..exceptions import ScanCancelled
from ..models import Fingerprint, MatchRecord
from ..progress import ProgressReporter
from .scoring import similarity_score


class PairwiseMatcher:
    """
    Scores fingerprint pairs and keeps those at or above the threshold.

    Args:
        threshold_fraction: Minimum similarity as a fraction of 1
        symmetric_pairs: If True, compare every ordered pair so both (A, B)
            and (B, A) are reported; if False, only pairs with A before B
        progress_mode: 'per_pass' publishes 100 after every outer pass;
            'proportional' publishes 50 + done * 50 / total as it goes
    """

    def __init__(
        self,
        threshold_fraction: float,
        symmetric_pairs: bool = True,
        progress_mode: str = DEFAULT_PROGRESS_MODE,
    ):
        self.threshold_fraction = threshold_fraction
        self.symmetric_pairs = symmetric_pairs
        self.progress_mode = progress_mode

    def total_comparisons(self, count: int) -> int:
        """Number of scored pairs for a store of the given size."""
        if self.symmetric_pairs:
            return count * (count - 1)
        return count * (count - 1) // 2

    def match(
        self,
        fingerprints: dict[str, Fingerprint],
        progress: Optional[ProgressReporter] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> list[MatchRecord]:
        """
        Compare all pairs of fingerprints.

        Args:
            fingerprints: path -> fingerprint mapping, iterated in insertion order
            progress: Optional reporter for the 50-100 range
            cancel_event: Checked before each outer pass

        Returns:
            MatchRecords in discovery order (outer pass, then inner pass)

        Raises:
            ScanCancelled: If cancel_event is set
        """
        items = list(fingerprints.items())
        count = len(items)
        cutoff = self.threshold_fraction * 100
        proportional = self.progress_mode == PROGRESS_PROPORTIONAL

        total = self.total_comparisons(count)
        comparisons_done = 0
        last_reported = -1

        matches: list[MatchRecord] = []

        for i in range(count):
            if cancel_event is not None and cancel_event.is_set():
                raise ScanCancelled("Scan cancelled during compare phase")

            path_a, hash_a = items[i]
            start = 0 if self.symmetric_pairs else i + 1

            for j in range(start, count):
                path_b, hash_b = items[j]
                # Never compare an entry with itself
                if path_a == path_b:
                    continue

                score = similarity_score(hash_a, hash_b)
                if score >= cutoff:
                    matches.append(MatchRecord(path_a, path_b, score))

                if proportional and progress is not None:
                    comparisons_done += 1
                    value = LOAD_PHASE_SHARE + comparisons_done * (PROGRESS_MAX - LOAD_PHASE_SHARE) // total
                    if value != last_reported:
                        progress.set(value)
                        last_reported = value

            if not proportional and progress is not None:
                progress.set(PROGRESS_MAX)

        return matches


__all__ = ['PairwiseMatcher']
