"""
Similarity scoring for fingerprints.

score = (1 - hamming_distance / bits) * 100

A score of 100 means identical fingerprints, 0 means every bit differs.
"""

from __future__ import annotations

from ..models import Fingerprint


def hamming_distance(h1: Fingerprint, h2: Fingerprint) -> int:
    """Count the differing bits between two fingerprints of equal width."""
    return h1 - h2


def similarity_score(h1: Fingerprint, h2: Fingerprint) -> float:
    """
    Convert the bit distance between two fingerprints into a percentage.

    Args:
        h1: First fingerprint
        h2: Second fingerprint (same width as h1)

    Returns:
        Similarity in [0, 100]; symmetric in its arguments

    Examples:
        >>> similarity_score(Fingerprint(0), Fingerprint(0))
        100.0
        >>> similarity_score(Fingerprint(0), Fingerprint(0xF))
        93.75
    """
    similarity = 1 - (hamming_distance(h1, h2) / h1.bits)
    return similarity * 100


__all__ = ['hamming_distance', 'similarity_score']
