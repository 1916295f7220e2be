"""
Scanner package for the image similarity checker.

Provides file enumeration, fingerprinting, the in-memory hash store and
pairwise similarity matching.

Public API:
- find_candidate_files: Enumerate every file under a root folder
- is_supported_image: Check a path against the supported extensions
- PillowImageDecoder: Decode image files with Pillow
- ImageHashHasher: Fingerprint decoded images with imagehash
- fingerprint_from_image_hash: Convert an imagehash result to a Fingerprint
- HashStore: path -> fingerprint mapping and the load phase
- hamming_distance / similarity_score: Fingerprint scoring
- PairwiseMatcher: The compare phase
"""

from __future__ import annotations

from .file_discovery import find_candidate_files, is_supported_image
from .hashing import (
    HASH_ALGORITHMS,
    ImageDecoder,
    PerceptualHasher,
    PillowImageDecoder,
    ImageHashHasher,
    fingerprint_from_image_hash,
)
from .scoring import hamming_distance, similarity_score
from .store import HashStore
from .matching import PairwiseMatcher


__all__ = [
    # File discovery
    'find_candidate_files',
    'is_supported_image',
    # Collaborators
    'HASH_ALGORITHMS',
    'ImageDecoder',
    'PerceptualHasher',
    'PillowImageDecoder',
    'ImageHashHasher',
    'fingerprint_from_image_hash',
    # Scoring
    'hamming_distance',
    'similarity_score',
    # Phases
    'HashStore',
    'PairwiseMatcher',
]
