"""
Image Similarity Checker
========================
Finds visually similar images in a folder tree using perceptual hashing.

Features:
- 64-bit perceptual fingerprints (pHash by default, via imagehash)
- Similarity score from Hamming distance, as a 0-100 percentage
- Configurable threshold, every ordered pair reported (or unique pairs)
- Observable progress (0-50 loading, 50-100 comparing)
- Background runs returning a Future, with cancellation
- Skip-and-continue or abort handling of unreadable images
- CLI with TXT/CSV export
"""

__version__ = "1.0.0"
__author__ = "Zedidence"

from .models import Fingerprint, MatchRecord, SkippedFile, ScanResult, EngineConfig
from .config import IMAGE_EXTENSIONS, DEFAULT_THRESHOLD, FINGERPRINT_BITS
from .exceptions import (
    SimCheckError,
    ConfigurationError,
    EnumerationError,
    DecodeError,
    EngineBusyError,
    ScanCancelled,
)
from .progress import ProgressReporter
from .scanner import (
    find_candidate_files,
    is_supported_image,
    PillowImageDecoder,
    ImageHashHasher,
    HashStore,
    PairwiseMatcher,
    hamming_distance,
    similarity_score,
)
from .engine import SimilarityEngine

__all__ = [
    "Fingerprint",
    "MatchRecord",
    "SkippedFile",
    "ScanResult",
    "EngineConfig",
    "IMAGE_EXTENSIONS",
    "DEFAULT_THRESHOLD",
    "FINGERPRINT_BITS",
    "SimCheckError",
    "ConfigurationError",
    "EnumerationError",
    "DecodeError",
    "EngineBusyError",
    "ScanCancelled",
    "ProgressReporter",
    "find_candidate_files",
    "is_supported_image",
    "PillowImageDecoder",
    "ImageHashHasher",
    "HashStore",
    "PairwiseMatcher",
    "hamming_distance",
    "similarity_score",
    "SimilarityEngine",
]
