"""
Data models for the image similarity checker.

Contains dataclasses for fingerprints, match records, skipped files,
run results and the validated engine configuration.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from .config import (
    FINGERPRINT_BITS,
    DECODE_POLICIES,
    DEFAULT_DECODE_POLICY,
    PROGRESS_MODES,
    DEFAULT_PROGRESS_MODE,
)
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Fingerprint:
    """
    Fixed-width perceptual summary of an image.

    Attributes:
        value: Unsigned integer holding the fingerprint bits
        bits: Width of the fingerprint in bits (64 for an 8x8 hash)

    Subtracting two fingerprints yields their Hamming distance, following
    the imagehash convention (``hash_a - hash_b``).
    """
    value: int
    bits: int = FINGERPRINT_BITS

    def __post_init__(self):
        if self.bits <= 0:
            raise ValueError(f"Fingerprint width must be positive, got {self.bits}")
        if not 0 <= self.value < (1 << self.bits):
            raise ValueError(f"Fingerprint value does not fit in {self.bits} bits")

    def distance(self, other: 'Fingerprint') -> int:
        """Return the number of differing bits between two fingerprints."""
        if self.bits != other.bits:
            raise ValueError(
                f"Cannot compare fingerprints of different widths ({self.bits} vs {other.bits})"
            )
        return bin(self.value ^ other.value).count('1')

    def __sub__(self, other: 'Fingerprint') -> int:
        return self.distance(other)

    def __str__(self) -> str:
        return format(self.value, f'0{(self.bits + 3) // 4}x')

    @classmethod
    def from_hex(cls, hex_str: str, bits: int = FINGERPRINT_BITS) -> 'Fingerprint':
        """Create a Fingerprint from its hex representation."""
        return cls(value=int(hex_str, 16), bits=bits)


@dataclass(frozen=True)
class MatchRecord:
    """
    A pair of images whose similarity met the threshold.

    Attributes:
        path_a: Path of the image driving the outer comparison pass
        path_b: Path of the image it was compared against
        score: Similarity percentage (0-100, 100 = identical fingerprints)
    """
    path_a: str
    path_b: str
    score: float

    def as_tuple(self) -> tuple[str, str, float]:
        """Return the record as a (path_a, path_b, score) triple."""
        return (self.path_a, self.path_b, self.score)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'path_a': self.path_a,
            'path_b': self.path_b,
            'score': self.score,
        }


@dataclass(frozen=True)
class SkippedFile:
    """A candidate image that could not be decoded and was left out."""
    path: str
    reason: str

    @property
    def filename(self) -> str:
        """Return just the filename portion of the path."""
        return os.path.basename(self.path)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {'path': self.path, 'reason': self.reason}


@dataclass
class ScanResult:
    """
    Outcome of one completed run.

    Attributes:
        matches: MatchRecords in discovery order
        skipped: Files left out under the skip-and-continue decode policy
        candidate_count: Number of files found under the root folder
        hashed_count: Number of images successfully fingerprinted
    """
    matches: list[MatchRecord] = field(default_factory=list)
    skipped: list[SkippedFile] = field(default_factory=list)
    candidate_count: int = 0
    hashed_count: int = 0

    @property
    def match_count(self) -> int:
        """Number of reported pairs."""
        return len(self.matches)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'matches': [m.to_dict() for m in self.matches],
            'skipped': [s.to_dict() for s in self.skipped],
            'candidate_count': self.candidate_count,
            'hashed_count': self.hashed_count,
        }


@dataclass(frozen=True)
class EngineConfig:
    """
    Validated, immutable engine settings.

    Attributes:
        root_folder: Folder to scan recursively
        threshold: Minimum similarity percentage in (0, 100]
        decode_policy: 'abort' or 'skip' on undecodable files
        symmetric_pairs: Report both (A, B) and (B, A) when True
        progress_mode: 'per_pass' or 'proportional' compare-phase progress

    Raises:
        ConfigurationError: If any setting is out of range
    """
    root_folder: Union[str, Path]
    threshold: float
    decode_policy: str = DEFAULT_DECODE_POLICY
    symmetric_pairs: bool = True
    progress_mode: str = DEFAULT_PROGRESS_MODE

    def __post_init__(self):
        if self.root_folder is None or not str(self.root_folder).strip():
            raise ConfigurationError("Folder path cannot be null or empty.")
        object.__setattr__(self, 'root_folder', str(self.root_folder))

        threshold = self.threshold
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ConfigurationError(f"Similarity threshold must be a number, got {threshold!r}")
        if math.isnan(threshold) or threshold <= 0 or threshold > 100:
            raise ConfigurationError("Similarity threshold must be greater than 0 and at most 100.")
        object.__setattr__(self, 'threshold', float(threshold))

        if self.decode_policy not in DECODE_POLICIES:
            raise ConfigurationError(
                f"Unknown decode policy: {self.decode_policy!r}. Use one of {', '.join(DECODE_POLICIES)}."
            )
        if self.progress_mode not in PROGRESS_MODES:
            raise ConfigurationError(
                f"Unknown progress mode: {self.progress_mode!r}. Use one of {', '.join(PROGRESS_MODES)}."
            )

    @property
    def threshold_fraction(self) -> float:
        """Threshold as a fraction of 1, used for score comparisons."""
        return self.threshold / 100.0
