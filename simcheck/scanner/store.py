"""
In-memory fingerprint store and the load phase that fills it.

The load phase walks the candidate list once, fingerprints every supported
image and reports progress over the first half of the range (0-50).
"""

from __future__ import annotations

import threading
from typing import Iterator, Optional

from ..config import DECODE_POLICY_ABORT, DEFAULT_DECODE_POLICY, LOAD_PHASE_SHARE
from ..exceptions import DecodeError, ScanCancelled
from ..models import Fingerprint, SkippedFile
from ..progress import ProgressReporter
from .dependencies import _logger
from .file_discovery import is_supported_image
from .hashing import ImageDecoder, PerceptualHasher, PillowImageDecoder, ImageHashHasher


class HashStore:
    """
    Maps image paths to their fingerprints for a single run.

    Insertion order is preserved and drives the comparison order. Storing
    the same path twice keeps the last fingerprint.
    """

    def __init__(
        self,
        decoder: Optional[ImageDecoder] = None,
        hasher: Optional[PerceptualHasher] = None,
    ):
        self.decoder = decoder if decoder is not None else PillowImageDecoder()
        self.hasher = hasher if hasher is not None else ImageHashHasher()
        self._fingerprints: dict[str, Fingerprint] = {}
        self.skipped: list[SkippedFile] = []

    def __len__(self) -> int:
        return len(self._fingerprints)

    def __contains__(self, path: object) -> bool:
        return path in self._fingerprints

    def __iter__(self) -> Iterator[str]:
        return iter(self._fingerprints)

    def __getitem__(self, path: str) -> Fingerprint:
        return self._fingerprints[path]

    @property
    def fingerprints(self) -> dict[str, Fingerprint]:
        """The path -> fingerprint mapping, in insertion order."""
        return self._fingerprints

    def put(self, path: str, fingerprint: Fingerprint) -> None:
        """Store a fingerprint, replacing any previous one for path."""
        self._fingerprints[path] = fingerprint

    def clear(self) -> None:
        """Drop all fingerprints and skipped entries from a previous run."""
        self._fingerprints.clear()
        self.skipped.clear()

    def fingerprint_file(self, filepath: str) -> Fingerprint:
        """Decode one image and compute its fingerprint."""
        pixels = self.decoder.decode(filepath)
        try:
            return self.hasher.hash(pixels)
        finally:
            close = getattr(pixels, 'close', None)
            if callable(close):
                close()

    def load(
        self,
        candidates: list[str],
        progress: Optional[ProgressReporter] = None,
        decode_policy: str = DEFAULT_DECODE_POLICY,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        """
        Fingerprint every supported image among the candidates.

        Args:
            candidates: All files found under the root folder, in order
            progress: Receives floor(i * 50 / N) after the i-th candidate
            decode_policy: 'abort' re-raises DecodeError, 'skip' records it
            cancel_event: Checked before each candidate

        Raises:
            DecodeError: Under the 'abort' policy, for the first bad file
            ScanCancelled: If cancel_event is set

        Notes:
            - Unsupported files are not hashed but still advance progress
            - With no candidates at all, no progress is reported
        """
        total = len(candidates)

        for i, filepath in enumerate(candidates, 1):
            if cancel_event is not None and cancel_event.is_set():
                raise ScanCancelled("Scan cancelled during load phase")

            if is_supported_image(filepath):
                try:
                    self.put(filepath, self.fingerprint_file(filepath))
                except DecodeError as e:
                    if decode_policy == DECODE_POLICY_ABORT:
                        raise
                    _logger.warning(f"Skipping {filepath}: {e.reason}")
                    self.skipped.append(SkippedFile(path=filepath, reason=e.reason))
            else:
                _logger.debug(f"Unsupported format, not hashed: {filepath}")

            if progress is not None:
                progress.set(i * LOAD_PHASE_SHARE // total)


__all__ = ['HashStore']
