"""
Similarity engine orchestration.

Provides the SimilarityEngine class that owns the configuration, the hash
store and the result list, and drives a run through its two phases:

1. Load: enumerate files, fingerprint every supported image (progress 0-50)
2. Compare: score all fingerprint pairs against the threshold (progress 50-100)

Runs can be executed synchronously with run() or on a background worker
with compare_async(), which returns a Future carrying the ScanResult or
the exception that ended the run.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_DECODE_POLICY, DEFAULT_PROGRESS_MODE, PROGRESS_MAX
from .exceptions import EngineBusyError
from .models import EngineConfig, MatchRecord, ScanResult, SkippedFile
from .progress import ProgressReporter
from .scanner import HashStore, PairwiseMatcher, find_candidate_files
from .scanner.hashing import ImageDecoder, PerceptualHasher
from .utils import formatters

# Module logger
_logger = logging.getLogger(__name__)


class SimilarityEngine:
    """
    Finds visually similar images under a folder.

    Args:
        root_folder: Folder to scan recursively
        threshold: Minimum similarity percentage in (0, 100]
        decoder: Optional ImageDecoder (Pillow by default)
        hasher: Optional PerceptualHasher (imagehash pHash by default)
        decode_policy: 'skip' (default) or 'abort' on undecodable files
        symmetric_pairs: Report both (A, B) and (B, A) when True
        progress_mode: 'per_pass' (default) or 'proportional'

    Raises:
        ConfigurationError: If the folder path or threshold is invalid

    Examples:
        >>> engine = SimilarityEngine('/photos', 90)
        >>> engine.progress.subscribe(print)
        >>> result = engine.compare_async().result()
    """

    def __init__(
        self,
        root_folder: Union[str, Path],
        threshold: float,
        decoder: Optional[ImageDecoder] = None,
        hasher: Optional[PerceptualHasher] = None,
        *,
        decode_policy: str = DEFAULT_DECODE_POLICY,
        symmetric_pairs: bool = True,
        progress_mode: str = DEFAULT_PROGRESS_MODE,
    ):
        self.config = EngineConfig(
            root_folder=root_folder,
            threshold=threshold,
            decode_policy=decode_policy,
            symmetric_pairs=symmetric_pairs,
            progress_mode=progress_mode,
        )
        self.progress = ProgressReporter()
        self._store = HashStore(decoder=decoder, hasher=hasher)
        self._matcher = PairwiseMatcher(
            threshold_fraction=self.config.threshold_fraction,
            symmetric_pairs=self.config.symmetric_pairs,
            progress_mode=self.config.progress_mode,
        )
        self._result: list[MatchRecord] = []
        self._run_lock = threading.Lock()
        self._cancel_event = threading.Event()
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def result(self) -> list[MatchRecord]:
        """Snapshot of the matches found by the latest run."""
        return list(self._result)

    @property
    def skipped(self) -> list[SkippedFile]:
        """Files skipped by the latest run under the 'skip' decode policy."""
        return list(self._store.skipped)

    @property
    def is_running(self) -> bool:
        """True while a run holds the engine."""
        return self._run_lock.locked()

    def run(self) -> ScanResult:
        """
        Execute a complete run on the calling thread.

        Returns:
            ScanResult with the matches and skipped files

        Raises:
            EngineBusyError: If another run is in progress
            EnumerationError: If the root folder cannot be enumerated
            DecodeError: Under the 'abort' policy, for the first bad file
            ScanCancelled: If cancel() was called during the run
        """
        self._acquire()
        return self._run_locked()

    def compare_async(self) -> 'Future[ScanResult]':
        """
        Start a run on the engine's background worker and return at once.

        Returns:
            Future resolving to the ScanResult, or raising the error that
            ended the run

        Raises:
            EngineBusyError: If another run is in progress
        """
        self._acquire()
        try:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='simcheck')
            return self._executor.submit(self._run_locked)
        except BaseException:
            self._run_lock.release()
            raise

    def cancel(self) -> None:
        """Request cancellation of the run in progress."""
        if self.is_running:
            _logger.info("Cancellation requested")
            self._cancel_event.set()

    def close(self) -> None:
        """Wait for any pending run and release the background worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> 'SimilarityEngine':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _acquire(self) -> None:
        if not self._run_lock.acquire(blocking=False):
            raise EngineBusyError("A comparison is already running on this engine")
        self._cancel_event.clear()

    def _run_locked(self) -> ScanResult:
        try:
            return self._execute()
        finally:
            self._run_lock.release()

    def _execute(self) -> ScanResult:
        """Run both phases in order. Caller must hold the run lock."""
        start_time = time.time()
        root = self.config.root_folder

        # Previous results are dropped before anything else happens
        self.progress.reset()
        self._result.clear()
        self._store.clear()

        # Phase 1: Load
        candidates = find_candidate_files(root)
        _logger.info(f"Found {formatters.format_number(len(candidates))} files under {root}")

        self._store.load(
            candidates,
            progress=self.progress,
            decode_policy=self.config.decode_policy,
            cancel_event=self._cancel_event,
        )
        _logger.info(
            f"Fingerprinted {formatters.format_number(len(self._store))} images"
            + (f", skipped {len(self._store.skipped):,}" if self._store.skipped else "")
        )

        # Phase 2: Compare
        _logger.info(
            f"Comparing {formatters.format_number(self._matcher.total_comparisons(len(self._store)))} pairs "
            f"(threshold={self.config.threshold:g}%)"
        )
        matches = self._matcher.match(
            self._store.fingerprints,
            progress=self.progress,
            cancel_event=self._cancel_event,
        )
        self._result.extend(matches)

        # Fewer than one outer pass (no images) never reaches 100 on its own
        if self.progress.value != PROGRESS_MAX:
            self.progress.set(PROGRESS_MAX)

        elapsed = time.time() - start_time
        _logger.info(
            f"Found {formatters.format_number(len(matches))} similar pairs "
            f"in {formatters.format_time_estimate(elapsed)}"
        )

        return ScanResult(
            matches=list(matches),
            skipped=list(self._store.skipped),
            candidate_count=len(candidates),
            hashed_count=len(self._store),
        )


__all__ = ['SimilarityEngine']
