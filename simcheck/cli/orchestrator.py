"""
CLI workflow orchestration for the image similarity checker.

Provides the CLIOrchestrator class that coordinates the CLI workflow from
argument parsing through final reporting.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..engine import SimilarityEngine
from ..exceptions import SimCheckError
from ..scanner.dependencies import HAS_TQDM, _tqdm_class
from ..scanner.hashing import ImageHashHasher
from ..utils.exporters import export_results
from ..utils.validators import validate_scan_params
from .arg_parser import parse_arguments
from .reporting import print_match_report


def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Configure logging for the CLI.

    Args:
        verbose: Enable verbose (DEBUG level) logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    return logging.getLogger(__name__)


class CLIOrchestrator:
    """
    Orchestrates the CLI workflow.

    Manages the lifecycle from argument parsing through similarity
    detection, reporting and export.
    """

    def __init__(self):
        """Initialize the orchestrator."""
        self.logger = None
        self.args = None
        self.result = None

    def run(self, argv=None) -> int:
        """
        Execute the complete CLI workflow.

        Args:
            argv: Argument list (default: sys.argv)

        Returns:
            Exit code (0 for success, 1 for error)
        """
        self._setup_phase(argv)

        exit_code = self._validate_phase()
        if exit_code != 0:
            return exit_code

        exit_code = self._scan_phase()
        if exit_code != 0:
            return exit_code

        return self._report_phase()

    def _setup_phase(self, argv=None) -> None:
        """Phase 1: Parse arguments and setup logging."""
        self.args = parse_arguments(argv)
        self.logger = setup_logging(self.args.verbose)

    def _validate_phase(self) -> int:
        """
        Phase 2: Validate arguments.

        Returns:
            0 for success, 1 for validation error
        """
        is_valid, error = validate_scan_params(
            str(self.args.directory),
            threshold=self.args.threshold,
            decode_policy=self.args.decode_policy,
            progress_mode=self.args.progress_mode,
        )
        if not is_valid:
            self.logger.error(error)
            return 1
        return 0

    def _scan_phase(self) -> int:
        """
        Phase 3: Run the similarity engine.

        Returns:
            0 for success, 1 if the run failed
        """
        self.logger.info(
            f"Scanning {self.args.directory} for similar images "
            f"(threshold={self.args.threshold:g}%, algorithm={self.args.algorithm})..."
        )

        pbar: Optional[Any] = None
        try:
            with SimilarityEngine(
                self.args.directory,
                self.args.threshold,
                hasher=ImageHashHasher(algorithm=self.args.algorithm),
                decode_policy=self.args.decode_policy,
                symmetric_pairs=not self.args.unique_pairs,
                progress_mode=self.args.progress_mode,
            ) as engine:
                if HAS_TQDM and not self.args.no_progress and _tqdm_class is not None:
                    pbar = _tqdm_class(total=100, desc="Finding similar images", unit="%", ncols=80)
                    engine.progress.subscribe(lambda value: pbar.update(value - pbar.n))

                self.result = engine.compare_async().result()
        except SimCheckError as e:
            self.logger.error(str(e))
            return 1
        finally:
            if pbar is not None:
                pbar.close()

        if self.result.skipped:
            self.logger.warning(f"Could not decode {len(self.result.skipped):,} files")
        return 0

    def _report_phase(self) -> int:
        """
        Phase 4: Display report and handle exports.

        Returns:
            0 for success, 1 if the export failed
        """
        print_match_report(self.result)

        if self.args.export:
            try:
                export_results(self.result, self.args.export, self.args.export_format)
            except OSError as e:
                self.logger.error(f"Cannot write export file {self.args.export}: {e}")
                return 1
            self.logger.info(f"Results exported to: {self.args.export}")
        return 0


__all__ = ['CLIOrchestrator', 'setup_logging']
