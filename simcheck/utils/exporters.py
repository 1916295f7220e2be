"""
Export functionality for the image similarity checker.

Provides functions to export similarity results to TXT and CSV files.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import TextIO

from ..models import ScanResult
from .formatters import format_score


def _export_txt(result: ScanResult, file_handle: TextIO) -> None:
    """
    Export similarity results to TXT format.

    Args:
        result: Completed scan result
        file_handle: Open file handle to write to
    """
    file_handle.write("SIMILAR IMAGE REPORT\n")
    file_handle.write("=" * 70 + "\n\n")

    file_handle.write("SIMILAR PAIRS\n")
    file_handle.write("-" * 70 + "\n")
    for i, match in enumerate(result.matches, 1):
        file_handle.write(f"\nPair {i} ({format_score(match.score)}):\n")
        file_handle.write(f"  {match.path_a}\n")
        file_handle.write(f"  {match.path_b}\n")

    if result.skipped:
        file_handle.write("\n\nSKIPPED FILES\n")
        file_handle.write("-" * 70 + "\n")
        for skipped in result.skipped:
            file_handle.write(f"  {skipped.path}: {skipped.reason}\n")


def _export_csv(result: ScanResult, file_handle: TextIO) -> None:
    """
    Export similarity results to CSV format.

    Args:
        result: Completed scan result
        file_handle: Open file handle to write to

    Notes:
        CSV columns: path_a, path_b, score
    """
    writer = csv.writer(file_handle)
    writer.writerow(['path_a', 'path_b', 'score'])
    for match in result.matches:
        writer.writerow([match.path_a, match.path_b, f"{match.score:.4f}"])


def export_results(
    result: ScanResult,
    output_path: Path,
    export_format: str = 'txt'
) -> None:
    """
    Export similarity results to a file.

    Args:
        result: Completed scan result
        output_path: Path to output file
        export_format: Export format ('txt' or 'csv'). Default: 'txt'

    Raises:
        ValueError: If export_format is not 'txt' or 'csv'
        OSError: If file cannot be written
    """
    if export_format not in ('txt', 'csv'):
        raise ValueError(f"Unsupported export format: {export_format}. Use 'txt' or 'csv'.")

    with open(output_path, 'w', encoding='utf-8', newline='') as f:
        if export_format == 'txt':
            _export_txt(result, f)
        elif export_format == 'csv':
            _export_csv(result, f)


__all__ = ['export_results']
