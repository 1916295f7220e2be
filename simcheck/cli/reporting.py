"""
Report formatting and display for the CLI interface.

Prints similarity results in a human-readable format.
"""

from __future__ import annotations

from ..models import MatchRecord, ScanResult
from ..utils.formatters import format_number, format_score


def _print_section_header(title: str) -> None:
    """Print a section header with divider lines."""
    print("\n" + "-" * 70)
    print(title)
    print("-" * 70)


def _print_match(pair_number: int, match: MatchRecord) -> None:
    """Print a single similar pair."""
    print(f"\nPair {pair_number} ({format_score(match.score)}):")
    print(f"  {match.path_a}")
    print(f"  {match.path_b}")


def print_match_report(result: ScanResult) -> None:
    """
    Print a report of similar image pairs.

    Args:
        result: Completed scan result

    Notes:
        - Prints to stdout with formatted sections
        - Pairs are numbered from 1 in discovery order
        - Skipped (undecodable) files are listed last
    """
    print("\n" + "=" * 70)
    print("SIMILAR IMAGE REPORT")
    print("=" * 70)

    print(f"\nFiles found: {format_number(result.candidate_count)}")
    print(f"Images fingerprinted: {format_number(result.hashed_count)}")
    print(f"Similar pairs: {format_number(result.match_count)}")

    if result.matches:
        _print_section_header("SIMILAR PAIRS")
        for i, match in enumerate(result.matches, 1):
            _print_match(i, match)

    if result.skipped:
        _print_section_header(f"SKIPPED FILES ({len(result.skipped)})")
        for skipped in result.skipped:
            print(f"  {skipped.path}")
            print(f"         {skipped.reason}")

    print("\n" + "=" * 70)


__all__ = ['print_match_report']
