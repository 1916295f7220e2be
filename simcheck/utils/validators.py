"""
Input validation for the image similarity checker.

Provides validators for the scan directory and scan parameters. They return
(is_valid, error_message) tuples so callers can report problems without
constructing an engine first.
"""

from __future__ import annotations

import math
import os
from typing import Optional

from ..config import DECODE_POLICIES, PROGRESS_MODES


def validate_directory(directory: str) -> tuple[bool, str]:
    """
    Validate that a directory exists and is accessible.

    Args:
        directory: Directory path to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_directory('/nonexistent/directory')
        (False, 'Directory not found: /nonexistent/directory')
    """
    if not directory or not str(directory).strip():
        return False, "Directory path is required"

    if not os.path.exists(directory):
        return False, f"Directory not found: {directory}"

    if not os.path.isdir(directory):
        return False, f"Path is not a directory: {directory}"

    if not os.access(directory, os.R_OK):
        return False, f"Cannot read directory (permission denied): {directory}"

    return True, ""


def validate_threshold(threshold: float) -> tuple[bool, str]:
    """
    Validate that a similarity threshold is within (0, 100].

    Args:
        threshold: Threshold percentage to validate

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_threshold(90)
        (True, '')
        >>> validate_threshold(0)
        (False, 'Threshold must be greater than 0 and at most 100')
    """
    try:
        threshold = float(threshold)
    except (ValueError, TypeError):
        return False, "Threshold must be a number"

    if math.isnan(threshold) or not 0 < threshold <= 100:
        return False, "Threshold must be greater than 0 and at most 100"
    return True, ""


def validate_scan_params(
    directory: str,
    threshold: Optional[float] = None,
    decode_policy: Optional[str] = None,
    progress_mode: Optional[str] = None,
) -> tuple[bool, str]:
    """
    Validate all scan parameters.

    Args:
        directory: Directory to scan
        threshold: Similarity threshold percentage (optional)
        decode_policy: 'abort' or 'skip' (optional)
        progress_mode: 'per_pass' or 'proportional' (optional)

    Returns:
        Tuple of (is_valid, error_message)
    """
    is_valid, error = validate_directory(directory)
    if not is_valid:
        return False, error

    if threshold is not None:
        is_valid, error = validate_threshold(threshold)
        if not is_valid:
            return False, error

    if decode_policy is not None and decode_policy not in DECODE_POLICIES:
        return False, f"Decode policy must be one of: {', '.join(DECODE_POLICIES)}"

    if progress_mode is not None and progress_mode not in PROGRESS_MODES:
        return False, f"Progress mode must be one of: {', '.join(PROGRESS_MODES)}"

    return True, ""


__all__ = [
    'validate_directory',
    'validate_threshold',
    'validate_scan_params',
]
