"""
Formatting utilities for the image similarity checker.

Provides human-readable formatting for numbers, time estimates and scores.
"""

from __future__ import annotations


def format_number(n: int) -> str:
    """
    Format large numbers with commas for readability.

    Args:
        n: Number to format

    Returns:
        Formatted string with comma separators

    Examples:
        >>> format_number(1000)
        '1,000'
        >>> format_number(1234567)
        '1,234,567'
    """
    return f"{n:,}"


def format_time_estimate(seconds: float) -> str:
    """
    Format seconds into human-readable time estimate.

    Args:
        seconds: Time in seconds

    Returns:
        Formatted time string (e.g., "5s", "2m 30s", "1h 15m")

    Examples:
        >>> format_time_estimate(45)
        '45s'
        >>> format_time_estimate(150)
        '2m 30s'
        >>> format_time_estimate(3665)
        '1h 1m'
    """
    if seconds < 60:
        return f"{int(seconds)}s"
    elif seconds < 3600:
        return f"{int(seconds / 60)}m {int(seconds % 60)}s"
    else:
        hours = int(seconds / 3600)
        minutes = int((seconds % 3600) / 60)
        return f"{hours}h {minutes}m"


def format_score(score: float) -> str:
    """
    Format a similarity score as a percentage with up to two decimals.

    Examples:
        >>> format_score(100.0)
        '100%'
        >>> format_score(98.4375)
        '98.44%'
    """
    return f"{round(score, 2):g}%"


__all__ = ['format_number', 'format_time_estimate', 'format_score']
