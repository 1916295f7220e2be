"""
Utilities package for the image similarity checker.

Provides:
- formatters: Human-readable formatting for numbers, time and scores
- validators: Input validation for scan parameters
- exporters: Export similarity results to files
"""

from __future__ import annotations

# Import submodules for convenient access
from . import formatters
from . import validators
from . import exporters

# Export commonly used functions
from .formatters import format_number, format_time_estimate, format_score
from .validators import (
    validate_directory,
    validate_threshold,
    validate_scan_params,
)
from .exporters import export_results

__all__ = [
    # Submodules
    'formatters',
    'validators',
    'exporters',
    # Formatters
    'format_number',
    'format_time_estimate',
    'format_score',
    # Validators
    'validate_directory',
    'validate_threshold',
    'validate_scan_params',
    # Exporters
    'export_results',
]
