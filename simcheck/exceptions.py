"""
Exception types raised by the image similarity checker.

Hierarchy:
- SimCheckError: base for everything raised by this package
  - ConfigurationError: invalid folder path or threshold (also a ValueError)
  - EnumerationError: root folder missing or not traversable
  - DecodeError: a candidate file could not be opened or decoded
  - EngineBusyError: a run was started while another is in flight
  - ScanCancelled: the run was cancelled from outside
"""

from __future__ import annotations

from typing import Optional


class SimCheckError(Exception):
    """Base class for all similarity checker errors."""


class ConfigurationError(SimCheckError, ValueError):
    """Raised synchronously when engine settings are invalid."""


class EnumerationError(SimCheckError):
    """Raised when the root folder cannot be enumerated."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class DecodeError(SimCheckError):
    """Raised when an image file cannot be opened or decoded."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot decode {path}: {reason}")
        self.path = path
        self.reason = reason


class EngineBusyError(SimCheckError, RuntimeError):
    """Raised when a run is requested while another run is in progress."""


class ScanCancelled(SimCheckError):
    """Raised inside a run once cancellation has been requested."""


__all__ = [
    'SimCheckError',
    'ConfigurationError',
    'EnumerationError',
    'DecodeError',
    'EngineBusyError',
    'ScanCancelled',
]
