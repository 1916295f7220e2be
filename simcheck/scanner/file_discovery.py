"""
File discovery module for the scanner package.

Enumerates every regular file under a root folder and decides which of them
carry a supported image extension. Unsupported files are still returned by
the enumeration because they count toward load-phase progress.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..config import IMAGE_EXTENSIONS
from ..exceptions import EnumerationError


def is_supported_image(filepath: str | Path) -> bool:
    """
    Check whether a file has a supported image extension.

    Args:
        filepath: Path to check

    Returns:
        True for .jpg, .jpeg, .png, .bmp and .gif in any letter case,
        including dotfiles such as '.png' that have no stem
    """
    name = os.path.basename(str(filepath))
    dot = name.rfind('.')
    if dot == -1:
        return False
    # os.path.splitext('.png') yields no extension; a bare '.png' still counts here
    return name[dot:].lower() in IMAGE_EXTENSIONS


def find_candidate_files(root_path: str | Path, recursive: bool = True) -> list[str]:
    """
    Find all files under the given directory, whatever their format.

    Args:
        root_path: Directory path to search
        recursive: If True, search subdirectories recursively

    Returns:
        Sorted list of file paths as strings

    Raises:
        EnumerationError: If root_path does not exist, is not a directory,
            or cannot be read

    Notes:
        - Sorting makes the enumeration order, and therefore the result
          order, deterministic across runs
        - Paths are kept as found (not resolved) so they stay unique keys
    """
    root = Path(root_path)

    if not root.exists():
        raise EnumerationError(f"Directory not found: {root}", path=str(root))
    if not root.is_dir():
        raise EnumerationError(f"Path is not a directory: {root}", path=str(root))
    if not os.access(root, os.R_OK | os.X_OK):
        raise EnumerationError(f"Cannot read directory (permission denied): {root}", path=str(root))

    iterator = root.rglob('*') if recursive else root.glob('*')

    try:
        files = [str(filepath) for filepath in iterator if filepath.is_file()]
    except OSError as e:
        raise EnumerationError(f"Cannot enumerate {root}: {e}", path=str(root)) from e

    return sorted(files)


__all__ = ['find_candidate_files', 'is_supported_image']
