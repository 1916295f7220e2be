"""
Dependency initialization for the scanner package.

Handles PIL, imagehash, numpy and tqdm imports with proper error handling
and configuration.
"""

from __future__ import annotations

import warnings
import logging
from typing import Optional, Any

from ..user_config import get_user_config

# Module-level logger
_logger = logging.getLogger(__name__)

# Check for required dependencies
try:
    from PIL import Image
    import imagehash
    import numpy as np
except ImportError:
    raise ImportError(
        "Required packages not found!\n"
        "Install with: pip install Pillow imagehash numpy"
    )

# Raise PIL's decompression bomb limit for large images
# Legitimate high-resolution scans and panoramas exceed Pillow's ~89MP default
Image.MAX_IMAGE_PIXELS = get_user_config().max_image_pixels

# Suppress the warning band below the hard limit; we raised the limit on purpose
warnings.filterwarnings("ignore", category=Image.DecompressionBombWarning)

# Optional: tqdm for progress bars
# Store as Optional[Any] to satisfy type checkers when tqdm is not installed
HAS_TQDM = False
_tqdm_class: Optional[Any] = None

try:
    from tqdm import tqdm as _tqdm_import
    HAS_TQDM = True
    _tqdm_class = _tqdm_import
except ImportError:
    pass


__all__ = [
    'Image',
    'imagehash',
    'np',
    'HAS_TQDM',
    '_tqdm_class',
    '_logger',
]
