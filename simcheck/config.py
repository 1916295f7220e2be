"""
Configuration constants for the image similarity checker.

This module contains all configurable settings including:
- Supported image extensions
- Fingerprint geometry and threshold defaults
- Names of the decode policies and progress modes
"""

# Supported image extensions (matched case-insensitively)
IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.bmp', '.gif'}

# Perceptual hash geometry
# hash_size=8 produces an 8x8 bit matrix, i.e. a 64-bit fingerprint
DEFAULT_HASH_SIZE = 8
FINGERPRINT_BITS = DEFAULT_HASH_SIZE * DEFAULT_HASH_SIZE

# Default hashing algorithm (see scanner.hashing.HASH_ALGORITHMS)
DEFAULT_HASH_ALGORITHM = 'phash'

# Default similarity threshold as a percentage (0-100]
# Higher = stricter matching. 90 allows ~6 differing bits out of 64.
DEFAULT_THRESHOLD = 90.0

# Progress range split: load phase reports 0-50, compare phase 50-100
LOAD_PHASE_SHARE = 50
PROGRESS_MAX = 100

# What to do when a candidate image cannot be opened or decoded
DECODE_POLICY_ABORT = 'abort'  # Stop the whole run on the first failure
DECODE_POLICY_SKIP = 'skip'    # Log, record the file as skipped, keep going
DECODE_POLICIES = (DECODE_POLICY_ABORT, DECODE_POLICY_SKIP)
DEFAULT_DECODE_POLICY = DECODE_POLICY_SKIP

# How the compare phase reports progress
PROGRESS_PER_PASS = 'per_pass'          # Jump to 100 after every outer pass
PROGRESS_PROPORTIONAL = 'proportional'  # 50 + comparisons_done * 50 / total
PROGRESS_MODES = (PROGRESS_PER_PASS, PROGRESS_PROPORTIONAL)
DEFAULT_PROGRESS_MODE = PROGRESS_PER_PASS

# Decompression bomb limit for Pillow (pixels)
# Default Pillow limit is ~89MP, raised for high-resolution scans and panoramas
MAX_IMAGE_PIXELS = 500_000_000
