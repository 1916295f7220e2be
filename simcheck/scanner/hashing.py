"""
Hashing module for the scanner package.

Provides the two collaborators of the load phase:
- ImageDecoder: turns a file into a pixel buffer (a PIL image)
- PerceptualHasher: turns a pixel buffer into a fixed-width Fingerprint

Default implementations use Pillow for decoding and imagehash for the
perceptual hash. Any object with the same methods can be injected instead.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Protocol

from ..config import DEFAULT_HASH_ALGORITHM, DEFAULT_HASH_SIZE
from ..exceptions import ConfigurationError, DecodeError
from ..models import Fingerprint
from .dependencies import Image, imagehash, np, _logger


# Supported perceptual hash functions, all taking (image, hash_size=...)
HASH_ALGORITHMS: dict[str, Callable[..., Any]] = {
    'phash': imagehash.phash,
    'dhash': imagehash.dhash,
    'average': imagehash.average_hash,
    'whash': imagehash.whash,
}


class ImageDecoder(Protocol):
    """Interface for decoding an image file into pixels."""

    def decode(self, filepath: str) -> Any:
        """Decode a file, raising DecodeError when it cannot be read."""
        ...


class PerceptualHasher(Protocol):
    """Interface for fingerprinting decoded pixels."""

    def hash(self, pixels: Any) -> Fingerprint:
        """Compute the fingerprint of a decoded image."""
        ...


def fingerprint_from_image_hash(image_hash: 'imagehash.ImageHash') -> Fingerprint:
    """
    Convert an imagehash.ImageHash bit matrix into a Fingerprint.

    Bits are packed row-major, most significant bit first, so the integer
    value matches the hex string imagehash prints for the same hash.
    """
    flat = np.asarray(image_hash.hash, dtype=bool).flatten()
    bits = int(flat.size)
    value = int.from_bytes(np.packbits(flat).tobytes(), 'big')
    # packbits pads the last byte with zero bits on the right
    value >>= (-bits) % 8
    return Fingerprint(value=value, bits=bits)


class PillowImageDecoder:
    """Decodes image files with Pillow, one file open at a time."""

    def decode(self, filepath: str | Path) -> 'Image.Image':
        """
        Open and fully decode an image.

        The file handle is closed before returning; the returned image owns
        its pixel data.

        Args:
            filepath: Path to the image

        Returns:
            Decoded image in RGB or L mode

        Raises:
            DecodeError: If the file cannot be opened or decoded
        """
        try:
            with Image.open(filepath) as img:
                # Force load to detect truncated/corrupt images early
                img.load()

                # Convert to RGB if necessary (handles palettes, transparency, etc.)
                if img.mode not in ('RGB', 'L'):
                    return img.convert('RGB')
                return img.copy()
        except Exception as e:
            # Malformed files also surface as SyntaxError, EOFError, struct.error, ...
            _logger.debug(f"Decoding failed for {filepath}: {e}")
            raise DecodeError(str(filepath), str(e)) from e


class ImageHashHasher:
    """
    Perceptual hasher backed by the imagehash library.

    Args:
        algorithm: One of HASH_ALGORITHMS ('phash' by default)
        hash_size: Side of the hash bit matrix; 8 gives a 64-bit fingerprint

    Raises:
        ConfigurationError: If the algorithm is unknown or hash_size < 2
    """

    def __init__(self, algorithm: str = DEFAULT_HASH_ALGORITHM, hash_size: int = DEFAULT_HASH_SIZE):
        if algorithm not in HASH_ALGORITHMS:
            raise ConfigurationError(
                f"Unknown hash algorithm: {algorithm!r}. Use one of {', '.join(HASH_ALGORITHMS)}."
            )
        if hash_size < 2:
            raise ConfigurationError(f"Hash size must be at least 2, got {hash_size}")
        self.algorithm = algorithm
        self.hash_size = hash_size
        self._hash_func = HASH_ALGORITHMS[algorithm]

    @property
    def bits(self) -> int:
        """Width of the produced fingerprints."""
        return self.hash_size * self.hash_size

    def hash(self, pixels: 'Image.Image') -> Fingerprint:
        return fingerprint_from_image_hash(self._hash_func(pixels, hash_size=self.hash_size))


__all__ = [
    'HASH_ALGORITHMS',
    'ImageDecoder',
    'PerceptualHasher',
    'PillowImageDecoder',
    'ImageHashHasher',
    'fingerprint_from_image_hash',
]
