"""
Unit tests for the Pillow decoder and imagehash-backed hasher.
"""

import imagehash
import pytest
from PIL import Image

from simcheck.exceptions import ConfigurationError, DecodeError
from simcheck.scanner.hashing import (
    HASH_ALGORITHMS,
    ImageHashHasher,
    PillowImageDecoder,
    fingerprint_from_image_hash,
)

from conftest import make_noise_image, write_broken_png


class TestPillowImageDecoder:
    """Test PillowImageDecoder."""

    def test_decode_png(self, sample_images):
        img = PillowImageDecoder().decode(sample_images['identical1'])
        assert img.size == (64, 64)
        assert img.mode == 'RGB'

    def test_palette_gif_converted_to_rgb(self, temp_dir):
        path = temp_dir / "palette.gif"
        make_noise_image(seed=3).convert('P').save(path, 'GIF')

        img = PillowImageDecoder().decode(str(path))
        assert img.mode == 'RGB'

    def test_grayscale_kept(self, temp_dir):
        path = temp_dir / "gray.bmp"
        Image.new('L', (16, 16), color=128).save(path, 'BMP')

        img = PillowImageDecoder().decode(str(path))
        assert img.mode == 'L'

    def test_corrupted_file(self, temp_dir):
        path = temp_dir / "broken.png"
        path.write_text("not an image")

        with pytest.raises(DecodeError) as exc_info:
            PillowImageDecoder().decode(str(path))
        assert exc_info.value.path == str(path)

    def test_corrupt_chunk_becomes_decode_error(self, temp_dir):
        """A broken chunk mid-stream (SyntaxError inside Pillow) is a DecodeError."""
        path = temp_dir / "broken_chunk.png"
        write_broken_png(path)

        with pytest.raises(DecodeError) as exc_info:
            PillowImageDecoder().decode(str(path))
        assert exc_info.value.path == str(path)

    def test_nonexistent_file(self, temp_dir):
        with pytest.raises(DecodeError):
            PillowImageDecoder().decode(str(temp_dir / "missing.jpg"))


class TestImageHashHasher:
    """Test ImageHashHasher."""

    def test_default_is_64_bit(self):
        hasher = ImageHashHasher()
        assert hasher.algorithm == 'phash'
        assert hasher.bits == 64

        fp = hasher.hash(make_noise_image(seed=1))
        assert fp.bits == 64

    def test_identical_pixels_identical_fingerprint(self):
        hasher = ImageHashHasher()
        assert hasher.hash(make_noise_image(seed=5)) == hasher.hash(make_noise_image(seed=5))

    def test_unrelated_images_differ(self):
        hasher = ImageHashHasher()
        distance = hasher.hash(make_noise_image(seed=1)) - hasher.hash(make_noise_image(seed=2))
        assert distance > 6

    @pytest.mark.parametrize("algorithm", sorted(HASH_ALGORITHMS))
    def test_all_algorithms(self, algorithm):
        fp = ImageHashHasher(algorithm=algorithm).hash(make_noise_image(seed=9))
        assert fp.bits == 64

    def test_unknown_algorithm(self):
        with pytest.raises(ConfigurationError):
            ImageHashHasher(algorithm='colorhash-ish')

    def test_invalid_hash_size(self):
        with pytest.raises(ConfigurationError):
            ImageHashHasher(hash_size=1)


class TestFingerprintFromImageHash:
    """Test conversion from imagehash results."""

    def test_matches_imagehash_hex(self):
        image_hash = imagehash.phash(make_noise_image(seed=4), hash_size=8)
        fp = fingerprint_from_image_hash(image_hash)
        assert fp.value == int(str(image_hash), 16)
        assert str(fp) == str(image_hash)

    def test_distance_matches_imagehash(self):
        h1 = imagehash.phash(make_noise_image(seed=1), hash_size=8)
        h2 = imagehash.phash(make_noise_image(seed=2), hash_size=8)
        assert fingerprint_from_image_hash(h1) - fingerprint_from_image_hash(h2) == h1 - h2

    def test_width_not_multiple_of_eight(self):
        """A 3x3 hash has 9 bits; the padding bits must be dropped."""
        image_hash = imagehash.average_hash(make_noise_image(seed=6), hash_size=3)
        fp = fingerprint_from_image_hash(image_hash)
        assert fp.bits == 9
        assert fp.value == int(''.join('1' if b else '0' for b in image_hash.hash.flatten()), 2)
