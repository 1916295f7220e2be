"""
Pytest configuration and shared fixtures for test suite.
"""

import os
import shutil
import tempfile
import threading
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from simcheck.exceptions import DecodeError
from simcheck.models import Fingerprint


def make_noise_image(seed: int, size: int = 64) -> Image.Image:
    """Create a deterministic RGB noise image; different seeds look unrelated."""
    rng = np.random.default_rng(seed)
    pixels = rng.integers(0, 256, size=(size, size, 3), dtype=np.uint8)
    return Image.fromarray(pixels, 'RGB')


def write_broken_png(path) -> None:
    """
    Write a PNG whose second IDAT chunk type is garbage.

    Pillow opens the header fine and fails with SyntaxError while loading.
    """
    make_noise_image(seed=12, size=512).save(path, 'PNG')
    data = bytearray(Path(path).read_bytes())
    first = data.find(b'IDAT')
    second = data.find(b'IDAT', first + 4)
    assert second != -1, "expected more than one IDAT chunk"
    data[second:second + 4] = b'\x00\x01\x02\x03'
    Path(path).write_bytes(bytes(data))


class FakeDecoder:
    """
    Decoder stand-in that returns the file's basename as its "pixels".

    Files whose basename is in `failing` raise DecodeError.
    """

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def decode(self, filepath):
        self.calls.append(str(filepath))
        name = os.path.basename(str(filepath))
        if name in self.failing:
            raise DecodeError(str(filepath), "corrupt data")
        return name


class FakeHasher:
    """Hasher stand-in mapping basenames to fixed fingerprint values."""

    def __init__(self, values):
        self.values = values

    def hash(self, pixels):
        return Fingerprint(self.values[pixels])


class BlockingDecoder(FakeDecoder):
    """FakeDecoder that waits for `release` before decoding anything."""

    def __init__(self, failing=()):
        super().__init__(failing)
        self.started = threading.Event()
        self.release = threading.Event()

    def decode(self, filepath):
        self.started.set()
        self.release.wait(timeout=10)
        return super().decode(filepath)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - identical1.png, identical2.png (pixel-identical noise)
        - unrelated.png (different noise)
    """
    images = {}

    img1 = make_noise_image(seed=1)
    path1 = temp_dir / "identical1.png"
    img1.save(path1, 'PNG')
    images['identical1'] = str(path1)

    path2 = temp_dir / "identical2.png"
    img1.save(path2, 'PNG')
    images['identical2'] = str(path2)

    path3 = temp_dir / "unrelated.png"
    make_noise_image(seed=2).save(path3, 'PNG')
    images['unrelated'] = str(path3)

    return images


@pytest.fixture
def fake_files(temp_dir):
    """
    Create empty files whose content is never read by the fake collaborators.

    Returns:
        Function taking basenames and returning their paths as strings
    """
    def _create(*names):
        paths = []
        for name in names:
            path = temp_dir / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"")
            paths.append(str(path))
        return paths

    return _create


@pytest.fixture
def progress_log():
    """List plus observer callable that appends every progress value."""
    values = []
    return values, values.append
