"""
Pytest configuration and shared fixtures for test suite.
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image

from dedupifyr.models import LocalImage


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def sample_images(temp_dir):
    """
    Create a set of sample images for testing.

    Returns:
        dict with paths to:
        - identical1.png, identical2.png (byte-identical red squares)
        - similar1.png, similar2.png (same red pixels, different compression)
        - red_large.png (red square at twice the resolution)
        - unique.png (blue square)
        - corrupted.txt (not an image)
    """
    images = {}

    img1 = Image.new('RGB', (100, 100), color='red')
    path1 = temp_dir / "identical1.png"
    img1.save(path1, 'PNG')
    images['identical1'] = str(path1)

    path2 = temp_dir / "identical2.png"
    img1.save(path2, 'PNG')
    images['identical2'] = str(path2)

    img2 = Image.new('RGB', (100, 100), color='red')
    path3 = temp_dir / "similar1.png"
    img2.save(path3, 'PNG', optimize=False)
    images['similar1'] = str(path3)

    path4 = temp_dir / "similar2.png"
    img2.save(path4, 'PNG', optimize=True, compress_level=9)
    images['similar2'] = str(path4)

    img3 = Image.new('RGB', (100, 100), color='blue')
    path5 = temp_dir / "unique.png"
    img3.save(path5, 'PNG')
    images['unique'] = str(path5)

    path6 = temp_dir / "corrupted.txt"
    path6.write_text("not an image")
    images['corrupted'] = str(path6)

    img4 = Image.new('RGB', (200, 200), color='red')
    path7 = temp_dir / "red_large.png"
    img4.save(path7, 'PNG')
    images['red_large'] = str(path7)

    return images


@pytest.fixture
def broken_image(temp_dir):
    """A file with an image extension that is not an image."""
    path = temp_dir / "broken.png"
    path.write_bytes(b"this is not a png file at all")
    return str(path)


class ScoreTable:
    """
    DifferenceCalculator backed by a fixed table of scores.

    Pairs missing from the table score 0.0; an image compared with itself
    scores 1.0. Every call is recorded.
    """

    def __init__(self, scores=None):
        self.scores = {}
        for (a, b), score in (scores or {}).items():
            self.scores[frozenset((a, b))] = score
        self.calls = []

    def similarity(self, a, b):
        self.calls.append((a, b))
        if a == b:
            return 1.0
        return self.scores.get(frozenset((a, b)), 0.0)


def make_image(name: str, digest: str = None, file_size: int = 0) -> LocalImage:
    """Build a LocalImage whose full path is just its name."""
    return LocalImage(
        name=name,
        full_path=name,
        digest=digest if digest is not None else f"digest-{name}",
        file_size=file_size,
    )


@pytest.fixture
def score_table():
    """Factory fixture for ScoreTable calculators."""
    return ScoreTable


@pytest.fixture
def image_factory():
    """Factory fixture for LocalImage objects."""
    return make_image
