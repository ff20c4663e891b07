"""Pytest configuration: fast-by-default TDD setup.

Slow tests (real EasyOCR model loading) are skipped unless --slow is passed.
Run the full suite:   pytest --slow
Run fast tests only:  pytest          (default)
"""
import io

import numpy as np
import pytest
from PIL import Image

from preprocessing import ImageBlob


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Run slow tests that load OCR models (EasyOCR)",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        return  # run everything
    skip_slow = pytest.mark.skip(reason="slow test skipped, pass --slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


def encode(pixels: np.ndarray, fmt: str = "PNG") -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(pixels).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def table_pixels():
    """100x100 white RGBA table with one full-width row line, one full-height
    column line, and a small 5x5 black glyph away from both."""
    pixels = np.full((100, 100, 4), 255, dtype=np.uint8)
    pixels[50, :, :3] = 0
    pixels[:, 30, :3] = 0
    pixels[70:75, 70:75, :3] = 0
    return pixels


@pytest.fixture
def make_png():
    """Factory encoding RGBA (or RGB) pixels into a PNG ImageBlob."""
    def _make(pixels: np.ndarray, name: str = "paste.png") -> ImageBlob:
        return ImageBlob(data=encode(pixels), mime_type="image/png", name=name)
    return _make


@pytest.fixture
def table_png(make_png, table_pixels):
    return make_png(table_pixels, name="table.png")


class FakeReader:
    """Stands in for easyocr.Reader, recording every readtext() call."""

    def __init__(self, results=None, error: Exception | None = None):
        self.results = list(results or [])
        self.error = error
        self.calls: list[dict] = []

    def readtext(self, image, **kwargs):
        self.calls.append({"shape": image.shape, **kwargs})
        if self.error is not None:
            raise self.error
        return list(self.results)


@pytest.fixture
def reader_factory():
    """The FakeReader class, for tests that need specific results or failures."""
    return FakeReader


@pytest.fixture
def fake_reader():
    return FakeReader(results=["売上 Sales", "2024"])


@pytest.fixture
def encode_image():
    """encode(pixels, fmt) -> bytes, for formats other than PNG."""
    return encode
