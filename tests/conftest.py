"""
Shared fixtures.
"""

import asyncio
from pathlib import Path

import pytest
from PIL import Image

from responsive_picture.utils.generation_logger import GenerationLogger


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch):
    """Start every test with a fresh, silent logger."""
    monkeypatch.setenv("RESPONSIVE_PICTURE_LOG_LEVEL", "NONE")
    monkeypatch.delenv("RESPONSIVE_PICTURE_LOG_DIR", raising=False)
    GenerationLogger.reset()
    yield
    GenerationLogger.reset()


@pytest.fixture
def sample_image(tmp_path):
    """A 400x200 RGB PNG."""
    image = Image.new("RGB", (400, 200), color=(200, 40, 40))
    file_path = tmp_path / "hero.png"
    image.save(file_path)
    return file_path


@pytest.fixture
def transparent_image(tmp_path):
    """A 300x300 RGBA PNG with partial transparency."""
    image = Image.new("RGBA", (300, 300), color=(0, 128, 255, 128))
    file_path = tmp_path / "logo.png"
    image.save(file_path)
    return file_path


class FakeEngine:
    """
    Stand-in image engine that records calls instead of encoding.

    Formats listed in ``failing_formats`` raise; ``delays`` maps a size to a
    sleep so completion order can differ from submission order.
    """

    def __init__(self, failing_formats=(), delays=None, placeholder="QUJDRA=="):
        self.failing_formats = set(failing_formats)
        self.delays = delays or {}
        self.placeholder = placeholder
        self.calls = []
        self.completed = []

    async def aresize_to_file(self, image_path, width, fmt, output_path):
        self.calls.append((fmt, width))
        await asyncio.sleep(self.delays.get(width, 0))
        if fmt in self.failing_formats:
            raise ValueError(f"Unsupported format: {fmt}")
        Path(output_path).write_bytes(b"variant")
        self.completed.append((fmt, width))
        return Path(output_path)

    async def aplaceholder_base64(self, image_path, width=20):
        if self.placeholder is None:
            raise OSError(f"cannot identify image file {image_path}")
        return self.placeholder


@pytest.fixture
def fake_engine():
    return FakeEngine()
