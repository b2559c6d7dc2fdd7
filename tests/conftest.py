"""
Pytest configuration and shared fixtures for test suite.
"""

import io

import numpy as np
import pytest
import tempfile
import shutil
from pathlib import Path
from PIL import Image


def encode_image(img: Image.Image, fmt: str = 'PNG', **kwargs) -> bytes:
    """Encode a PIL image to bytes in the given container format."""
    out = io.BytesIO()
    img.save(out, fmt, **kwargs)
    return out.getvalue()


def gray_image(level: int, size=(8, 8)) -> Image.Image:
    """Uniform opaque RGBA image at the given gray level."""
    return Image.new('RGBA', size, color=(level, level, level, 255))


def gradient_array(width: int = 64, height: int = 64) -> np.ndarray:
    """Smooth diagonal gradient with some coarse structure, as uint8 RGB."""
    y, x = np.mgrid[0:height, 0:width]
    base = (x * 255.0 / (width - 1)) * 0.6 + (y * 255.0 / (height - 1)) * 0.4
    blob = 60.0 * np.exp(-(((x - width * 0.3) ** 2 + (y - height * 0.6) ** 2) / (2 * (width / 6) ** 2)))
    gray = np.clip(base * 0.7 + blob, 0, 255).astype(np.uint8)
    return np.stack([gray, gray, gray], axis=-1)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def gray128_png():
    """8x8 uniform gray-128 PNG."""
    return encode_image(gray_image(128))


@pytest.fixture
def gradient_image():
    """64x64 grayscale gradient as a PIL RGB image."""
    return Image.fromarray(gradient_array(), 'RGB')


@pytest.fixture
def sample_images(temp_dir, gradient_image):
    """
    Create a set of sample image files for testing.

    Returns:
        dict with paths to:
        - gradient.png, gradient.bmp, gradient.tiff (same pixels, lossless containers)
        - light.png, dark.png (uniform gray 200 / 50)
        - corrupted.png (not an image)
    """
    images = {}

    for fmt, ext in (('PNG', 'png'), ('BMP', 'bmp'), ('TIFF', 'tiff')):
        path = temp_dir / f"gradient.{ext}"
        gradient_image.save(path, fmt)
        images[f'gradient_{ext}'] = str(path)

    light = temp_dir / "light.png"
    gray_image(200).save(light, 'PNG')
    images['light'] = str(light)

    dark = temp_dir / "dark.png"
    gray_image(50).save(dark, 'PNG')
    images['dark'] = str(dark)

    corrupted = temp_dir / "corrupted.png"
    corrupted.write_text("not an image")
    images['corrupted'] = str(corrupted)

    return images


@pytest.fixture
def isolated_config(temp_dir, monkeypatch):
    """Point the user configuration at an empty temporary directory."""
    from phashkit.user_config import get_user_config

    config_dir = temp_dir / "config"
    monkeypatch.setenv('PHASHKIT_CONFIG_DIR', str(config_dir))
    for var in ('PHASHKIT_WORKERS', 'PHASHKIT_MAX_PIXELS', 'PHASHKIT_PARALLEL_ALGORITHMS'):
        monkeypatch.delenv(var, raising=False)

    config = get_user_config()
    config.reload()
    yield config
    config.reload()
