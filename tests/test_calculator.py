"""
Unit tests for HashCalculator.
"""

import io
import re
import tracemalloc

import numpy as np
import pytest
from PIL import Image

from phashkit.calculator import HashCalculator
from phashkit.compare import hamming_distance
from phashkit.decoder import PillowDecoder
from phashkit.errors import DecodeError
from phashkit.models import HashSet
from conftest import encode_image, gray_image

HASH_RE = re.compile(r'^[0-9a-f]{16}$')
ZERO = "0000000000000000"


@pytest.fixture
def calculator(isolated_config):
    return HashCalculator()


def smooth_field(seed: int = 7, size: int = 64) -> np.ndarray:
    """Random low-frequency grayscale field as uint8."""
    rng = np.random.default_rng(seed)
    small = rng.integers(0, 256, (6, 6)).astype(np.uint8)
    return np.asarray(Image.fromarray(small, 'L').resize((size, size), Image.BICUBIC))


class BrokenDecoder:
    name = "broken"

    def is_available(self):
        raise RuntimeError("library failed to load")

    def decode(self, data):
        raise AssertionError("decode must not be called")


class ExplodingDecoder:
    name = "exploding"

    def is_available(self):
        return True

    def decode(self, data):
        raise RuntimeError("boom")


class TestMetadata:
    """Test tool identity."""

    def test_name_and_version(self, calculator):
        assert calculator.name == "HashCalculator"
        assert calculator.version == "1.0.0"


class TestIsAvailable:
    """Test availability probing."""

    def test_pillow_available(self, calculator):
        assert calculator.is_available() is True

    def test_failure_maps_to_false(self, isolated_config):
        calc = HashCalculator(decoder=BrokenDecoder())
        assert calc.is_available() is False


class TestProcess:
    """Test HashCalculator.process."""

    def test_uniform_gray_128(self, calculator, gray128_png):
        result = calculator.process(gray128_png)

        assert result.success is True
        assert result.error is None
        assert result.data == HashSet(a_hash=ZERO, p_hash=ZERO, d_hash=ZERO, w_hash=ZERO)

    def test_hex_format(self, calculator, gradient_image):
        result = calculator.process(encode_image(gradient_image))

        assert result.success
        for value in result.data.to_dict().values():
            assert HASH_RE.match(value)

    def test_timing_metadata(self, calculator, gray128_png):
        result = calculator.process(gray128_png)
        assert result.metadata['processingTimeMs'] >= 0
        assert result.processing_time_ms == result.metadata['processingTimeMs']

    def test_deterministic(self, calculator, gradient_image):
        data = encode_image(gradient_image)
        first = calculator.process(data)
        second = calculator.process(data)
        assert first.data == second.data

    def test_different_gray_levels_differ(self, calculator):
        light = calculator.process(encode_image(gray_image(200)))
        dark = calculator.process(encode_image(gray_image(50)))

        assert light.success and dark.success
        assert light.data.a_hash != dark.data.a_hash

    def test_lossless_containers_match(self, calculator, sample_images):
        results = [
            calculator.process(sample_images[key])
            for key in ('gradient_png', 'gradient_bmp', 'gradient_tiff')
        ]
        assert all(r.success for r in results)
        assert results[0].data == results[1].data == results[2].data

    def test_alpha_is_ignored(self, calculator, gradient_image):
        opaque = gradient_image.convert('RGBA')
        translucent = opaque.copy()
        translucent.putalpha(40)
        a = calculator.process(encode_image(opaque))
        b = calculator.process(encode_image(translucent))
        assert a.data == b.data

    def test_invalid_buffer(self, calculator):
        result = calculator.process(b"not an image")

        assert result.success is False
        assert result.data is None
        assert result.error.code == DecodeError.code
        assert result.error.message
        assert 'processingTimeMs' in result.metadata

    def test_empty_buffer(self, calculator):
        result = calculator.process(b"")
        assert not result.success
        assert result.error.code == "DECODE_ERROR"

    def test_bytearray_and_memoryview(self, calculator, gray128_png):
        expected = calculator.process(gray128_png).data
        assert calculator.process(bytearray(gray128_png)).data == expected
        assert calculator.process(memoryview(gray128_png)).data == expected

    def test_path_input(self, calculator, sample_images):
        result = calculator.process(sample_images['light'])
        assert result.success
        assert result.data.a_hash == "ffffffffffffffff"

    def test_missing_path(self, calculator, temp_dir):
        result = calculator.process(temp_dir / "missing.png")

        assert not result.success
        assert result.error.code == "IO_ERROR"
        assert result.metadata['processingTimeMs'] >= 0

    def test_corrupted_file(self, calculator, sample_images):
        result = calculator.process(sample_images['corrupted'])
        assert not result.success
        assert result.error.code == "DECODE_ERROR"

    def test_unsupported_input_type(self, calculator):
        result = calculator.process(12345)
        assert not result.success
        assert result.error.code == "DECODE_ERROR"

    def test_unavailable_decoder(self, isolated_config, gray128_png):
        result = HashCalculator(decoder=BrokenDecoder()).process(gray128_png)
        assert not result.success
        assert result.error.code == "UNAVAILABLE"

    def test_unexpected_error_is_captured(self, isolated_config, gray128_png):
        result = HashCalculator(decoder=ExplodingDecoder()).process(gray128_png)
        assert not result.success
        assert result.error.code == "INTERNAL_ERROR"
        assert result.error.details['exception'] == 'RuntimeError'

    def test_pixel_limit(self, isolated_config):
        calc = HashCalculator(decoder=PillowDecoder(max_image_pixels=10))
        result = calc.process(encode_image(gray_image(10, size=(8, 8))))
        assert not result.success
        assert result.error.code == "DECODE_ERROR"

    def test_parallel_algorithms_same_output(self, isolated_config, gradient_image):
        data = encode_image(gradient_image)
        sequential = HashCalculator(parallel_algorithms=False).process(data)
        parallel = HashCalculator(parallel_algorithms=True).process(data)
        assert sequential.data == parallel.data


class TestRobustness:
    """Low-frequency hashes should survive fine-grained noise."""

    def test_noise_keeps_phash_and_whash_close(self, calculator):
        base = smooth_field()
        rng = np.random.default_rng(99)
        noise = rng.integers(-3, 4, base.shape)
        noisy = np.clip(base.astype(np.int16) + noise, 0, 255).astype(np.uint8)

        a = calculator.process(encode_image(Image.fromarray(base, 'L')))
        b = calculator.process(encode_image(Image.fromarray(noisy, 'L')))

        assert a.success and b.success
        assert hamming_distance(a.data.p_hash, b.data.p_hash) <= 8
        assert hamming_distance(a.data.w_hash, b.data.w_hash) <= 8

    def test_distinct_content_differs(self, calculator):
        a = calculator.process(encode_image(Image.fromarray(smooth_field(1), 'L')))
        b = calculator.process(encode_image(Image.fromarray(smooth_field(2), 'L')))
        assert hamming_distance(a.data.p_hash, b.data.p_hash) > 8


class TestProcessBatch:
    """Test HashCalculator.process_batch."""

    def test_results_in_input_order(self, calculator, sample_images):
        sources = [sample_images['light'], b"junk", sample_images['dark']]
        results = calculator.process_batch(sources, max_workers=2)

        assert len(results) == 3
        assert results[0].data.a_hash == "ffffffffffffffff"
        assert not results[1].success
        assert results[2].data.a_hash == ZERO

    def test_progress_callback(self, calculator, gray128_png):
        calls = []
        calculator.process_batch(
            [gray128_png] * 5,
            progress_callback=lambda current, total: calls.append((current, total)),
        )
        assert len(calls) == 5
        assert calls[-1] == (5, 5)

    def test_empty(self, calculator):
        assert calculator.process_batch([]) == []


class TestLargeImage:
    """Camera-sized images are hashed without full-resolution int64 planes."""

    @pytest.fixture(scope='class')
    def camera_bmp(self):
        img = Image.effect_noise((4000, 3000), 64).convert('RGB')
        return encode_image(img, 'BMP')

    def test_bounded_memory(self, calculator, camera_bmp):
        tracemalloc.start()
        try:
            result = calculator.process(camera_bmp)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()

        assert result.success
        assert all(HASH_RE.match(h) for h in result.data.to_dict().values())
        # One full-size int64 plane alone would be 96 MB
        assert peak < 64 * 1024 * 1024

    def test_reduced_hash_matches_prereduced_input(self, calculator, camera_bmp):
        # factor 3000 // 64 = 46
        reduced = Image.open(io.BytesIO(camera_bmp)).convert('RGBA').reduce(46)
        direct = calculator.process(camera_bmp)
        prereduced = calculator.process(encode_image(reduced))

        assert direct.data == prereduced.data
