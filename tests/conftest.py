"""Pytest configuration and shared fixtures for Card Grader tests."""

import base64

import cv2
import numpy as np
import pytest

from card_grader.core.constants import IMAGE_SHAPE
from card_grader.core.types import NormalizedImage


FRONT_SHAPE = (300, 200)  # (h, w)
BACK_SHAPE = (310, 210)

FRONT_TEXT = "\n".join([
    "Pikachu",
    "Lightning",
    "Basic Pokemon",
    "Thunder Jolt",
    "Set: Base Set",
    "12",
    "Common",
])

BACK_TEXT = "\n".join([
    "Pokemon Trading Card Game",
    "45/100",
    "Series: Jungle",
])


class FakeOCREngine:
    """OCR stand-in that answers by image size so call order does not matter."""

    def __init__(self, texts_by_shape):
        self.texts_by_shape = texts_by_shape
        self.calls = []

    def recognize(self, image):
        self.calls.append(image.shape[:2])
        return self.texts_by_shape.get(image.shape[:2], "")


class FailingOCREngine:
    """OCR stand-in that always blows up."""

    def recognize(self, image):
        raise RuntimeError("engine crashed")


def encode_png(rgb: np.ndarray) -> bytes:
    """Encode an RGB uint8 array as PNG bytes."""
    ok, buffer = cv2.imencode(".png", cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR))
    assert ok
    return buffer.tobytes()


def to_data_uri(data: bytes, mime: str = "image/png") -> str:
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def uniform_grid():
    """Constant mid-gray normalized grid."""
    return NormalizedImage(np.full(IMAGE_SHAPE, 0.5))


@pytest.fixture
def black_grid():
    return NormalizedImage(np.zeros(IMAGE_SHAPE))


@pytest.fixture
def white_grid():
    return NormalizedImage(np.ones(IMAGE_SHAPE))


@pytest.fixture
def noise_grid(rng):
    return NormalizedImage(rng.random(IMAGE_SHAPE))


@pytest.fixture
def front_rgb(rng):
    """Noisy front photo, FRONT_SHAPE sized."""
    return rng.integers(0, 256, (*FRONT_SHAPE, 3), dtype=np.uint8)


@pytest.fixture
def back_rgb(rng):
    return rng.integers(0, 256, (*BACK_SHAPE, 3), dtype=np.uint8)


@pytest.fixture
def front_png(front_rgb):
    return encode_png(front_rgb)


@pytest.fixture
def back_png(back_rgb):
    return encode_png(back_rgb)


@pytest.fixture
def fake_ocr():
    return FakeOCREngine({FRONT_SHAPE: FRONT_TEXT, BACK_SHAPE: BACK_TEXT})


# Configure pytest options
def pytest_configure(config):
    """Configure pytest with custom options."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        if "integration" in item.name.lower() or "Integration" in str(item.cls):
            item.add_marker(pytest.mark.integration)

        if not item.get_closest_marker("integration"):
            item.add_marker(pytest.mark.unit)
