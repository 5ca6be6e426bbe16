"""
Pytest configuration and shared fixtures for Icon Shaper tests.

This module provides shared test fixtures and helpers
used across multiple test modules.
"""

import random

import pytest

from IS_Libs.EraserLib.eraser_models import EraserLayer, PixelBuffer


def make_buffer(width, height, pixels):
    """Build a PixelBuffer from a flat list of RGBA tuples."""
    return PixelBuffer.from_pixels(width, height, pixels)


def make_alpha_row(alphas, rgb=(10, 20, 30)):
    """Build a width x 1 buffer with the given alpha values."""
    return make_buffer(len(alphas), 1, [(*rgb, a) for a in alphas])


def random_buffer(width, height, seed=0):
    """Buffer of random RGBA pixels, about a tenth of them fully transparent."""
    rng = random.Random(seed)
    pixels = []
    for _ in range(width * height):
        alpha = 0 if rng.random() < 0.1 else rng.randint(1, 255)
        pixels.append((rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255), alpha))
    return make_buffer(width, height, pixels)


def random_layers(count, seed=0):
    """Random effective layers with a mix of tolerance, feather and transparency."""
    rng = random.Random(seed)
    return [
        EraserLayer(
            id=f"layer-{index}",
            color=(rng.randint(0, 255), rng.randint(0, 255), rng.randint(0, 255)),
            tolerance=rng.uniform(0, 40),
            feather=rng.choice([0.0, rng.uniform(0, 20)]),
            transparency=rng.uniform(0, 100),
        )
        for index in range(count)
    ]


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 128, 128, 255),  # Gray
    ]


@pytest.fixture
def red_green_buffer():
    """A 2x1 buffer: opaque red, then opaque green."""
    return make_buffer(2, 1, [(255, 0, 0, 255), (0, 255, 0, 255)])


@pytest.fixture
def red_key_layer():
    """Layer removing exact red completely, with no feather."""
    return EraserLayer(id="red", color=(255, 0, 0), tolerance=0, feather=0, transparency=100)
