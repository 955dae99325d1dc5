"""
Noise generation utilities.

The noise here is a cheap sin-hash, not gradient noise: every sample jitters
its coordinates with two draws from the shared generator, so a value is only
reproducible as part of the exact call sequence, never from coordinates alone.

Blur helpers work on dense float fields and are used by the smoothing pass.
"""

import math

import numpy as np
from scipy import ndimage

from .seeded_random import SeededRandom

JITTER = 0.2
HASH_X = 12.9898
HASH_Y = 78.233
HASH_SCALE = 43758.5453
OCTAVE_OFFSET_RANGE = 1000.0


def generate_simplex_noise(x: float, y: float, rng: SeededRandom, scale: float = 1.0) -> float:
    """
    Single-octave hash noise in [0, 1).

    Consumes exactly two draws from rng.
    """
    x_prime = x + rng.next() * JITTER
    y_prime = y + rng.next() * JITTER
    value = math.sin(x_prime * HASH_X * scale + y_prime * HASH_Y * scale) * HASH_SCALE
    return value - math.floor(value)


def generate_octave_noise(
    x: float,
    y: float,
    rng: SeededRandom,
    octaves: int = 1,
    persistence: float = 0.5,
    scale: float = 1.0,
) -> float:
    """
    Sum of progressively finer noise layers normalized by total amplitude.

    Each layer draws a fresh offset pair and then samples the hash noise,
    so one call consumes 4 * octaves draws.
    """
    total = 0.0
    frequency = 1.0
    amplitude = 1.0
    max_value = 0.0

    for _ in range(octaves):
        offset_x = rng.next() * OCTAVE_OFFSET_RANGE
        offset_y = rng.next() * OCTAVE_OFFSET_RANGE
        total += (
            generate_simplex_noise(
                ((x + offset_x) * frequency) / scale,
                ((y + offset_y) * frequency) / scale,
                rng,
            )
            * amplitude
        )
        max_value += amplitude
        amplitude *= persistence
        frequency *= 2

    if max_value == 0:
        return 0.0
    return total / max_value


def gaussian_kernel(size: int = 3, sigma: float = 1.0) -> np.ndarray:
    """Square Gaussian kernel normalized to sum 1."""
    center = size // 2
    offsets = np.arange(size) - center
    dy, dx = np.meshgrid(offsets, offsets, indexing="ij")
    kernel = np.exp(-(dx * dx + dy * dy) / (2 * sigma * sigma))
    return kernel / kernel.sum()


def apply_gaussian_blur(field: np.ndarray, kernel_size: int = 3, sigma: float = 1.0) -> np.ndarray:
    """
    Blur a 2D field with a Gaussian kernel.

    Cells near the border only see in-bounds neighbours, and their result is
    renormalized by the sum of the weights that actually applied.
    """
    field = np.asarray(field, dtype=np.float64)
    if field.size == 0:
        return field.copy()

    kernel = gaussian_kernel(kernel_size, sigma)
    weighted = ndimage.correlate(field, kernel, mode="constant", cval=0.0)
    weight_sum = ndimage.correlate(np.ones_like(field), kernel, mode="constant", cval=0.0)
    return weighted / weight_sum
