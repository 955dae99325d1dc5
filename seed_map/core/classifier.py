"""
Threshold classification of noise fields into an initial biome grid.
"""

import math

import numpy as np
import structlog

from .biomes import GRID_DTYPE, BiomeType

logger = structlog.get_logger()


class ThresholdClassifier:
    """
    Converts elevation and aridity fields into Ocean / Desert / Plains.

    The lowest cells become ocean, the most arid of the remaining land
    becomes desert, and everything else is plains. Ties at the threshold
    can overshoot the requested ocean share slightly.
    """

    def __init__(self, ocean_ratio: float, desert_ratio: float):
        """
        Args:
            ocean_ratio: Requested ocean share as a fraction (0.3 for 30%)
            desert_ratio: Requested desert share as a fraction
        """
        self.ocean_ratio = ocean_ratio
        self.desert_ratio = desert_ratio
        self.ocean_threshold = None

    def classify(self, elevation: np.ndarray, aridity: np.ndarray) -> np.ndarray:
        """Build a new grid from (size, size) elevation and aridity arrays."""
        if elevation.shape != aridity.shape:
            raise ValueError("Elevation and aridity fields must have the same shape")

        height, width = elevation.shape
        flat_elevation = elevation.ravel()
        flat_aridity = aridity.ravel()
        count = flat_elevation.size

        # Stable sorts keep row-major order among equal values
        by_elevation = np.argsort(flat_elevation, kind="stable")
        rank = max(0, min(math.floor(count * self.ocean_ratio), count - 1))
        self.ocean_threshold = float(flat_elevation[by_elevation[rank]])

        flat_grid = np.full(count, int(BiomeType.PLAINS), dtype=GRID_DTYPE)
        ocean = flat_elevation <= self.ocean_threshold
        flat_grid[ocean] = BiomeType.OCEAN

        # Land cells in elevation order, then most arid first
        land = by_elevation[~ocean[by_elevation]]
        land = land[np.argsort(-flat_aridity[land], kind="stable")]
        desert_count = max(0, min(math.floor(height * width * self.desert_ratio), land.size))
        flat_grid[land[:desert_count]] = BiomeType.DESERT

        logger.info(
            "Initial biomes classified",
            ocean_threshold=round(self.ocean_threshold, 4),
            ocean_cells=int(ocean.sum()),
            desert_cells=int(desert_count),
        )
        return flat_grid.reshape(height, width)
