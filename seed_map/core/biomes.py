"""
Biome categories produced by the map generator.

The set is fixed: three terrain biomes assigned from noise fields plus
villages placed on top of land in the final pass.
"""

from enum import IntEnum
from typing import Dict, Mapping

import numpy as np


class BiomeType(IntEnum):
    """Biome codes stored in the generated grid."""

    OCEAN = 0
    DESERT = 1
    PLAINS = 2
    VILLAGE = 3


# Biome names for display
BIOME_NAMES = {
    BiomeType.OCEAN: "Ocean",
    BiomeType.DESERT: "Desert",
    BiomeType.PLAINS: "Plains",
    BiomeType.VILLAGE: "Village",
}

BIOME_COLORS = {
    BiomeType.OCEAN: "#0066BB",
    BiomeType.DESERT: "#DDCC88",
    BiomeType.PLAINS: "#669944",
    BiomeType.VILLAGE: "#FF6347",
}

# Target percentages, plains take whatever is left
BiomeRatios = Mapping[BiomeType, float]

GRID_DTYPE = np.uint8


def ratio_fraction(ratios: BiomeRatios, biome: BiomeType) -> float:
    """Requested share of the grid for a biome as a fraction; missing keys count as 0."""
    return float(ratios.get(biome, 0.0)) / 100


def empty_grid(size: int, fill: BiomeType = BiomeType.PLAINS) -> np.ndarray:
    """Create a size x size grid filled with a single biome."""
    return np.full((size, size), int(fill), dtype=GRID_DTYPE)


def biome_counts(grid: np.ndarray) -> Dict[BiomeType, int]:
    """Number of cells holding each biome."""
    counts = np.bincount(grid.ravel(), minlength=len(BiomeType))
    return {biome: int(counts[biome]) for biome in BiomeType}
