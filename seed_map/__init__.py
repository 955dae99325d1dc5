"""
Seeded biome map generation.

Produces deterministic N x N grids of Ocean, Desert, Plains and Village
cells from a seed, a size and target biome ratios.
"""

from .core import BiomeStatistics, BiomeType, MapConfigurationError, MapGenerator
from .utils.random import generate_random_seed

__all__ = [
    "BiomeStatistics",
    "BiomeType",
    "MapConfigurationError",
    "MapGenerator",
    "generate_random_seed",
]

__version__ = "0.1.0"
