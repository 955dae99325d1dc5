"""
Core map generation functionality.
"""

from .biomes import BIOME_COLORS, BIOME_NAMES, BiomeType
from .map_generator import MapConfigurationError, MapGenerator, default_biome_ratios
from .seeded_random import SeededRandom
from .statistics import BiomeStatistics

__all__ = ['BIOME_COLORS', 'BIOME_NAMES', 'BiomeType',
           'MapConfigurationError', 'MapGenerator', 'default_biome_ratios',
           'SeededRandom', 'BiomeStatistics']
