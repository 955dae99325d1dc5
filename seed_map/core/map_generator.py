"""
Map generation pipeline.

Seed, size and biome ratios go in; an N x N grid of BiomeType codes comes
out. The passes run in a fixed order and share one SeededRandom:

1. ElevationAridityPass - noise fields biased toward ocean centers
2. ThresholdClassifier - ocean by elevation rank, desert by aridity rank
3. SmoothingPass - mask blur and re-vote
4. ConnectivityPass - bridges between ocean fragments
5. RatioCorrectionPass - grow the sea to the requested share
6. SettlementPlacer - compact village clusters

Every pass returns a new grid. Because each stage consumes draws from the
same stream, reordering stages or parallelizing a stage changes the output
for a given seed.
"""

import numbers
from typing import Mapping, Optional

import numpy as np
import structlog

from ..config import Settings, settings as default_settings
from .biomes import BiomeRatios, BiomeType, ratio_fraction
from .classifier import ThresholdClassifier
from .connectivity import ConnectivityPass
from .elevation import ElevationAridityPass, ElevationOptions
from .ratio_correction import RatioCorrectionPass
from .seeded_random import SeededRandom
from .settlements import SettlementOptions, SettlementPlacer
from .smoothing import SmoothingPass
from .statistics import BiomeStatistics

logger = structlog.get_logger()


class MapConfigurationError(ValueError):
    """Raised when a generator is constructed with unusable parameters."""


def default_biome_ratios(config: Optional[Settings] = None) -> dict:
    """Biome ratio map built from settings."""
    config = config or default_settings
    return {
        BiomeType.OCEAN: config.default_ocean_ratio,
        BiomeType.DESERT: config.default_desert_ratio,
        BiomeType.VILLAGE: config.default_village_ratio,
    }


class MapGenerator:
    """
    Deterministic biome map generator.

    Construct once per (seed, size, ratios); generate() can be called
    repeatedly and returns the same grid every time.
    """

    def __init__(
        self,
        seed: int,
        size: int,
        biome_ratios: Optional[BiomeRatios] = None,
        elevation_options: Optional[ElevationOptions] = None,
        settlement_options: Optional[SettlementOptions] = None,
        config: Optional[Settings] = None,
    ):
        """
        Initialize map generator.

        Args:
            seed: Any integer; normalized by SeededRandom
            size: Side length of the square grid
            biome_ratios: Target percentages keyed by BiomeType; defaults from settings
            elevation_options: Noise tuning
            settlement_options: Village cluster tuning
            config: Settings instance, defaults to the module singleton

        Raises:
            MapConfigurationError: If size is not a positive integer within the configured maximum
        """
        self.config = config or default_settings

        if isinstance(size, bool) or not isinstance(size, numbers.Integral):
            raise MapConfigurationError(f"Map size must be an integer, got {size!r}")
        if size <= 0:
            raise MapConfigurationError(f"Map size must be positive, got {size}")
        if size > self.config.max_map_size:
            raise MapConfigurationError(
                f"Map size {size} exceeds maximum of {self.config.max_map_size}"
            )

        self.seed = int(seed)
        self.size = int(size)
        self.biome_ratios: Mapping = dict(
            biome_ratios if biome_ratios is not None else default_biome_ratios(self.config)
        )
        self.elevation_options = elevation_options or ElevationOptions()
        self.settlement_options = settlement_options or SettlementOptions()

        # Results of the last generate() call, for inspection
        self.ocean_centers = []
        self.cluster_seeds = []
        self.ocean_shortfall = 0

    def generate(self) -> np.ndarray:
        """
        Run the full pipeline.

        Returns:
            (size, size) uint8 array of BiomeType codes
        """
        rng = SeededRandom(self.seed)
        ocean_ratio = ratio_fraction(self.biome_ratios, BiomeType.OCEAN)
        desert_ratio = ratio_fraction(self.biome_ratios, BiomeType.DESERT)
        village_ratio = ratio_fraction(self.biome_ratios, BiomeType.VILLAGE)

        logger.info(
            "Starting map generation",
            seed=self.seed,
            size=self.size,
            ocean_ratio=ocean_ratio,
            desert_ratio=desert_ratio,
            village_ratio=village_ratio,
        )

        fields = ElevationAridityPass(self.size, rng, self.elevation_options)
        elevation, aridity = fields.run()
        self.ocean_centers = list(fields.ocean_centers)

        grid = ThresholdClassifier(ocean_ratio, desert_ratio).classify(elevation, aridity)
        grid = SmoothingPass().apply(grid)
        grid = ConnectivityPass(rng).apply(grid)

        correction = RatioCorrectionPass(rng, ocean_ratio * 100)
        grid = correction.apply(grid)
        self.ocean_shortfall = correction.shortfall

        placer = SettlementPlacer(rng, village_ratio, self.settlement_options)
        grid = placer.apply(grid)
        self.cluster_seeds = list(placer.cluster_seeds)

        logger.info(
            "Map generation complete",
            seed=self.seed,
            draws=rng.call_count,
            percentages={BiomeType(b).name: p for b, p in BiomeStatistics.compute(grid).items()},
        )
        return grid
