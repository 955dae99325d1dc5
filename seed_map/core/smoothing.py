"""
Biome smoothing by per-mask Gaussian blur and re-vote.
"""

from dataclasses import dataclass

import numpy as np
import structlog

from .biomes import BiomeType
from .noise import apply_gaussian_blur

logger = structlog.get_logger()

# Order matters: on equal blurred values the earlier biome wins.
VOTE_PRIORITY = (BiomeType.PLAINS, BiomeType.DESERT, BiomeType.OCEAN)


@dataclass
class SmoothingOptions:
    kernel_size: int = 3
    sigma: float = 1.0


class SmoothingPass:
    """
    Clusters biome regions by blurring one binary mask per biome and giving
    each cell the biome with the strongest blurred presence.

    Villages are left untouched. The pipeline smooths before placing
    villages, so this only matters for direct callers.
    """

    def __init__(self, options: SmoothingOptions = None):
        self.options = options or SmoothingOptions()

    def apply(self, grid: np.ndarray) -> np.ndarray:
        """Return a smoothed copy of grid."""
        village = grid == BiomeType.VILLAGE

        blurred = np.stack(
            [
                apply_gaussian_blur(
                    (grid == biome).astype(np.float64),
                    self.options.kernel_size,
                    self.options.sigma,
                )
                for biome in VOTE_PRIORITY
            ]
        )
        # argmax returns the first maximum, which implements the priority order
        winners = np.asarray(VOTE_PRIORITY, dtype=grid.dtype)[np.argmax(blurred, axis=0)]

        smoothed = np.where(village, grid, winners).astype(grid.dtype)
        logger.info("Biomes smoothed", changed_cells=int(np.count_nonzero(smoothed != grid)))
        return smoothed
