"""
Ocean ratio correction.

Smoothing and thresholding can leave the map with less water than asked for.
This pass grows the sea outward from the existing coastline until the
requested share is reached, preferring land that already touches water and
then the inland cells closest to it.
"""

import math
from typing import List, Tuple

import numpy as np
import structlog
from scipy import ndimage

from .biomes import BiomeType
from .seeded_random import SeededRandom

logger = structlog.get_logger()

# 8-connected neighbourhood
COAST_STRUCTURE = np.ones((3, 3), dtype=bool)


class RatioCorrectionPass:
    """Converts land to ocean until ocean coverage meets the target percentage."""

    def __init__(self, rng: SeededRandom, target_percentage: float):
        self.rng = rng
        self.target_percentage = target_percentage
        self.shortfall = 0

    def ocean_deficit(self, grid: np.ndarray) -> int:
        """Cells that must turn to ocean to reach the target; 0 when already met."""
        total = grid.size
        if total == 0:
            return 0
        ocean = int(np.count_nonzero(grid == BiomeType.OCEAN))
        if ocean * 100 / total >= self.target_percentage:
            return 0
        return max(0, math.ceil(total * self.target_percentage / 100) - ocean)

    @staticmethod
    def split_candidates(grid: np.ndarray) -> Tuple[List[Tuple[int, int]], List[Tuple[int, int]]]:
        """
        Row-major (x, y) lists of convertible cells: those with an ocean
        8-neighbour ("edge") and the rest ("inland"). Ocean and village cells
        are never candidates.
        """
        ocean = grid == BiomeType.OCEAN
        convertible = ~ocean & (grid != BiomeType.VILLAGE)
        touches_ocean = ndimage.binary_dilation(ocean, structure=COAST_STRUCTURE)

        edge_ys, edge_xs = np.nonzero(convertible & touches_ocean)
        inland_ys, inland_xs = np.nonzero(convertible & ~touches_ocean)
        edge = list(zip(edge_xs.tolist(), edge_ys.tolist()))
        inland = list(zip(inland_xs.tolist(), inland_ys.tolist()))
        return edge, inland

    @staticmethod
    def distance_to_ocean(grid: np.ndarray) -> np.ndarray:
        """
        Manhattan ring distance from every cell to the nearest ocean cell.

        Equivalent to scanning rings of growing radius around each cell and
        stopping at the first ring with water. Cells with no water within
        max(height, width) - 1 rings get infinity.
        """
        ocean = grid == BiomeType.OCEAN
        distances = np.full(grid.shape, np.inf)
        if not ocean.any():
            return distances

        taxicab = ndimage.distance_transform_cdt(~ocean, metric="taxicab").astype(np.float64)
        max_radius = max(grid.shape)
        distances = np.where(taxicab < max_radius, taxicab, np.inf)
        return distances

    def apply(self, grid: np.ndarray) -> np.ndarray:
        """Return a copy of grid with enough ocean, or as much as the land allows."""
        result = grid.copy()
        deficit = self.ocean_deficit(result)
        self.shortfall = 0
        if deficit == 0:
            return result

        edge, inland = self.split_candidates(result)

        # Coastline first, in random order
        self.rng.shuffle(edge)
        converted = 0
        for x, y in edge[:deficit]:
            result[y, x] = BiomeType.OCEAN
            converted += 1

        inland_converted = 0
        if converted < deficit and inland:
            distances = self.distance_to_ocean(result)
            inland_distances = np.array([distances[y, x] for x, y in inland])
            order = np.argsort(inland_distances, kind="stable")
            for index in order[: deficit - converted]:
                x, y = inland[index]
                result[y, x] = BiomeType.OCEAN
                inland_converted += 1
            converted += inland_converted

        self.shortfall = deficit - converted
        logger.info(
            "Ocean ratio corrected",
            target_percentage=self.target_percentage,
            deficit=deficit,
            edge_converted=converted - inland_converted,
            inland_converted=inland_converted,
        )
        if self.shortfall:
            logger.warning("Ran out of land before reaching ocean target", shortfall=self.shortfall)
        return result
