"""
Ocean connectivity repair.

Scattered ocean fragments are visually joined by painting rough water
"bridges" along straight lines between randomly chosen ocean cells. This is
a plausibility heuristic; it does not guarantee a single connected sea.
"""

import math
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np
import structlog

from .biomes import BiomeType
from .seeded_random import SeededRandom

logger = structlog.get_logger()


@dataclass
class ConnectivityOptions:
    min_ocean_cells: int = 5  # Below this the pass is skipped
    max_waypoints: int = 10
    min_spread_radius: int = 1
    spread_radius_range: int = 2  # Radius is min + floor(next() * range)
    conversion_probability: float = 0.8


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def rasterize_line(start: Tuple[int, int], end: Tuple[int, int]) -> List[Tuple[int, int]]:
    """
    Points of a straight line from start to end, both included.

    Uses max(|dx|, |dy|) steps with rounded linear interpolation, so points
    may repeat on shallow lines but never skip a column or row.
    """
    x0, y0 = start
    dx = end[0] - x0
    dy = end[1] - y0
    steps = max(abs(dx), abs(dy))

    points = []
    for step in range(steps + 1):
        t = 0 if steps == 0 else step / steps
        points.append((_round_half_up(x0 + dx * t), _round_half_up(y0 + dy * t)))
    return points


class ConnectivityPass:
    """Paints land bridges between sampled ocean cells."""

    def __init__(self, rng: SeededRandom, options: ConnectivityOptions = None):
        self.rng = rng
        self.options = options or ConnectivityOptions()

    def _pick_waypoints(self, ocean_cells: List[Tuple[int, int]]) -> List[Tuple[int, int]]:
        """Sample distinct ocean cells without replacement."""
        pool = list(ocean_cells)
        count = min(len(pool), self.options.max_waypoints)
        waypoints = []
        for _ in range(count):
            index = self.rng.index(len(pool))
            waypoints.append(pool[index])
            # swap-remove
            pool[index] = pool[-1]
            pool.pop()
        return waypoints

    def _paint(self, grid: np.ndarray, x: int, y: int) -> int:
        height, width = grid.shape
        opts = self.options
        radius = opts.min_spread_radius + math.floor(self.rng.next() * opts.spread_radius_range)

        converted = 0
        for sy in range(-radius, radius + 1):
            for sx in range(-radius, radius + 1):
                nx = x + sx
                ny = y + sy
                if 0 <= nx < width and 0 <= ny < height:
                    # The draw is consumed even when the cell cannot change
                    if self.rng.next() < opts.conversion_probability and grid[ny, nx] != BiomeType.VILLAGE:
                        if grid[ny, nx] != BiomeType.OCEAN:
                            converted += 1
                        grid[ny, nx] = BiomeType.OCEAN
        return converted

    def apply(self, grid: np.ndarray) -> np.ndarray:
        """Return a copy of grid with ocean bridges painted in."""
        result = grid.copy()
        height, width = result.shape

        ys, xs = np.nonzero(result == BiomeType.OCEAN)
        ocean_cells = list(zip(xs.tolist(), ys.tolist()))
        if len(ocean_cells) < self.options.min_ocean_cells:
            logger.info("Too few ocean cells to connect", ocean_cells=len(ocean_cells))
            return result

        waypoints = self._pick_waypoints(ocean_cells)

        converted = 0
        for start, end in zip(waypoints, waypoints[1:]):
            for x, y in rasterize_line(start, end):
                if 0 <= x < width and 0 <= y < height:
                    converted += self._paint(result, x, y)

        logger.info("Ocean areas connected", waypoints=len(waypoints), converted=converted)
        return result
