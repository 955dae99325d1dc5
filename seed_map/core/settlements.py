"""
Village placement.

Villages are grown as a few compact clusters rather than scattered dots:

1. pick a random land cell as a cluster seed, rejecting seeds with water
   nearby
2. grow the cluster breadth-first, with acceptance probability falling off
   with distance from the seed
3. if the clusters fall short of the requested area, top up with random
   land cells
"""

import math
from collections import deque
from typing import Dict, List, Optional, Tuple

import numpy as np
import structlog
from pydantic import BaseModel, ConfigDict, Field

from .biomes import BiomeType
from .seeded_random import SeededRandom

logger = structlog.get_logger()

Cell = Tuple[int, int]

NEIGHBOR_DIRECTIONS = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

SETTLEABLE = (BiomeType.PLAINS, BiomeType.DESERT)


class SettlementOptions(BaseModel):
    """Village cluster generation options."""

    model_config = ConfigDict(frozen=True)

    max_clusters: int = Field(default=3, description="Upper bound on village clusters")
    clusters_per_ratio: float = Field(
        default=20.0, description="Cluster count is ceil(village ratio * this)"
    )
    clearance_radius: int = Field(
        default=3, description="Half-width of the water-free square around a seed"
    )
    base_growth_probability: float = Field(
        default=0.9, description="Acceptance probability next to the seed"
    )
    growth_falloff_factor: float = Field(
        default=0.1, description="Probability reaches zero at size * this from the seed"
    )


class CandidatePool:
    """
    Dense list of candidate cells with O(1) removal by value.

    Removal swaps the last element into the freed slot, so the remaining
    order changes, but index-based random selection stays uniform.
    """

    def __init__(self, cells: List[Cell]):
        self.cells = list(cells)
        self.positions: Dict[Cell, int] = {cell: i for i, cell in enumerate(self.cells)}

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, cell: Cell) -> bool:
        return cell in self.positions

    def pop_index(self, index: int) -> Cell:
        cell = self.cells[index]
        last = self.cells.pop()
        if index < len(self.cells):
            self.cells[index] = last
            self.positions[last] = index
        del self.positions[cell]
        return cell

    def discard(self, cell: Cell) -> None:
        index = self.positions.get(cell)
        if index is not None:
            self.pop_index(index)


class SettlementPlacer:
    """Grows compact village clusters on plains and desert."""

    def __init__(
        self,
        rng: SeededRandom,
        village_ratio: float,
        options: Optional[SettlementOptions] = None,
    ):
        """
        Args:
            rng: Shared generator
            village_ratio: Requested village share as a fraction (0.05 for 5%)
            options: Cluster tuning
        """
        self.rng = rng
        self.village_ratio = village_ratio
        self.options = options or SettlementOptions()

        self.cluster_seeds: List[Cell] = []
        self.placed = 0
        self.target_cells = 0

    def cluster_count(self) -> int:
        opts = self.options
        return max(1, min(opts.max_clusters, math.ceil(self.village_ratio * opts.clusters_per_ratio)))

    def has_clearance(self, grid: np.ndarray, seed: Cell) -> bool:
        """True when no ocean lies within the square around seed."""
        r = self.options.clearance_radius
        x, y = seed
        height, width = grid.shape
        window = grid[max(0, y - r): min(height, y + r + 1), max(0, x - r): min(width, x + r + 1)]
        return not np.any(window == BiomeType.OCEAN)

    def grow_cluster(
        self,
        grid: np.ndarray,
        seed: Cell,
        pool: CandidatePool,
        cluster_target: int,
    ) -> List[Cell]:
        """
        Breadth-first growth from an already placed seed.

        Mutates grid and pool; returns the cluster cells including the seed.
        """
        height, width = grid.shape
        size = grid.shape[0]
        falloff = size * self.options.growth_falloff_factor
        seed_x, seed_y = seed

        cluster = [seed]
        queue = deque([seed])

        while queue and self.placed < self.target_cells and len(cluster) < cluster_target:
            cx, cy = queue.popleft()

            directions = list(NEIGHBOR_DIRECTIONS)
            self.rng.shuffle(directions)

            for dx, dy in directions:
                nx = cx + dx
                ny = cy + dy
                if not (0 <= nx < width and 0 <= ny < height):
                    continue
                if grid[ny, nx] not in SETTLEABLE:
                    continue

                # Closer to the seed means likelier growth, giving tight clusters
                distance = math.sqrt((nx - seed_x) ** 2 + (ny - seed_y) ** 2)
                probability = self.options.base_growth_probability - distance / falloff

                if self.rng.next() < probability:
                    grid[ny, nx] = BiomeType.VILLAGE
                    self.placed += 1
                    cluster.append((nx, ny))
                    queue.append((nx, ny))
                    pool.discard((nx, ny))

                    if self.placed >= self.target_cells or len(cluster) >= cluster_target:
                        break

        return cluster

    def apply(self, grid: np.ndarray) -> np.ndarray:
        """Return a copy of grid with villages placed."""
        result = grid.copy()
        height, width = result.shape

        settleable = np.isin(result, SETTLEABLE)
        ys, xs = np.nonzero(settleable)
        pool = CandidatePool(list(zip(xs.tolist(), ys.tolist())))

        self.target_cells = math.floor(height * width * self.village_ratio)
        self.placed = 0
        self.cluster_seeds = []

        clusters = self.cluster_count()
        cluster_target = math.ceil(self.target_cells / clusters)

        for _ in range(clusters):
            if self.placed >= self.target_cells or len(pool) == 0:
                break

            seed = pool.pop_index(self.rng.index(len(pool)))

            # A rejected seed stays out of the pool
            if not self.has_clearance(result, seed):
                logger.debug("Village seed too close to water", x=seed[0], y=seed[1])
                continue

            x, y = seed
            result[y, x] = BiomeType.VILLAGE
            self.placed += 1
            self.cluster_seeds.append(seed)

            cluster = self.grow_cluster(result, seed, pool, cluster_target)
            logger.debug("Village cluster grown", x=x, y=y, cells=len(cluster))

        clustered = self.placed
        if self.placed < self.target_cells and len(pool) > 0:
            remaining = list(pool.cells)
            self.rng.shuffle(remaining)
            for x, y in remaining[: self.target_cells - self.placed]:
                result[y, x] = BiomeType.VILLAGE
                self.placed += 1

        logger.info(
            "Villages placed",
            target=self.target_cells,
            placed=self.placed,
            clusters=len(self.cluster_seeds),
            scattered=self.placed - clustered,
        )
        if self.placed < self.target_cells:
            logger.warning(
                "Not enough land for requested villages",
                shortfall=self.target_cells - self.placed,
            )
        return result
