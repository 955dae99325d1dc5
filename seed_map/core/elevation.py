"""
Elevation and aridity field generation.

Elevation is fractal noise biased toward a few randomly placed "ocean
centers" so that low ground gathers into contiguous seas instead of
speckling the map. Aridity is an independent noise field that later decides
where deserts go.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np
import structlog

from .noise import generate_octave_noise
from .seeded_random import SeededRandom

logger = structlog.get_logger()


@dataclass
class OceanCenter:
    """Circular zone where elevation is pushed down."""

    x: float
    y: float
    radius: float

    def distance_to(self, x: float, y: float) -> float:
        return math.sqrt((x - self.x) ** 2 + (y - self.y) ** 2)


@dataclass
class ElevationOptions:
    """Noise and ocean-zone parameters."""

    min_ocean_centers: int = 1
    max_ocean_centers: int = 3
    min_radius_factor: float = 0.3  # Radius as a fraction of map size
    radius_factor_range: float = 0.3
    center_probability: float = 0.95  # Ocean probability at the exact center
    probability_falloff: float = 0.7  # Drop in probability at the rim
    ocean_elevation_max: float = 0.4

    elevation_octaves: int = 6
    elevation_persistence: float = 0.5
    elevation_scale_divisor: float = 8.0  # Noise scale = size / divisor

    aridity_octaves: int = 4
    aridity_persistence: float = 0.6
    aridity_scale_divisor: float = 6.0
    aridity_offset: float = 1000.0


@dataclass
class ElevationAridityPass:
    """Produces the elevation and aridity fields for an N x N map."""

    size: int
    rng: SeededRandom
    options: ElevationOptions = field(default_factory=ElevationOptions)
    ocean_centers: List[OceanCenter] = field(default_factory=list)

    def place_ocean_centers(self) -> List[OceanCenter]:
        """Draw between min and max ocean centers with random position and radius."""
        opts = self.options
        span = opts.max_ocean_centers - opts.min_ocean_centers + 1
        count = math.floor(self.rng.next() * span) + opts.min_ocean_centers
        count = max(opts.min_ocean_centers, min(opts.max_ocean_centers, count))

        centers = []
        for _ in range(count):
            x = self.rng.next() * self.size
            y = self.rng.next() * self.size
            radius = (opts.min_radius_factor + self.rng.next() * opts.radius_factor_range) * self.size
            centers.append(OceanCenter(x=x, y=y, radius=radius))

        self.ocean_centers = centers
        logger.info("Placed ocean centers", count=len(centers))
        return centers

    def _in_ocean_zone(self, x: int, y: int) -> bool:
        # Centers are tested in creation order; the first successful draw wins.
        opts = self.options
        for center in self.ocean_centers:
            distance = center.distance_to(x, y)
            if distance < center.radius:
                probability = opts.center_probability - (distance / center.radius) * opts.probability_falloff
                if self.rng.next() < probability:
                    return True
        return False

    def run(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Generate (elevation, aridity), both (size, size) float arrays in [0, 1].

        Cells are visited row by row; each cell samples elevation before
        aridity. Changing that order changes every downstream draw.
        """
        opts = self.options
        if not self.ocean_centers:
            self.place_ocean_centers()

        elevation = np.zeros((self.size, self.size), dtype=np.float64)
        aridity = np.zeros((self.size, self.size), dtype=np.float64)
        elevation_scale = self.size / opts.elevation_scale_divisor
        aridity_scale = self.size / opts.aridity_scale_divisor

        ocean_zone_cells = 0
        for y in range(self.size):
            for x in range(self.size):
                if self._in_ocean_zone(x, y):
                    elevation[y, x] = self.rng.next() * opts.ocean_elevation_max
                    ocean_zone_cells += 1
                else:
                    elevation[y, x] = generate_octave_noise(
                        x,
                        y,
                        self.rng,
                        opts.elevation_octaves,
                        opts.elevation_persistence,
                        elevation_scale,
                    )

                aridity[y, x] = generate_octave_noise(
                    x + opts.aridity_offset,
                    y + opts.aridity_offset,
                    self.rng,
                    opts.aridity_octaves,
                    opts.aridity_persistence,
                    aridity_scale,
                )

        logger.info(
            "Elevation and aridity generated",
            size=self.size,
            ocean_zone_cells=ocean_zone_cells,
        )
        return elevation, aridity
