"""Per-biome coverage statistics for a finished grid."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

import numpy as np

from .biomes import BIOME_COLORS, BIOME_NAMES, BiomeType, biome_counts

ONE_DECIMAL = Decimal("0.1")


def format_percentage(value: float) -> str:
    """One decimal, with exact ties rounded up ("0.25" -> "0.3")."""
    return str(Decimal(value).quantize(ONE_DECIMAL, rounding=ROUND_HALF_UP))


class BiomeStatistics:
    """Percentage breakdown of a grid by biome."""

    @staticmethod
    def counts(grid: np.ndarray) -> Dict[BiomeType, int]:
        grid = np.asarray(grid)
        if grid.size == 0:
            return {}
        return biome_counts(grid)

    @staticmethod
    def compute(grid: np.ndarray) -> Dict[BiomeType, str]:
        """
        Percentage of cells per biome, formatted with one decimal ("30.0").

        Returns an empty dict for an empty grid.
        """
        counts = BiomeStatistics.counts(grid)
        if not counts:
            return {}
        total = sum(counts.values())
        return {biome: format_percentage(count / total * 100) for biome, count in counts.items()}

    @staticmethod
    def summarize(grid: np.ndarray) -> List[dict]:
        """Display rows with name, percentage and color for each biome."""
        return [
            {
                "biome": biome,
                "name": BIOME_NAMES[biome],
                "percentage": percentage,
                "color": BIOME_COLORS[biome],
            }
            for biome, percentage in BiomeStatistics.compute(grid).items()
        ]
