#!/usr/bin/env python3
"""
Generate sample biome maps and save them as PNG images.

For each seed code this runs the full pipeline:
1. Elevation/aridity noise with ocean centers
2. Threshold classification
3. Smoothing, ocean connectivity and ratio correction
4. Village clusters

Usage:
    python generate_sample_maps.py [seed_code ...] [--size N]
        [--ocean PCT] [--desert PCT] [--village PCT]

With no seed code a random one is generated.
"""

import argparse
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap

from seed_map.config import settings
from seed_map.core import BIOME_COLORS, BiomeStatistics, BiomeType, MapGenerator
from seed_map.utils.logging import configure_logging
from seed_map.utils.random import generate_random_seed, seed_from_code


def render_map(grid, seed_code, output_dir):
    """Paint the grid with biome colors and a seed/size footer."""
    size = grid.shape[0]
    cmap = ListedColormap([BIOME_COLORS[biome] for biome in BiomeType])

    fig, ax = plt.subplots(figsize=(8, 8))
    ax.imshow(
        grid,
        cmap=cmap,
        vmin=0,
        vmax=len(BiomeType) - 1,
        interpolation="nearest",
        origin="upper",
    )
    ax.set_xticks([])
    ax.set_yticks([])

    legend = "\n".join(
        f"{row['name']}: {row['percentage']}%" for row in BiomeStatistics.summarize(grid)
    )
    ax.text(0.02, 0.98, legend, transform=ax.transAxes,
            bbox=dict(boxstyle="round,pad=0.5", facecolor="white", alpha=0.8),
            verticalalignment="top", fontsize=10, family="monospace")

    ax.text(0.98, 0.02, f"Seed: {seed_code}, Size: {size}x{size}", transform=ax.transAxes,
            bbox=dict(boxstyle="round,pad=0.3", facecolor="white", alpha=0.8),
            horizontalalignment="right", fontsize=10, family="monospace")

    output_file = Path(output_dir) / f"seed_map_{seed_code}_{size}.png"
    plt.savefig(output_file, dpi=150, bbox_inches="tight", pad_inches=0.1)
    plt.close(fig)
    return output_file


def create_map(seed_code, size, ratios, output_dir):
    """Generate, report and render one map."""
    print(f"\nGenerating map for seed {seed_code} ({size}x{size})...")

    generator = MapGenerator(seed_from_code(seed_code), size, ratios)
    grid = generator.generate()

    for row in BiomeStatistics.summarize(grid):
        print(f"  {row['name']:<8} {row['percentage']:>5}%")
    if generator.ocean_shortfall:
        print(f"  Ocean target missed by {generator.ocean_shortfall} cells")

    output_file = render_map(grid, seed_code, output_dir)
    print(f"  Saved to: {output_file}")
    return grid


def main(argv=None):
    """Generate sample maps for the given seed codes."""
    parser = argparse.ArgumentParser(description="Generate seeded biome maps")
    parser.add_argument("seeds", nargs="*", help="10-digit seed codes")
    parser.add_argument("--size", type=int, default=settings.default_map_size)
    parser.add_argument("--ocean", type=float, default=settings.default_ocean_ratio)
    parser.add_argument("--desert", type=float, default=settings.default_desert_ratio)
    parser.add_argument("--village", type=float, default=settings.default_village_ratio)
    parser.add_argument("--output-dir", default=settings.output_dir)
    args = parser.parse_args(argv)

    configure_logging(settings.log_level, settings.log_format)

    ratios = {
        BiomeType.OCEAN: args.ocean,
        BiomeType.DESERT: args.desert,
        BiomeType.VILLAGE: args.village,
    }
    Path(args.output_dir).mkdir(parents=True, exist_ok=True)

    seeds = args.seeds or [generate_random_seed()]
    grids = [create_map(seed, args.size, ratios, args.output_dir) for seed in seeds]

    print(f"\n✓ Generated {len(grids)} map(s), {sum(int(np.sum(g == BiomeType.VILLAGE)) for g in grids)} village cells total")


if __name__ == "__main__":
    main()
