"""
Seeded pseudo-random numbers.

The auction calendar and auction rosters are not stored anywhere; they are
recomputed on every request from explicit (seed, index) pairs.
"""
import math


def seeded_random(seed: int, index: int) -> float:
    """
    Return a reproducible float in [0, 1) for the given seed and index.

    Same inputs always yield the same output, across calls and processes.
    """
    x = math.sin(seed + index) * 10000
    return x - math.floor(x)
