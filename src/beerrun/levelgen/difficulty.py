# src/beerrun/levelgen/difficulty.py
# Level number -> LevelParameters. Only the length consumes randomness.

import math

from ..config import DEFAULT_CONFIG, GeneratorConfig
from ..rng import SeededRandom
from .model import LevelParameters

MIN_SEGMENTS = 2  # spawn + store


def round_half_up(v: float) -> int:
    return int(math.floor(v + 0.5))


def clamp_level(level_number: int) -> int:
    if level_number < 0:
        raise ValueError(f"level_number must not be negative, got {level_number}")
    return max(level_number, 1)


def density_for(level: int, base: float, increment: float, cap: float) -> float:
    """min(base + level * increment, cap), kept inside [0, 1]."""
    return max(0.0, min(base + clamp_level(level) * increment, cap, 1.0))


def difficulty_score(level: int) -> float:
    # log10 growth: 1 -> 0.30, 9 -> 1.0, 99 -> 2.0
    return math.log(clamp_level(level) + 1) / math.log(10)


def compute_parameters(
    level_number: int,
    rng: SeededRandom,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> LevelParameters:
    level = clamp_level(level_number)
    length = config.base_length + rng.uniform(-config.length_variation, config.length_variation)
    return LevelParameters(
        length=length,
        obstacle_density=density_for(level, config.base_obstacle_density,
                                     config.obstacle_increment, config.obstacle_cap),
        enemy_density=density_for(level, config.base_enemy_density,
                                  config.enemy_increment, config.enemy_cap),
        difficulty_score=difficulty_score(level),
        segment_count=max(MIN_SEGMENTS, round_half_up(length / config.segment_length)),
    )
