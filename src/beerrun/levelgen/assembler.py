# src/beerrun/levelgen/assembler.py
# Canonical entry point: level number (+ optional seed) -> validated GeneratedLevel.

from __future__ import annotations

import logging
import secrets
from typing import List, Optional

from ..config import DEFAULT_CONFIG, GeneratorConfig
from ..rng import SEED_MASK_64, SeededRandom, fold_seed, next_seed, seed_for_level
from .difficulty import MIN_SEGMENTS, clamp_level, compute_parameters
from .errors import Unsatisfiable
from .model import GeneratedLevel, LevelParameters
from .segments import SegmentGenerator
from .validator import validate

logger = logging.getLogger(__name__)


def resolve_seed(level: int, seed: Optional[int]) -> int:
    if seed is None:
        return seed_for_level(level, secrets.randbits(32))
    if not (0 <= seed <= SEED_MASK_64):
        raise ValueError(f"seed must be a 64-bit unsigned integer, got {seed}")
    return seed


def check_parameters(parameters: LevelParameters) -> LevelParameters:
    """Sanity-check parameters supplied from outside (e.g. a difficulty manager)."""
    if parameters.length <= 0:
        raise ValueError(f"level length must be positive, got {parameters.length}")
    for name in ("obstacle_density", "enemy_density"):
        v = getattr(parameters, name)
        if not (0.0 <= v <= 1.0):
            raise ValueError(f"{name} must be in [0, 1], got {v}")
    if parameters.segment_count < MIN_SEGMENTS:
        raise ValueError(f"segment_count must be at least {MIN_SEGMENTS}, got {parameters.segment_count}")
    return parameters


def build_level(
    level: int,
    seed: int,
    config: GeneratorConfig = DEFAULT_CONFIG,
    parameters: Optional[LevelParameters] = None,
    guard_lethal_runs: bool = True,
) -> GeneratedLevel:
    """One unvalidated attempt for exactly this seed."""
    rng = SeededRandom(fold_seed(seed))
    # the length draw always happens so supplied parameters do not shift the stream
    computed = compute_parameters(level, rng, config)
    params = parameters if parameters is not None else computed
    gen = SegmentGenerator(rng, params, config, guard_lethal_runs=guard_lethal_runs)
    segments = gen.generate_segments()
    if gen.skipped:
        logger.debug("level %s seed %s: %s candidates skipped", level, seed, gen.skipped)
    return GeneratedLevel(
        level_number=level,
        seed=seed,
        parameters=params,
        segments=segments,
        player_spawn=(0.0, 0.0),
        level_end_position=(params.length, 0.0),
    )


def generate(
    level_number: int,
    seed: Optional[int] = None,
    *,
    config: GeneratorConfig = DEFAULT_CONFIG,
    parameters: Optional[LevelParameters] = None,
    guard_lethal_runs: bool = True,
) -> GeneratedLevel:
    """
    Generate a complete, validated level.

    Level 0 is treated as level 1. Without a seed one is derived from the
    level number plus OS entropy. Each failed validation moves on to the next
    seed of a fixed sequence; after `config.max_generation_attempts` failures
    `Unsatisfiable` is raised. The returned level carries the seed that
    produced it, so `generate(level_number, level.seed)` replays it.
    """
    level = clamp_level(level_number)
    seed = resolve_seed(level, seed)
    if parameters is not None:
        check_parameters(parameters)

    tried: List[int] = []
    errors: tuple = ()
    for attempt in range(1, config.max_generation_attempts + 1):
        tried.append(seed)
        lv = build_level(level, seed, config, parameters, guard_lethal_runs)
        result = validate(lv, config)
        if result.ok:
            logger.info("level %s seed %s accepted on attempt %s: %s obstacles, %s enemies, %s money, length %.1f",
                        level, seed, attempt, lv.obstacle_count, lv.enemy_count, lv.money_count, lv.length)
            return lv
        errors = result.errors
        logger.warning("level %s seed %s rejected (attempt %s/%s): %s",
                       level, seed, attempt, config.max_generation_attempts, errors[0])
        seed = next_seed(seed)

    raise Unsatisfiable(level, tried, errors)
