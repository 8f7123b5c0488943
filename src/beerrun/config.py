from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class GeneratorConfig:
    # Level shape (world units along x)
    base_length: float = 200.0
    length_variation: float = 20.0
    segment_length: float = 10.0

    # Density curve: min(base + level * increment, cap)
    base_obstacle_density: float = 0.10
    obstacle_increment: float = 0.02
    obstacle_cap: float = 0.5
    base_enemy_density: float = 0.05
    enemy_increment: float = 0.01
    enemy_cap: float = 0.3

    # Hazard placement
    min_safe_distance: float = 2.0
    enemy_spacing_factor: float = 1.5   # enemy–enemy pairs keep patrol zones apart
    max_placement_attempts: int = 10
    dangerous_obstacle_ratio: float = 0.2
    ditch_width_range: Tuple[float, float] = (1.5, 4.5)

    # Completability walk
    max_jump_distance: float = 3.0
    walk_step: float = 0.25

    # Money
    min_money_per_segment: int = 1
    max_money_per_segment: int = 4
    money_spawn_chance: float = 0.6
    elevated_money_ratio: float = 0.2
    money_elevated_y: float = 2.0
    money_value: int = 1
    elevated_money_value: int = 5

    max_generation_attempts: int = 5

    def __post_init__(self) -> None:
        if self.base_length <= 0 or self.segment_length <= 0:
            raise ValueError("base_length and segment_length must be positive")
        if not (0 <= self.length_variation < self.base_length):
            raise ValueError("length_variation must be in [0, base_length)")
        for name in ("base_obstacle_density", "obstacle_cap", "base_enemy_density", "enemy_cap",
                     "dangerous_obstacle_ratio", "money_spawn_chance", "elevated_money_ratio"):
            v = getattr(self, name)
            if not (0.0 <= v <= 1.0):
                raise ValueError(f"{name} must be in [0, 1], got {v}")
        if self.obstacle_increment < 0 or self.enemy_increment < 0:
            raise ValueError("density increments must not be negative")
        if self.min_safe_distance < 0 or self.enemy_spacing_factor < 1.0:
            raise ValueError("min_safe_distance must be >= 0 and enemy_spacing_factor >= 1")
        lo, hi = self.ditch_width_range
        if not (0 < lo <= hi):
            raise ValueError(f"bad ditch_width_range {self.ditch_width_range}")
        if self.max_jump_distance <= 0 or self.walk_step <= 0:
            raise ValueError("max_jump_distance and walk_step must be positive")
        if not (0 <= self.min_money_per_segment <= self.max_money_per_segment):
            raise ValueError("money per segment range is inverted")
        if self.max_placement_attempts < 1 or self.max_generation_attempts < 1:
            raise ValueError("attempt bounds must be at least 1")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeneratorConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(unknown)}")
        values = dict(data)
        if "ditch_width_range" in values:
            values["ditch_width_range"] = tuple(values["ditch_width_range"])
        return cls(**values)


def load_config(path: Path) -> GeneratorConfig:
    """Load generator tuning from a JSON object of field overrides.

    Raises:
        FileNotFoundError: If the file does not exist.
        SystemExit: If the file is not valid JSON, with a readable message.
        ValueError: On unknown keys or out-of-range values.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SystemExit(
            f"\nERROR: generator config is not valid JSON.\n"
            f"File: {path}\n"
            f"Line {e.lineno}, Col {e.colno}\n"
            f"{e.msg}\n"
        )
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of config overrides")
    return GeneratorConfig.from_dict(data)


# Default tuning (callers swap in their own via dataclasses.replace or load_config)
DEFAULT_CONFIG = GeneratorConfig()
