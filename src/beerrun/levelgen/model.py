# src/beerrun/levelgen/model.py
# Immutable layout types handed to the instantiation layer. Value equality on
# every type, so "same seed => same level" is a plain `==`.

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Generic, Tuple, TypeVar, Union

from ..kinds import EnemyKind, ObstacleKind

XY = Tuple[float, float]
T = TypeVar("T")


@dataclass(frozen=True)
class LevelParameters:
    length: float
    obstacle_density: float
    enemy_density: float
    difficulty_score: float
    segment_count: int


class SegmentRole(Enum):
    SPAWN = "spawn"
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    STORE = "store"


@dataclass(frozen=True)
class ObstaclePayload:
    kind: ObstacleKind
    lethal: bool
    width: float


@dataclass(frozen=True)
class EnemyPayload:
    kind: EnemyKind


@dataclass(frozen=True)
class MoneyPayload:
    value: int


@dataclass(frozen=True)
class Placement(Generic[T]):
    position: XY
    payload: T

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]


ObstaclePlacement = Placement[ObstaclePayload]
EnemyPlacement = Placement[EnemyPayload]
MoneyPlacement = Placement[MoneyPayload]
HazardPlacement = Union[ObstaclePlacement, EnemyPlacement]


@dataclass(frozen=True)
class Segment:
    index: int
    start_x: float
    end_x: float
    role: SegmentRole
    obstacles: Tuple[ObstaclePlacement, ...] = ()
    enemies: Tuple[EnemyPlacement, ...] = ()
    money: Tuple[MoneyPlacement, ...] = ()

    @property
    def width(self) -> float:
        return self.end_x - self.start_x

    @property
    def hazards(self) -> Tuple[HazardPlacement, ...]:
        return self.obstacles + self.enemies

    def contains(self, x: float) -> bool:
        return self.start_x <= x <= self.end_x


@dataclass(frozen=True)
class GeneratedLevel:
    """
    Complete, self-describing layout for one level attempt. Nothing downstream
    consults randomness again; replaying `seed` through `generate` rebuilds it.
    """
    level_number: int
    seed: int
    parameters: LevelParameters
    segments: Tuple[Segment, ...]
    player_spawn: XY
    level_end_position: XY

    @property
    def length(self) -> float:
        return self.parameters.length

    @property
    def obstacles(self) -> Tuple[ObstaclePlacement, ...]:
        return tuple(p for s in self.segments for p in s.obstacles)

    @property
    def enemies(self) -> Tuple[EnemyPlacement, ...]:
        return tuple(p for s in self.segments for p in s.enemies)

    @property
    def money(self) -> Tuple[MoneyPlacement, ...]:
        return tuple(p for s in self.segments for p in s.money)

    @property
    def obstacle_count(self) -> int:
        return sum(len(s.obstacles) for s in self.segments)

    @property
    def enemy_count(self) -> int:
        return sum(len(s.enemies) for s in self.segments)

    @property
    def money_count(self) -> int:
        return sum(len(s.money) for s in self.segments)

    @property
    def total_money_value(self) -> int:
        return sum(p.payload.value for p in self.money)

    def to_dict(self) -> Dict[str, Any]:
        """Plain JSON-ready view (kinds and roles as their string values)."""
        def seg(s: Segment) -> Dict[str, Any]:
            return {
                "index": s.index,
                "start_x": s.start_x,
                "end_x": s.end_x,
                "role": s.role.value,
                "obstacles": [
                    {"x": p.x, "y": p.y, "kind": p.payload.kind.value,
                     "lethal": p.payload.lethal, "width": p.payload.width}
                    for p in s.obstacles
                ],
                "enemies": [{"x": p.x, "y": p.y, "kind": p.payload.kind.value} for p in s.enemies],
                "money": [{"x": p.x, "y": p.y, "value": p.payload.value} for p in s.money],
            }

        p = self.parameters
        return {
            "level_number": self.level_number,
            "seed": self.seed,
            "parameters": {
                "length": p.length,
                "obstacle_density": p.obstacle_density,
                "enemy_density": p.enemy_density,
                "difficulty_score": p.difficulty_score,
                "segment_count": p.segment_count,
            },
            "player_spawn": list(self.player_spawn),
            "level_end_position": list(self.level_end_position),
            "segments": [seg(s) for s in self.segments],
        }
