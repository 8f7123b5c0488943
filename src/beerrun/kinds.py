# Obstacle and enemy classification (data only; the instantiation layer maps
# each kind onto its own renderable/physics entity).

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Tuple, TypeVar


class ObstacleKind(Enum):
    BUSH = "bush"
    CURB = "curb"
    CLOSED_MANHOLE = "closed_manhole"
    OPEN_MANHOLE = "open_manhole"
    DITCH = "ditch"


class EnemyMovement(Enum):
    TOWARD_PLAYER = "toward_player"
    ACROSS_PATH = "across_path"


class EnemyKind(Enum):
    CHURCH_MEMBER = "church_member"
    POLICE = "police"


@dataclass(frozen=True)
class ObstacleSpec:
    lethal: bool
    width: float
    min_difficulty: float = 0.0
    max_difficulty: float = math.inf
    weight: float = 1.0


@dataclass(frozen=True)
class EnemySpec:
    movement: EnemyMovement
    move_speed: float
    penalty_multiplier: float
    bounce_velocity: float
    min_difficulty: float = 0.0
    max_difficulty: float = math.inf
    weight: float = 1.0


OBSTACLE_TABLE: Dict[ObstacleKind, ObstacleSpec] = {
    ObstacleKind.BUSH:           ObstacleSpec(lethal=False, width=1.0, weight=3.0),
    ObstacleKind.CURB:           ObstacleSpec(lethal=False, width=0.5, weight=3.0),
    ObstacleKind.CLOSED_MANHOLE: ObstacleSpec(lethal=False, width=1.0, max_difficulty=1.5, weight=2.0),
    ObstacleKind.OPEN_MANHOLE:   ObstacleSpec(lethal=True,  width=1.5, weight=2.0),
    # width is drawn per placement from GeneratorConfig.ditch_width_range
    ObstacleKind.DITCH:          ObstacleSpec(lethal=True,  width=2.0, min_difficulty=0.6, weight=1.0),
}

# Speeds, penalties and bounce velocities are what the two enemy types used in-game.
ENEMY_TABLE: Dict[EnemyKind, EnemySpec] = {
    EnemyKind.CHURCH_MEMBER: EnemySpec(EnemyMovement.ACROSS_PATH, move_speed=1.0,
                                       penalty_multiplier=0.5, bounce_velocity=250.0, weight=2.0),
    EnemyKind.POLICE:        EnemySpec(EnemyMovement.TOWARD_PLAYER, move_speed=1.5,
                                       penalty_multiplier=0.4, bounce_velocity=300.0,
                                       min_difficulty=0.45),
}

DEFAULT_OBSTACLE_KIND = ObstacleKind.BUSH
DEFAULT_ENEMY_KIND = EnemyKind.CHURCH_MEMBER

K = TypeVar("K")


def eligible(table: Mapping[K, object], difficulty: float) -> List[Tuple[K, object]]:
    """Entries of `table` whose [min_difficulty, max_difficulty] contains `difficulty`, in table order."""
    return [
        (kind, spec) for kind, spec in table.items()
        if spec.min_difficulty <= difficulty <= spec.max_difficulty and spec.weight > 0
    ]
