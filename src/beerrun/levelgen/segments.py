# src/beerrun/levelgen/segments.py
# Segment layout and hazard/money placement.
#
# Draw order per segment (fixed, so a seed always replays the same level):
#   1) obstacles: kind (+ ditch width), then up to N candidate x positions
#   2) enemies:   kind, then up to N candidate x positions
#   3) money:     count, then keep-roll / x / elevation per coin
# Spawn and store segments skip 1) and 2) entirely.

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from ..config import DEFAULT_CONFIG, GeneratorConfig
from ..kinds import (
    DEFAULT_ENEMY_KIND, DEFAULT_OBSTACLE_KIND, ENEMY_TABLE, OBSTACLE_TABLE,
    EnemyKind, EnemySpec, ObstacleKind, ObstacleSpec, eligible,
)
from ..rng import SeededRandom
from .difficulty import round_half_up
from .model import (
    EnemyPayload, HazardPlacement, LevelParameters, MoneyPayload, ObstaclePayload,
    Placement, Segment, SegmentRole,
)
from .validator import Span, blocking_runs, footprint, spacing_window, too_close

logger = logging.getLogger(__name__)

OBSTACLE_ROLE_MULTIPLIER: Dict[SegmentRole, float] = {
    SegmentRole.EASY: 0.7,
    SegmentRole.NORMAL: 1.0,
    SegmentRole.HARD: 1.3,
}
ENEMY_ROLE_MULTIPLIER: Dict[SegmentRole, float] = {
    SegmentRole.EASY: 0.5,
    SegmentRole.NORMAL: 1.0,
    SegmentRole.HARD: 1.5,
}

GROUND_Y = 0.0


def role_for_index(index: int, segment_count: int) -> SegmentRole:
    if index == 0:
        return SegmentRole.SPAWN
    if index == segment_count - 1:
        return SegmentRole.STORE
    progress = index / segment_count
    if progress < 0.3:
        return SegmentRole.EASY
    if progress < 0.7:
        return SegmentRole.NORMAL
    return SegmentRole.HARD


def segment_bounds(length: float, segment_count: int) -> List[Tuple[float, float]]:
    """Contiguous [start, end) slices tiling 0..length; the last one ends exactly at length."""
    width = length / segment_count
    bounds = []
    for i in range(segment_count):
        end = length if i == segment_count - 1 else (i + 1) * width
        bounds.append((i * width, end))
    return bounds


class SegmentGenerator:
    """
    Populates every segment of one level from a single SeededRandom.

    Candidates that cannot find a free spot within `max_placement_attempts`
    are dropped; a sparser segment is the intended outcome, not an error.
    With `guard_lethal_runs` a lethal obstacle is also refused where it would
    close off the path (same walk as the validator's completability check).
    """

    def __init__(
        self,
        rng: SeededRandom,
        parameters: LevelParameters,
        config: GeneratorConfig = DEFAULT_CONFIG,
        obstacle_table: Mapping[ObstacleKind, ObstacleSpec] = OBSTACLE_TABLE,
        enemy_table: Mapping[EnemyKind, EnemySpec] = ENEMY_TABLE,
        guard_lethal_runs: bool = True,
    ):
        self.rng = rng
        self.params = parameters
        self.config = config
        self.obstacle_table = obstacle_table
        self.enemy_table = enemy_table
        self.guard_lethal_runs = guard_lethal_runs
        self._lethal: List[Span] = []
        self._hazards: List[HazardPlacement] = []
        self.skipped = 0

    def generate_segments(self) -> Tuple[Segment, ...]:
        self._lethal = []
        self._hazards = []
        self.skipped = 0
        segments: List[Segment] = []
        count = self.params.segment_count

        for i, (start, end) in enumerate(segment_bounds(self.params.length, count)):
            role = role_for_index(i, count)
            obstacles: List[Placement[ObstaclePayload]] = []
            enemies: List[Placement[EnemyPayload]] = []
            if role in OBSTACLE_ROLE_MULTIPLIER:
                obstacles = self._place_obstacles(start, end, role)
                enemies = self._place_enemies(start, end, role)
            money = self._place_money(start, end)

            seg = Segment(
                index=i, start_x=start, end_x=end, role=role,
                obstacles=tuple(sorted(obstacles, key=lambda p: p.x)),
                enemies=tuple(sorted(enemies, key=lambda p: p.x)),
                money=tuple(sorted(money, key=lambda p: p.x)),
            )
            logger.debug("segment %s [%.2f, %.2f) %s: %s obstacles, %s enemies, %s money",
                         i, start, end, role.value, len(seg.obstacles), len(seg.enemies), len(seg.money))
            segments.append(seg)
        return tuple(segments)

    # ---------- counts ----------

    def obstacle_count(self, width: float, role: SegmentRole) -> int:
        return round_half_up(width * self.params.obstacle_density * OBSTACLE_ROLE_MULTIPLIER.get(role, 0.0))

    def enemy_count(self, width: float, role: SegmentRole) -> int:
        return round_half_up(width * self.params.enemy_density * ENEMY_ROLE_MULTIPLIER.get(role, 0.0))

    # ---------- kinds ----------

    def draw_obstacle(self) -> ObstaclePayload:
        dangerous = self.rng.chance(self.config.dangerous_obstacle_ratio)
        candidates = eligible(self.obstacle_table, self.params.difficulty_score)
        # an empty lethal (or non-lethal) pool borrows from the other one
        pool = [(k, s) for k, s in candidates if s.lethal == dangerous] or candidates
        if pool:
            kind, spec = pool[self.rng.weighted_index([s.weight for _, s in pool])]
        else:
            kind = DEFAULT_OBSTACLE_KIND
            spec = self.obstacle_table.get(kind, OBSTACLE_TABLE[kind])
        width = spec.width
        if kind is ObstacleKind.DITCH:
            width = self.rng.uniform(*self.config.ditch_width_range)
        return ObstaclePayload(kind=kind, lethal=spec.lethal, width=width)

    def draw_enemy(self) -> EnemyPayload:
        pool = eligible(self.enemy_table, self.params.difficulty_score)
        if not pool:
            return EnemyPayload(kind=DEFAULT_ENEMY_KIND)
        kind, _ = pool[self.rng.weighted_index([s.weight for _, s in pool])]
        return EnemyPayload(kind=kind)

    # ---------- placement ----------

    def _place_obstacles(self, start: float, end: float, role: SegmentRole) -> List[Placement[ObstaclePayload]]:
        placed: List[Placement[ObstaclePayload]] = []
        for _ in range(self.obstacle_count(end - start, role)):
            payload = self.draw_obstacle()
            p = self._sample(start, end, payload)
            if p is None:
                continue
            if payload.lethal:
                self._lethal.append(footprint(p.x, payload.width))
            self._hazards.append(p)
            placed.append(p)
        return placed

    def _place_enemies(self, start: float, end: float, role: SegmentRole) -> List[Placement[EnemyPayload]]:
        placed: List[Placement[EnemyPayload]] = []
        for _ in range(self.enemy_count(end - start, role)):
            p = self._sample(start, end, self.draw_enemy())
            if p is not None:
                self._hazards.append(p)
                placed.append(p)
        return placed

    def _neighbours(self, start: float, end: float) -> List[HazardPlacement]:
        # everything already placed that could sit within spacing range of [start, end)
        reach = spacing_window(self.config)
        return [h for h in self._hazards if start - reach < h.x < end + reach]

    def _sample(self, start: float, end: float, payload) -> Optional[Placement]:
        others = self._neighbours(start, end)
        for _ in range(self.config.max_placement_attempts):
            cand = Placement(position=(self.rng.uniform(start, end), GROUND_Y), payload=payload)
            if any(too_close(cand, o, self.config) for o in others):
                continue
            if self._would_block(cand):
                continue
            return cand
        self.skipped += 1
        logger.debug("no room for %s in [%.2f, %.2f) after %s attempts",
                     payload.kind.value, start, end, self.config.max_placement_attempts)
        return None

    def _would_block(self, cand: Placement) -> bool:
        payload = cand.payload
        if not self.guard_lethal_runs or not isinstance(payload, ObstaclePayload) or not payload.lethal:
            return False
        spans = self._lethal + [footprint(cand.x, payload.width)]
        return bool(blocking_runs(spans, self.params.length, self.config))

    def _place_money(self, start: float, end: float) -> List[Placement[MoneyPayload]]:
        cfg = self.config
        out: List[Placement[MoneyPayload]] = []
        for _ in range(self.rng.next_int(cfg.min_money_per_segment, cfg.max_money_per_segment + 1)):
            if not self.rng.chance(cfg.money_spawn_chance):
                continue
            x = self.rng.uniform(start, end)
            if self.rng.chance(cfg.elevated_money_ratio):
                out.append(Placement((x, cfg.money_elevated_y), MoneyPayload(cfg.elevated_money_value)))
            else:
                out.append(Placement((x, GROUND_Y), MoneyPayload(cfg.money_value)))
        return out
