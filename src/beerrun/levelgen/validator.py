# src/beerrun/levelgen/validator.py
# Whole-level acceptance checks. A level is only handed out when validate() is ok.
#
# Completability is a 1-D occupancy walk along the ground, not a physics run:
#  - sample x = k * walk_step for k = 0.. up to the level length
#  - a sample is blocked when a *lethal* obstacle's footprint covers it
#  - consecutive blocked samples form a run; the hazard behind a run of n samples
#    can be as wide as (n + 1) * walk_step, and if that exceeds max_jump_distance
#    the run is an impassable wall
# Non-lethal kinds (bush, curb, closed manhole) are always jumpable and never block.
# Jump arcs between consecutive jumpable hazards and enemies cornering the player are
# not modelled.

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..config import DEFAULT_CONFIG, GeneratorConfig
from .model import GeneratedLevel, HazardPlacement, EnemyPayload, SegmentRole

Span = Tuple[float, float]

EPS = 1e-9


@dataclass(frozen=True)
class ValidationResult:
    errors: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


# ---------- spacing ----------

def required_gap(a: HazardPlacement, b: HazardPlacement, config: GeneratorConfig) -> float:
    if isinstance(a.payload, EnemyPayload) and isinstance(b.payload, EnemyPayload):
        return config.min_safe_distance * config.enemy_spacing_factor
    return config.min_safe_distance


def too_close(a: HazardPlacement, b: HazardPlacement, config: GeneratorConfig) -> bool:
    return math.dist(a.position, b.position) < required_gap(a, b, config)


def spacing_window(config: GeneratorConfig) -> float:
    """Widest gap any hazard pair can require; pairs further apart in x never conflict."""
    return config.min_safe_distance * max(1.0, config.enemy_spacing_factor)


def check_spacing(level: GeneratedLevel, config: GeneratorConfig = DEFAULT_CONFIG) -> List[str]:
    """Every hazard pair in the level that sits closer than allowed."""
    errors: List[str] = []
    hazards = sorted(level.obstacles + level.enemies, key=lambda p: p.x)
    window = spacing_window(config)
    for i, a in enumerate(hazards):
        for b in hazards[i + 1:]:
            if b.x - a.x >= window:
                break
            if too_close(a, b, config):
                errors.append(
                    f"spacing: {_label(a)} at x={a.x:.2f} and {_label(b)} at x={b.x:.2f} "
                    f"closer than {required_gap(a, b, config):.2f}"
                )
    return errors


def _label(p: HazardPlacement) -> str:
    return p.payload.kind.value


# ---------- completability ----------

def footprint(x: float, width: float) -> Span:
    return (x - width / 2.0, x + width / 2.0)


def lethal_spans(level: GeneratedLevel) -> List[Span]:
    return [footprint(p.x, p.payload.width) for p in level.obstacles if p.payload.lethal]


def _sample_range(span: Span, length: float, step: float) -> Tuple[int, int]:
    lo = max(span[0], 0.0)
    hi = min(span[1], length)
    return math.ceil(lo / step - EPS), math.floor(hi / step + EPS)


def blocking_runs(
    spans: Iterable[Span],
    length: float,
    config: GeneratorConfig = DEFAULT_CONFIG,
) -> List[Span]:
    """
    (first_x, last_x) of every run of blocked walk samples too wide to jump.
    Works on sample-index intervals, which is the same as stepping sample by sample.
    """
    step = config.walk_step
    ranges = sorted(
        r for r in (_sample_range(s, length, step) for s in spans) if r[0] <= r[1]
    )
    runs: List[Tuple[int, int]] = []
    for k0, k1 in ranges:
        if runs and k0 <= runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], max(runs[-1][1], k1))
        else:
            runs.append((k0, k1))
    return [
        (k0 * step, k1 * step) for k0, k1 in runs
        if (k1 - k0 + 2) * step > config.max_jump_distance + EPS
    ]


def check_completable(level: GeneratedLevel, config: GeneratorConfig = DEFAULT_CONFIG) -> bool:
    return not blocking_runs(lethal_spans(level), level.length, config)


# ---------- structure ----------

def check_structure(level: GeneratedLevel) -> List[str]:
    errors: List[str] = []
    segs = level.segments
    if len(segs) < 2:
        return [f"structure: need at least 2 segments, got {len(segs)}"]
    if len(segs) != level.parameters.segment_count:
        errors.append(f"structure: {len(segs)} segments but parameters say {level.parameters.segment_count}")

    if abs(segs[0].start_x) > EPS:
        errors.append(f"structure: first segment starts at {segs[0].start_x}")
    if abs(segs[-1].end_x - level.length) > EPS:
        errors.append(f"structure: last segment ends at {segs[-1].end_x}, level length {level.length}")
    for i, seg in enumerate(segs):
        if seg.index != i:
            errors.append(f"structure: segment at position {i} has index {seg.index}")
        if seg.end_x <= seg.start_x:
            errors.append(f"structure: segment {i} is empty or inverted")
        if i and abs(seg.start_x - segs[i - 1].end_x) > EPS:
            errors.append(f"structure: gap or overlap between segments {i - 1} and {i}")
        expected = SegmentRole.SPAWN if i == 0 else SegmentRole.STORE if i == len(segs) - 1 else None
        if expected is not None and seg.role is not expected:
            errors.append(f"structure: segment {i} should be {expected.value}, is {seg.role.value}")
        if expected is None and seg.role in (SegmentRole.SPAWN, SegmentRole.STORE):
            errors.append(f"structure: interior segment {i} has role {seg.role.value}")
        for p in seg.obstacles + seg.enemies + seg.money:
            if not seg.contains(p.x):
                errors.append(f"structure: placement at x={p.x:.2f} outside segment {i}")

    if segs[0].hazards:
        errors.append("structure: spawn segment holds hazards")
    if level.player_spawn[0] != 0.0:
        errors.append(f"structure: player spawn at x={level.player_spawn[0]}, expected 0")
    if abs(level.level_end_position[0] - level.length) > EPS:
        errors.append(f"structure: level end at x={level.level_end_position[0]}, expected {level.length}")
    return errors


def validate(level: GeneratedLevel, config: GeneratorConfig = DEFAULT_CONFIG) -> ValidationResult:
    errors: List[str] = []
    errors += check_structure(level)
    errors += check_spacing(level, config)
    for lo, hi in blocking_runs(lethal_spans(level), level.length, config):
        errors.append(f"completability: lethal hazards block x={lo:.2f}..{hi:.2f}")
    return ValidationResult(errors=tuple(errors))
