import json
from dataclasses import replace

import pytest

from beerrun.config import DEFAULT_CONFIG
from beerrun.kinds import ObstacleKind
from beerrun.levelgen.assembler import build_level, generate
from beerrun.levelgen.errors import GenerationError, Unsatisfiable
from beerrun.levelgen.model import LevelParameters, SegmentRole
from beerrun.levelgen.validator import check_completable, check_spacing, too_close, validate
from beerrun.rng import next_seed

def test_same_level_and_seed_give_identical_levels():
    a = generate(1, seed=42)
    b = generate(1, seed=42)
    assert a == b
    assert (a.obstacle_count, a.enemy_count, a.money_count) == (b.obstacle_count, b.enemy_count, b.money_count)

def test_determinism_across_levels_and_seeds():
    for lvl in (1, 5, 20, 50):
        for seed in (0, 7, 2**32 + 3, 2**63):
            assert generate(lvl, seed) == generate(lvl, seed)

def test_density_grows_with_level():
    p1 = generate(1, seed=42).parameters
    p20 = generate(20, seed=42).parameters
    assert p1.obstacle_density < p20.obstacle_density
    assert p1.enemy_density < p20.enemy_density
    assert p1.difficulty_score < p20.difficulty_score

def test_ten_segment_level_layout():
    params = LevelParameters(length=100.0, obstacle_density=0.3, enemy_density=0.1,
                             difficulty_score=1.0, segment_count=10)
    lv = generate(5, seed=42, parameters=params)
    assert [s.index for s in lv.segments] == list(range(10))
    assert len(lv.segments[0].obstacles) == 0 and len(lv.segments[0].enemies) == 0
    assert lv.segments[0].role is SegmentRole.SPAWN
    assert lv.segments[9].role is SegmentRole.STORE
    assert lv.parameters == params

def test_all_lethal_max_density_stays_completable():
    cfg = replace(DEFAULT_CONFIG, base_obstacle_density=1.0, obstacle_cap=1.0, dangerous_obstacle_ratio=1.0)
    for lvl in (1, 20):
        lv = generate(lvl, seed=42, config=cfg)
        assert lv.parameters.obstacle_density == 1.0
        assert lv.obstacles
        assert all(o.payload.lethal for o in lv.obstacles)
        assert check_completable(lv, cfg)

def test_level_zero_behaves_as_level_one():
    assert generate(0, seed=42) == generate(1, seed=42)

def test_bad_input_rejected():
    with pytest.raises(ValueError):
        generate(-1, seed=1)
    with pytest.raises(ValueError):
        generate(1, seed=-1)
    with pytest.raises(ValueError):
        generate(1, seed=2**64)
    bad = LevelParameters(length=100.0, obstacle_density=1.5, enemy_density=0.1,
                          difficulty_score=1.0, segment_count=10)
    with pytest.raises(ValueError):
        generate(1, seed=1, parameters=bad)

def test_unsatisfiable_after_bounded_retries():
    # every lethal footprint is wider than the jump and nothing thins them out
    cfg = replace(DEFAULT_CONFIG, base_obstacle_density=1.0, obstacle_cap=1.0,
                  dangerous_obstacle_ratio=1.0, max_jump_distance=0.5)
    with pytest.raises(Unsatisfiable) as info:
        generate(1, seed=42, config=cfg, guard_lethal_runs=False)
    err = info.value
    assert isinstance(err, GenerationError)
    assert err.level_number == 1
    assert len(err.seeds) == cfg.max_generation_attempts
    assert err.seeds[0] == 42 and err.seeds[1] == next_seed(42)
    assert any(e.startswith("completability") for e in err.errors)

def test_rejected_seed_retries_onto_a_later_seed():
    # the widest ditches outreach the jump and nothing thins them out
    cfg = replace(DEFAULT_CONFIG, dangerous_obstacle_ratio=0.5, max_jump_distance=2.9)
    retried = []
    for seed in range(300):
        try:
            lv = generate(8, seed, config=cfg, guard_lethal_runs=False)
        except Unsatisfiable:
            continue
        if lv.seed != seed:
            retried.append((seed, lv))
            if len(retried) == 3:
                break
    assert retried
    for seed, lv in retried:
        assert not validate(build_level(8, seed, cfg, guard_lethal_runs=False), cfg).ok
        sequence = [seed]
        for _ in range(cfg.max_generation_attempts - 1):
            sequence.append(next_seed(sequence[-1]))
        assert lv.seed in sequence[1:]
        assert validate(lv, cfg).ok
        assert generate(8, lv.seed, config=cfg, guard_lethal_runs=False) == lv

def test_spacing_holds_level_wide_with_short_segments():
    # 2-unit segments are narrower than the enemy gap, so clashes can span several segments
    cfg = replace(DEFAULT_CONFIG, segment_length=2.0, base_obstacle_density=1.0, obstacle_cap=1.0,
                  base_enemy_density=0.3)
    for seed in range(10):
        lv = generate(10, seed, config=cfg)
        assert lv.parameters.segment_count > 50
        hazards = lv.obstacles + lv.enemies
        assert hazards and lv.enemies
        for i, a in enumerate(hazards):
            for b in hazards[i + 1:]:
                assert not too_close(a, b, cfg), (seed, a.x, b.x)
        assert check_spacing(lv, cfg) == []

def test_replay_from_recorded_seed():
    lv = generate(3)
    assert generate(3, lv.seed) == lv

def test_generated_levels_hold_every_invariant():
    cfg = DEFAULT_CONFIG
    for lvl in range(1, 31):
        lv = generate(lvl, seed=lvl * 7919)
        assert validate(lv, cfg).ok
        assert check_spacing(lv, cfg) == []
        assert check_completable(lv, cfg)
        segs = lv.segments
        assert segs[0].role is SegmentRole.SPAWN and segs[0].hazards == ()
        assert segs[-1].role is SegmentRole.STORE
        assert sum(1 for s in segs if s.role is SegmentRole.SPAWN) == 1
        assert sum(1 for s in segs if s.role is SegmentRole.STORE) == 1
        assert segs[0].start_x == 0.0 and segs[-1].end_x == lv.length
        for a, b in zip(segs, segs[1:]):
            assert a.end_x == b.start_x
        assert lv.player_spawn == (0.0, 0.0)
        assert lv.level_end_position == (lv.length, 0.0)
        for m in lv.money:
            assert m.y in (0.0, cfg.money_elevated_y)

def test_early_levels_never_get_late_kinds():
    lv = generate(1, seed=5)
    assert ObstacleKind.DITCH not in {o.payload.kind for o in lv.obstacles}

def test_to_dict_is_json_ready():
    lv = generate(4, seed=9)
    d = json.loads(json.dumps(lv.to_dict()))
    assert d["seed"] == 9
    assert d["parameters"]["segment_count"] == len(d["segments"])
    assert d["segments"][0]["role"] == "spawn"
    assert sum(len(s["obstacles"]) for s in d["segments"]) == lv.obstacle_count
    assert sum(m["value"] for s in d["segments"] for m in s["money"]) == lv.total_money_value
