import pytest

from beerrun.kinds import (
    DEFAULT_ENEMY_KIND, DEFAULT_OBSTACLE_KIND, ENEMY_TABLE, OBSTACLE_TABLE,
    EnemyKind, EnemyMovement, ObstacleKind, eligible,
)
from beerrun.levelgen.model import SegmentRole
from beerrun.render.palette import enemy_color, obstacle_color, role_color

def test_every_kind_has_a_table_entry():
    assert set(OBSTACLE_TABLE) == set(ObstacleKind)
    assert set(ENEMY_TABLE) == set(EnemyKind)

def test_defaults_are_safe_and_always_available():
    assert not OBSTACLE_TABLE[DEFAULT_OBSTACLE_KIND].lethal
    assert ENEMY_TABLE[DEFAULT_ENEMY_KIND].min_difficulty == 0.0

def test_lethal_classification():
    lethal = {k for k, s in OBSTACLE_TABLE.items() if s.lethal}
    assert lethal == {ObstacleKind.OPEN_MANHOLE, ObstacleKind.DITCH}

def test_enemy_movement_data():
    assert ENEMY_TABLE[EnemyKind.POLICE].movement is EnemyMovement.TOWARD_PLAYER
    assert ENEMY_TABLE[EnemyKind.CHURCH_MEMBER].movement is EnemyMovement.ACROSS_PATH
    assert ENEMY_TABLE[EnemyKind.POLICE].move_speed > ENEMY_TABLE[EnemyKind.CHURCH_MEMBER].move_speed

def test_eligible_respects_difficulty_window():
    early = {k for k, _ in eligible(OBSTACLE_TABLE, 0.3)}
    assert ObstacleKind.DITCH not in early
    assert ObstacleKind.CLOSED_MANHOLE in early
    late = {k for k, _ in eligible(OBSTACLE_TABLE, 2.0)}
    assert ObstacleKind.DITCH in late
    assert ObstacleKind.CLOSED_MANHOLE not in late
    assert {k for k, _ in eligible(ENEMY_TABLE, 0.3)} == {EnemyKind.CHURCH_MEMBER}

def test_palette_covers_every_variant():
    for k in ObstacleKind:
        assert len(obstacle_color(k)) == 3
    for k in EnemyKind:
        assert len(enemy_color(k)) == 3
    for r in SegmentRole:
        assert len(role_color(r)) == 3
    with pytest.raises(ValueError):
        obstacle_color("bush")
