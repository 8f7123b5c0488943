# src/beerrun/render/palette.py
# Flat preview colours per kind/role. Shared by the pygame strip and the PNG tool.

from typing import Tuple

from ..kinds import EnemyKind, ObstacleKind
from ..levelgen.model import SegmentRole

RGB = Tuple[int, int, int]

SKY = (120, 170, 230)
GROUND = (110, 80, 50)
MONEY = (250, 210, 40)
SPAWN_MARK = (255, 255, 255)
END_MARK = (200, 40, 200)


def obstacle_color(kind: ObstacleKind) -> RGB:
    if kind is ObstacleKind.BUSH:           return ( 40, 140,  40)
    if kind is ObstacleKind.CURB:           return (170, 170, 170)
    if kind is ObstacleKind.CLOSED_MANHOLE: return ( 90,  90, 100)
    if kind is ObstacleKind.OPEN_MANHOLE:   return ( 20,  20,  20)
    if kind is ObstacleKind.DITCH:          return ( 60,  30,  10)
    raise ValueError(f"no colour for obstacle kind {kind!r}")


def enemy_color(kind: EnemyKind) -> RGB:
    if kind is EnemyKind.POLICE:        return ( 30,  60, 200)
    if kind is EnemyKind.CHURCH_MEMBER: return (230, 230, 230)
    raise ValueError(f"no colour for enemy kind {kind!r}")


def role_color(role: SegmentRole) -> RGB:
    # sky tint per segment role
    if role is SegmentRole.SPAWN:  return (150, 200, 240)
    if role is SegmentRole.EASY:   return (130, 185, 235)
    if role is SegmentRole.NORMAL: return (120, 170, 230)
    if role is SegmentRole.HARD:   return (150, 140, 200)
    if role is SegmentRole.STORE:  return (180, 210, 170)
    raise ValueError(f"no colour for role {role!r}")
