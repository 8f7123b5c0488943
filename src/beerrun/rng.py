# src/beerrun/rng.py
# Park–Miller "minimal standard" stream, one instance per generation attempt.
# Nothing in here is module-level state: every consumer gets its instance passed in.

from dataclasses import dataclass, field
from typing import Sequence

A = 16807
M = 0x7FFFFFFF  # 2^31-1

SEED_MASK_32 = 0xFFFFFFFF
SEED_MASK_64 = 0xFFFFFFFFFFFFFFFF

# Knuth's MMIX constants; used to walk the retry seed sequence
LCG64_MUL = 6364136223846793005
LCG64_INC = 1442695040888963407


def pm_next(state: int) -> int:
    return (state * A) % M


def fmix32(h: int) -> int:
    """MurmurHash3 finaliser: spreads neighbouring seeds across the state space."""
    h &= SEED_MASK_32
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & SEED_MASK_32
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & SEED_MASK_32
    h ^= h >> 16
    return h


def state_from_seed(seed: int) -> int:
    # Park–Miller must never hold 0 (it would stay 0 forever), so map into 1..M-1
    return fmix32(seed) % (M - 1) + 1


def fold_seed(seed: int) -> int:
    """Fold a 64-bit caller seed down to the 32-bit seed SeededRandom takes."""
    seed &= SEED_MASK_64
    return (seed ^ (seed >> 32)) & SEED_MASK_32


def next_seed(seed: int) -> int:
    """Next seed of the deterministic retry sequence."""
    return (seed * LCG64_MUL + LCG64_INC) & SEED_MASK_64


def seed_for_level(level_number: int, entropy: int) -> int:
    """
    Seed used when the caller does not supply one: the level number in the
    high word, entropy in the low word, so two levels never share a stream
    even when the entropy source repeats.
    """
    return ((level_number & SEED_MASK_32) << 32 | (entropy & SEED_MASK_32)) & SEED_MASK_64


@dataclass
class SeededRandom:
    seed: int
    state: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not (0 <= self.seed <= SEED_MASK_32):
            raise ValueError(f"seed must be a 32-bit unsigned integer, got {self.seed}")
        self.state = state_from_seed(self.seed)

    def next32(self) -> int:
        self.state = pm_next(self.state)
        return self.state

    def next_float(self) -> float:
        # state is 1..M-1, so this is 0 <= f < 1
        return (self.next32() - 1) / (M - 1)

    def next_int(self, low: int, high_exclusive: int) -> int:
        if high_exclusive <= low:
            raise ValueError(f"empty range [{low}, {high_exclusive})")
        span = high_exclusive - low
        return low + min(int(self.next_float() * span), span - 1)

    def uniform(self, a: float, b: float) -> float:
        return a + (b - a) * self.next_float()

    def chance(self, p: float) -> bool:
        return self.next_float() < p

    def weighted_index(self, weights: Sequence[float]) -> int:
        """Index drawn proportionally to `weights` (all must be >= 0, sum > 0)."""
        total = sum(weights)
        if total <= 0:
            raise ValueError("weights must sum to a positive value")
        r = self.next_float() * total
        acc = 0.0
        for i, w in enumerate(weights):
            acc += w
            if r < acc:
                return i
        # float rounding can leave r == total; land on the last positive weight
        return max(i for i, w in enumerate(weights) if w > 0)
