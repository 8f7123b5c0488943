from __future__ import annotations

from typing import Sequence


class GenerationError(Exception):
    """Base class for failures surfaced by level generation."""


class Unsatisfiable(GenerationError):
    """Raised when no seed in the retry sequence produced a valid level.

    Callers should fall back to a hand-authored level or ask for another level number.
    """

    def __init__(self, level_number: int, seeds: Sequence[int], errors: Sequence[str]):
        self.level_number = level_number
        self.seeds = tuple(seeds)
        self.errors = tuple(errors)
        first = self.errors[0] if self.errors else "no details"
        super().__init__(
            f"level {level_number}: no valid layout after {len(self.seeds)} attempt(s) "
            f"(last failure: {first})"
        )
