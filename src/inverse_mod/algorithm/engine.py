"""Remainder-reduction engine.

Each step multiplies the running remainder r by a multiplier k chosen so that
r * k just passes the modulus, leaving r' = r * k mod modulus. The search
succeeds when the remainder reaches 1; the product of the multipliers is then
the inverse of the seed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class DeadEnd(Enum):
    ZERO = "zero"
    STAGNANT = "stagnant"


def baseline_multiplier(remainder: int, modulus: int, *, corrected: bool = True) -> int:
    """Smallest k with modulus < remainder * k.

    The naive rule (corrected=False) picks modulus / remainder when the
    remainder divides the modulus, which lands exactly on the modulus and
    produces a zero remainder. It is kept only to reproduce that behaviour.
    """
    if not 0 < remainder < modulus:
        raise ValueError(f"remainder must lie in (0, {modulus}), got {remainder}")
    if not corrected and modulus % remainder == 0:
        return modulus // remainder
    return modulus // remainder + 1


@dataclass(frozen=True, slots=True)
class Step:
    previous: int
    multiplier: int
    remainder: int

    @property
    def progresses(self) -> bool:
        return 0 < self.remainder < self.previous

    @property
    def dead_end(self) -> Optional[DeadEnd]:
        if self.remainder == 0:
            return DeadEnd.ZERO
        if self.remainder >= self.previous:
            return DeadEnd.STAGNANT
        return None


class ReductionEngine:

    def __init__(self, modulus: int, *, corrected: bool = True):
        if modulus < 2:
            raise ValueError(f"modulus must be at least 2, got {modulus}")
        self.modulus = modulus
        self.corrected = corrected

    def propose(self, remainder: int) -> Step:
        """Step from `remainder` with the baseline multiplier."""
        multiplier = baseline_multiplier(remainder, self.modulus, corrected=self.corrected)
        return self.step(remainder, multiplier)

    def step(self, remainder: int, multiplier: int) -> Step:
        return Step(
            previous=remainder,
            multiplier=multiplier,
            remainder=(remainder * multiplier) % self.modulus,
        )

    def is_parity_trap(self, step: Step) -> bool:
        """An even remainder driven to zero under an even modulus."""
        return step.remainder == 0 and step.previous % 2 == 0 and self.modulus % 2 == 0
