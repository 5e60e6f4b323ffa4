from dataclasses import dataclass, field
from typing import Tuple

from inverse_mod.errors import BudgetExhausted, StopReason


@dataclass(frozen=True, slots=True)
class SearchState:
    """Immutable, versioned snapshot of one in-flight search.

    Forward steps append a multiplier and a remainder together; backtracking
    truncates both sequences at the same index. The remainder sequence is
    always one longer than the multiplier sequence, since remainders[0] is
    the seed.
    """

    modulus: int
    multipliers: Tuple[int, ...] = field(default_factory=tuple)
    remainders: Tuple[int, ...] = field(default_factory=tuple)
    state_version: int = 0

    def __post_init__(self):
        if len(self.remainders) != len(self.multipliers) + 1:
            raise ValueError(
                f"expected {len(self.multipliers) + 1} remainders for "
                f"{len(self.multipliers)} multipliers, got {len(self.remainders)}"
            )
        for idx, remainder in enumerate(self.remainders):
            if not 0 <= remainder < self.modulus:
                raise ValueError(f"remainders[{idx}] = {remainder} outside [0, {self.modulus})")
        for idx, multiplier in enumerate(self.multipliers):
            if multiplier <= 0:
                raise ValueError(f"multipliers[{idx}] = {multiplier} is not positive")

    @classmethod
    def seed(cls, base: int, modulus: int) -> "SearchState":
        return cls(modulus=modulus, remainders=(base % modulus,))

    @property
    def remainder(self) -> int:
        return self.remainders[-1]

    @property
    def step_count(self) -> int:
        return len(self.multipliers)

    def extend(self, multiplier: int, remainder: int) -> "SearchState":
        """Append one step."""
        return SearchState(
            modulus=self.modulus,
            multipliers=self.multipliers + (multiplier,),
            remainders=self.remainders + (remainder,),
            state_version=self.state_version + 1,
        )

    def truncate(self, index: int) -> "SearchState":
        """Drop step `index` (0-based) and every step after it."""
        if not 0 <= index <= self.step_count:
            raise IndexError(f"step index {index} out of range for {self.step_count} steps")
        return SearchState(
            modulus=self.modulus,
            multipliers=self.multipliers[:index],
            remainders=self.remainders[:index + 1],
            state_version=self.state_version + 1,
        )


@dataclass(slots=True)
class SearchBudget:
    """Node and backtrack counters for a single search.

    Each visit or backtrack is charged before it is performed, so a search
    can never do more work than its caps allow.
    """

    max_nodes: int = 2000
    max_backtracks: int = 5
    explored_nodes: int = 0
    backtracks: int = 0

    def visit(self) -> None:
        if self.explored_nodes >= self.max_nodes:
            raise BudgetExhausted(StopReason.NODE_BUDGET, self.max_nodes)
        self.explored_nodes += 1

    def spend_backtrack(self) -> None:
        if self.backtracks >= self.max_backtracks:
            raise BudgetExhausted(StopReason.BACKTRACK_BUDGET, self.max_backtracks)
        self.backtracks += 1
