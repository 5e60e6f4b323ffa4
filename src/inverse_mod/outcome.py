from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, TypeAlias

from inverse_mod.errors import StopReason


class Method(Enum):
    HEURISTIC = "heuristic"
    EXTENDED_EUCLID = "extendedEuclid"


class Reason(Enum):
    NOT_COPRIME = "notCoprime"
    SEARCH_EXHAUSTED = "searchExhausted"
    INVALID_INPUT = "invalidInput"
    INTERNAL_INCONSISTENCY = "internalInconsistency"


@dataclass(frozen=True, slots=True)
class Success:
    inverse: int
    method: Method
    multipliers: Tuple[int, ...]
    remainders: Tuple[int, ...]
    explored_nodes: int = 0
    backtracks: int = 0
    # Set when the extended gcd answered, naming why the heuristic did not
    fallback_reason: Optional[Reason] = None

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """No inverse was produced.

    For SEARCH_EXHAUSTED, remainders holds the last accepted remainder
    sequence of the heuristic search.
    """

    reason: Reason
    message: str = ""
    gcd: Optional[int] = None
    remainders: Tuple[int, ...] = field(default_factory=tuple)
    explored_nodes: int = 0
    stop_reason: Optional[StopReason] = None

    @property
    def success(self) -> bool:
        return False


Outcome: TypeAlias = Success | Failure
