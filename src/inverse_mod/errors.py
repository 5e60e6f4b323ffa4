from enum import Enum


class StopReason(Enum):
    DEAD_END = "deadEnd"
    ITERATION_LIMIT = "iterationLimit"
    NODE_BUDGET = "nodeBudget"
    BACKTRACK_BUDGET = "backtrackBudget"


class InverseModError(Exception):
    pass


class InvalidInputError(InverseModError, ValueError):
    pass


class NotCoprimeError(InverseModError, ValueError):

    def __init__(self, base: int, modulus: int, gcd: int):
        super().__init__(f"{base} and {modulus} are not coprime (gcd = {gcd}), no inverse exists")
        self.gcd = gcd


class BudgetExhausted(InverseModError, RuntimeError):
    """Raised inside a search when one of its caps has been reached."""

    def __init__(self, stop_reason: StopReason, limit: int):
        super().__init__(f"search stopped: {stop_reason.value} (limit {limit})")
        self.stop_reason = stop_reason
        self.limit = limit


class InternalInconsistencyError(InverseModError, RuntimeError):
    """An accepted multiplier sequence failed its post-condition."""


class RemoteError(InverseModError, RuntimeError):
    pass
