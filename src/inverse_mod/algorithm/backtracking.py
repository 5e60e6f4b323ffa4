from dataclasses import dataclass
from typing import Optional, Tuple

import structlog

from inverse_mod.algorithm.engine import ReductionEngine, Step
from inverse_mod.algorithm.euclid import gcd
from inverse_mod.algorithm.search_state import SearchBudget, SearchState
from inverse_mod.config import DEFAULT_CONFIG, SearchConfig
from inverse_mod.errors import BudgetExhausted, StopReason

log = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class SearchResult:
    found: bool
    state: SearchState
    explored_nodes: int
    backtracks: int
    stop_reason: Optional[StopReason] = None


def earliest_odd_index(multipliers: Tuple[int, ...]) -> Optional[int]:
    for idx, multiplier in enumerate(multipliers):
        if multiplier % 2 == 1:
            return idx
    return None


class BacktrackingController:
    """Drive the reduction engine forward and recover from dead ends.

    Every accepted step strictly decreases the remainder, so a path can
    neither cycle nor run forever; the iteration, node and backtrack caps
    bound the total work of the recovery strategies as well.
    """

    def __init__(self, config: SearchConfig = DEFAULT_CONFIG):
        self.config = config

    def search(self, base: int, modulus: int) -> SearchResult:
        state = SearchState.seed(base, modulus)
        budget = SearchBudget(
            max_nodes=self.config.max_nodes,
            max_backtracks=self.config.max_backtracks,
        )

        if state.remainder == 0:
            return self._result(False, state, budget, StopReason.DEAD_END)

        engine = ReductionEngine(modulus, corrected=self.config.use_corrected_baseline)
        try:
            while state.remainder > 1:
                next_state = self._advance(engine, state, budget)
                if next_state is None:
                    return self._result(False, state, budget, StopReason.DEAD_END)
                state = next_state
        except BudgetExhausted as e:
            log.debug("search budget exhausted", base=base, modulus=modulus, stop_reason=e.stop_reason.value, limit=e.limit)
            return self._result(False, state, budget, e.stop_reason)

        return self._result(True, state, budget)

    def _advance(self, engine: ReductionEngine, state: SearchState, budget: SearchBudget) -> Optional[SearchState]:
        """Take one forward step, recovering from a dead end if possible.

        Returns None when the dead end cannot be recovered from.
        """
        if state.step_count >= self.config.max_iterations:
            raise BudgetExhausted(StopReason.ITERATION_LIMIT, self.config.max_iterations)

        budget.visit()
        step = engine.propose(state.remainder)
        if step.progresses:
            return state.extend(step.multiplier, step.remainder)

        log.debug(
            "dead end",
            index=state.step_count,
            remainder=step.previous,
            multiplier=step.multiplier,
            next_remainder=step.remainder,
            kind=step.dead_end.value,
        )

        if self.config.enable_local_offset_retry:
            retry = self._retry_offsets(engine, step, budget)
            if retry is not None:
                return state.extend(retry.multiplier, retry.remainder)

        if self.config.enable_parity_backtrack and self._is_trap(engine, step):
            return self._backtrack(engine, state, step, budget)

        return None

    def _retry_offsets(self, engine: ReductionEngine, failed: Step, budget: SearchBudget) -> Optional[Step]:
        """Substitute k+1 .. k+W for the failing multiplier at the same step."""
        for offset in range(1, self.config.offset_window + 1):
            budget.visit()
            candidate = engine.step(failed.previous, failed.multiplier + offset)
            if candidate.progresses:
                log.debug("offset retry accepted", multiplier=candidate.multiplier, remainder=candidate.remainder)
                return candidate
        return None

    def _is_trap(self, engine: ReductionEngine, step: Step) -> bool:
        if engine.is_parity_trap(step):
            return True
        return self.config.backtrack_on_shared_factor and gcd(step.previous, engine.modulus) > 1

    def _backtrack(
        self,
        engine: ReductionEngine,
        state: SearchState,
        failed: Step,
        budget: SearchBudget,
    ) -> Optional[SearchState]:
        """Bump the earliest odd multiplier by 2 and replay from there.

        The failing multiplier takes part in the scan. If the replayed step
        still does not progress, the bumped value is again the earliest odd
        one and is bumped once more, until the backtrack budget runs out.
        """
        multipliers = state.multipliers + (failed.multiplier,)
        while True:
            index = earliest_odd_index(multipliers)
            if index is None:
                log.debug("no odd multiplier to backtrack to", multipliers=multipliers)
                return None

            budget.spend_backtrack()
            budget.visit()
            multiplier = multipliers[index] + 2
            state = state.truncate(index)
            step = engine.step(state.remainder, multiplier)
            log.debug(
                "backtrack",
                backtrack=budget.backtracks,
                index=index,
                multiplier=multiplier,
                remainder=step.remainder,
            )
            if step.progresses:
                return state.extend(step.multiplier, step.remainder)
            multipliers = state.multipliers + (multiplier,)

    @staticmethod
    def _result(
        found: bool,
        state: SearchState,
        budget: SearchBudget,
        stop_reason: Optional[StopReason] = None,
    ) -> SearchResult:
        return SearchResult(
            found=found,
            state=state,
            explored_nodes=budget.explored_nodes,
            backtracks=budget.backtracks,
            stop_reason=stop_reason,
        )
