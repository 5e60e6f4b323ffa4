import pytest

from inverse_mod.algorithm.backtracking import BacktrackingController, earliest_odd_index
from inverse_mod.algorithm.engine import ReductionEngine, Step
from inverse_mod.algorithm.euclid import gcd
from inverse_mod.algorithm.search_state import SearchBudget
from inverse_mod.config import SearchConfig
from inverse_mod.errors import StopReason

PARITY_ONLY_NAIVE = SearchConfig(
    use_corrected_baseline=False,
    enable_local_offset_retry=False,
    backtrack_on_shared_factor=False,
)


def test_earliest_odd_index() -> None:
    assert earliest_odd_index((2, 4, 5, 7)) == 2
    assert earliest_odd_index((3,)) == 0
    assert earliest_odd_index((2, 4)) is None
    assert earliest_odd_index(()) is None


class TestForwardSearch:
    """Test suite for searches that never hit a dead end"""

    @pytest.mark.parametrize(
        "base,modulus,multipliers,remainders",
        [
            (3, 7, (3, 4), (3, 2, 1)),
            (8, 5, (2,), (3, 1)),
            (31, 37, (2, 2, 3, 19), (31, 25, 13, 2, 1)),
        ],
    )
    def test_sequences(self, base, modulus, multipliers, remainders) -> None:
        """Test the baseline rule alone reaches remainder 1"""
        result = BacktrackingController().search(base, modulus)
        assert result.found
        assert result.state.multipliers == multipliers
        assert result.state.remainders == remainders
        assert result.backtracks == 0
        assert result.stop_reason is None

    def test_base_one(self) -> None:
        """Test a seed of 1 needs no steps at all"""
        result = BacktrackingController().search(1, 10)
        assert result.found
        assert result.state.multipliers == ()
        assert result.state.remainders == (1,)
        assert result.explored_nodes == 0

    def test_zero_seed(self) -> None:
        """Test a multiple of the modulus stops before any node is explored"""
        result = BacktrackingController().search(24, 12)
        assert not result.found
        assert result.stop_reason is StopReason.DEAD_END
        assert result.state.remainders == (0,)
        assert result.explored_nodes == 0


class TestRecovery:
    """Test suite for dead-end recovery"""

    def test_backtrack_rescues_five_mod_twelve(self) -> None:
        """Test 5 mod 12 is rescued by bumping the first multiplier from 3 to 5"""
        result = BacktrackingController().search(5, 12)
        assert result.found
        assert result.state.multipliers == (5,)
        assert result.state.remainders == (5, 1)
        assert result.backtracks == 1
        # two baseline proposals, five offsets, one replayed step
        assert result.explored_nodes == 8

    def test_naive_baseline_with_backtrack(self) -> None:
        """Test the zero dead end of the naive rule is rescued the same way"""
        config = SearchConfig(use_corrected_baseline=False)
        result = BacktrackingController(config).search(5, 12)
        assert result.found
        assert result.state.multipliers == (5,)
        assert result.backtracks == 1

    @pytest.mark.parametrize("config", [SearchConfig.naive(), SearchConfig.corrected()])
    def test_without_recovery(self, config: SearchConfig) -> None:
        """Test 5 mod 12 dead-ends at remainder 3 without any recovery"""
        result = BacktrackingController(config).search(5, 12)
        assert not result.found
        assert result.stop_reason is StopReason.DEAD_END
        assert result.state.remainders == (5, 3)
        assert result.backtracks == 0

    def test_offset_retry_accepts_first_progressing_multiplier(self) -> None:
        """Test the window substitutes the first k+j that strictly decreases the remainder"""
        engine = ReductionEngine(12)
        budget = SearchBudget()
        failed = Step(previous=5, multiplier=2, remainder=10)
        retry = BacktrackingController()._retry_offsets(engine, failed, budget)
        assert retry == Step(previous=5, multiplier=3, remainder=3)
        assert budget.explored_nodes == 1

    def test_offset_retry_exhausts_window(self) -> None:
        """Test every offset is charged as a node when none of them helps"""
        engine = ReductionEngine(12)
        budget = SearchBudget()
        failed = engine.propose(3)
        controller = BacktrackingController(SearchConfig(offset_window=3))
        assert controller._retry_offsets(engine, failed, budget) is None
        assert budget.explored_nodes == 3

    def test_recovery_leaves_clean_paths_alone(self) -> None:
        """Test pairs the bare corrected rule solves get the same path with recovery on"""
        for modulus in range(2, 60):
            for base in range(1, modulus):
                if gcd(base, modulus) != 1:
                    continue
                bare = BacktrackingController(SearchConfig.corrected()).search(base, modulus)
                if bare.found:
                    full = BacktrackingController().search(base, modulus)
                    assert full.state.multipliers == bare.state.multipliers
                    assert full.state.remainders == bare.state.remainders

    def test_parity_only_skips_shared_factor_dead_end(self) -> None:
        """Test the strict parity gate ignores a stagnant odd remainder"""
        config = SearchConfig(backtrack_on_shared_factor=False)
        result = BacktrackingController(config).search(5, 12)
        assert not result.found
        assert result.stop_reason is StopReason.DEAD_END
        assert result.backtracks == 0

    def test_parity_trap_backtracks(self) -> None:
        """Test an even remainder driven to zero under an even modulus triggers backtracking"""
        # 3 mod 10: r=3, k=4 -> 2, then k=5 -> 0. The earliest odd multiplier is
        # the failing 5, and bumping it never helps, so the budget runs out.
        result = BacktrackingController(PARITY_ONLY_NAIVE).search(3, 10)
        assert not result.found
        assert result.stop_reason is StopReason.BACKTRACK_BUDGET
        assert result.backtracks == 5
        assert result.explored_nodes == 7
        assert result.state.remainders == (3, 2)

    def test_parity_trap_without_odd_multiplier(self) -> None:
        """Test the backtrack is inapplicable when every multiplier is even"""
        config = SearchConfig(use_corrected_baseline=False, backtrack_on_shared_factor=False)
        result = BacktrackingController(config).search(7, 12)
        assert not result.found
        assert result.stop_reason is StopReason.DEAD_END
        assert result.backtracks == 0

    def test_known_failure_seven_mod_twelve(self) -> None:
        """Test 7 mod 12 exhausts the backtrack budget under the default configuration"""
        result = BacktrackingController().search(7, 12)
        assert not result.found
        assert result.stop_reason is StopReason.BACKTRACK_BUDGET
        assert result.backtracks == 5
        assert result.explored_nodes == 12
        assert result.state.remainders == (7, 2)


class TestBudgets:
    """Test suite for the termination caps"""

    def test_iteration_limit(self) -> None:
        """Test the iteration cap stops a path that would otherwise succeed"""
        result = BacktrackingController(SearchConfig(max_iterations=2)).search(31, 37)
        assert not result.found
        assert result.stop_reason is StopReason.ITERATION_LIMIT
        assert result.state.step_count == 2

    def test_node_budget(self) -> None:
        """Test the node cap stops the search"""
        result = BacktrackingController(SearchConfig(max_nodes=2)).search(31, 37)
        assert not result.found
        assert result.stop_reason is StopReason.NODE_BUDGET
        assert result.explored_nodes == 2
        assert result.state.remainders == (31, 25, 13)

    def test_backtrack_budget(self) -> None:
        """Test a zero backtrack budget refuses the first backtrack"""
        result = BacktrackingController(SearchConfig(max_backtracks=0)).search(5, 12)
        assert not result.found
        assert result.stop_reason is StopReason.BACKTRACK_BUDGET
        assert result.backtracks == 0


class TestSearchProperties:
    """Test suite for properties over ranges of inputs"""

    def test_accepted_paths_strictly_decrease(self) -> None:
        """Test every found path ends in 1 with strictly decreasing remainders"""
        for modulus in range(2, 70):
            for base in range(1, modulus):
                if gcd(base, modulus) != 1:
                    continue
                result = BacktrackingController().search(base, modulus)
                state = result.state
                assert len(state.remainders) == len(state.multipliers) + 1
                assert all(a > b for a, b in zip(state.remainders, state.remainders[1:]))
                if result.found:
                    assert state.remainder == 1
                assert result.explored_nodes <= 2000
                assert result.backtracks <= 5

    def test_deterministic(self) -> None:
        """Test identical inputs give identical results"""
        controller = BacktrackingController()
        for base, modulus in [(5, 12), (7, 12), (31, 37), (123, 1000)]:
            assert controller.search(base, modulus) == controller.search(base, modulus)
