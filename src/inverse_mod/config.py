from dataclasses import dataclass
from enum import Enum


class Mode(Enum):
    HEURISTIC_ONLY = "heuristicOnly"
    GUARANTEED = "guaranteed"

    @property
    def uses_fallback(self) -> bool:
        return self is Mode.GUARANTEED


@dataclass(frozen=True, slots=True)
class SearchConfig:
    """Flags and budgets for one heuristic search.

    The defaults are the full heuristic: corrected baseline, windowed offset
    retry and the earliest-odd-multiplier backtrack. The presets below
    reproduce the earlier, weaker variants for comparison.
    """

    use_corrected_baseline: bool = True
    enable_local_offset_retry: bool = True
    enable_parity_backtrack: bool = True
    backtrack_on_shared_factor: bool = True

    offset_window: int = 5
    max_iterations: int = 200
    max_nodes: int = 2000
    max_backtracks: int = 5

    def __post_init__(self):
        for name in ("offset_window", "max_iterations", "max_nodes", "max_backtracks"):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")

    @classmethod
    def naive(cls) -> "SearchConfig":
        """The first published rule: no correction, no recovery."""
        return cls(
            use_corrected_baseline=False,
            enable_local_offset_retry=False,
            enable_parity_backtrack=False,
        )

    @classmethod
    def corrected(cls) -> "SearchConfig":
        return cls(enable_local_offset_retry=False, enable_parity_backtrack=False)

    @classmethod
    def backtracking(cls) -> "SearchConfig":
        return cls()


DEFAULT_CONFIG = SearchConfig()

PRESETS = {
    "naive": SearchConfig.naive,
    "corrected": SearchConfig.corrected,
    "backtracking": SearchConfig.backtracking,
}
