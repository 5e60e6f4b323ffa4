"""Bulk comparison of the heuristic variants over ranges of moduli.

Everything here goes through compute_inverse in heuristic-only mode, one
independent call per pair, so the analysis never sees search internals.
"""

import csv
from dataclasses import astuple, dataclass, fields
from typing import Iterable, Iterator, List, Optional

from inverse_mod.algorithm.euclid import gcd
from inverse_mod.config import PRESETS, Mode
from inverse_mod.inverse import compute_inverse


@dataclass(frozen=True, slots=True)
class AnalysisRow:
    base: int
    modulus: int
    naive_success: bool
    corrected_success: bool
    backtracking_success: bool
    corrected_steps: Optional[int]
    backtracking_steps: Optional[int]
    backtracking_nodes: int


@dataclass(frozen=True, slots=True)
class ModulusSummary:
    modulus: int
    pairs: int
    naive_rate: float
    corrected_rate: float
    backtracking_rate: float
    avg_backtracking_steps: Optional[float]


def coprime_bases(modulus: int, samples: int = 0) -> List[int]:
    """Bases in [1, modulus) coprime to modulus, the first `samples` if set."""
    bases = [base for base in range(1, modulus) if gcd(base, modulus) == 1]
    if samples > 0:
        return bases[:samples]
    return bases


def analyze_pair(base: int, modulus: int) -> AnalysisRow:
    outcomes = {
        name: compute_inverse(base, modulus, Mode.HEURISTIC_ONLY, config=preset())
        for name, preset in PRESETS.items()
    }
    corrected = outcomes["corrected"]
    backtracking = outcomes["backtracking"]
    return AnalysisRow(
        base=base,
        modulus=modulus,
        naive_success=outcomes["naive"].success,
        corrected_success=corrected.success,
        backtracking_success=backtracking.success,
        corrected_steps=len(corrected.multipliers) if corrected.success else None,
        backtracking_steps=len(backtracking.multipliers) if backtracking.success else None,
        backtracking_nodes=backtracking.explored_nodes,
    )


def analyze_range(max_modulus: int, *, min_modulus: int = 2, samples_per_modulus: int = 0) -> Iterator[AnalysisRow]:
    if min_modulus < 2:
        raise ValueError(f"min_modulus must be at least 2, got {min_modulus}")
    for modulus in range(min_modulus, max_modulus + 1):
        for base in coprime_bases(modulus, samples_per_modulus):
            yield analyze_pair(base, modulus)


def summarize(rows: Iterable[AnalysisRow]) -> List[ModulusSummary]:
    by_modulus = {}
    for row in rows:
        by_modulus.setdefault(row.modulus, []).append(row)

    summary = []
    for modulus in sorted(by_modulus):
        group = by_modulus[modulus]
        n = len(group)
        steps = [row.backtracking_steps for row in group if row.backtracking_steps is not None]
        summary.append(ModulusSummary(
            modulus=modulus,
            pairs=n,
            naive_rate=sum(row.naive_success for row in group) / n,
            corrected_rate=sum(row.corrected_success for row in group) / n,
            backtracking_rate=sum(row.backtracking_success for row in group) / n,
            avg_backtracking_steps=sum(steps) / len(steps) if steps else None,
        ))
    return summary


def write_csv(rows: Iterable[AnalysisRow], path: str) -> int:
    """Write rows to `path` and return how many were written."""
    count = 0
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([field.name for field in fields(AnalysisRow)])
        for row in rows:
            writer.writerow(["" if value is None else int(value) for value in astuple(row)])
            count += 1
    return count
