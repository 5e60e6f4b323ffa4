"""Human-readable text built from outcome data.

Nothing here runs a search of its own except explain(), which calls
compute_inverse once and formats what it returns.
"""

from typing import List, Optional, Union

from inverse_mod.config import Mode, SearchConfig
from inverse_mod.inverse import compute_inverse
from inverse_mod.outcome import Method, Outcome

ALGORITHM_EXPLANATION = """\
Modular inverse by remainder reduction

Given positive integers x (base) and y (modulus), find z such that
(z * x) mod y = 1.

Start from r[0] = x mod y. At each step pick the multiplier
    k[i] = floor(y / r[i-1]) + 1,
the smallest k with y < r[i-1] * k, and set
    r[i] = (r[i-1] * k[i]) mod y.
Each accepted step must leave 0 < r[i] < r[i-1]. When r[n] = 1,
    z = (k[1] * k[2] * ... * k[n]) mod y.

A step that lands on 0 or does not decrease the remainder is a dead end.
The search first tries k+1 .. k+5 at that step, then bumps the earliest
odd multiplier by 2 and replays from there. Both recoveries are bounded,
so the heuristic can give up; guaranteed mode then answers with the
extended Euclidean algorithm.

Validation: (z * x) mod y == 1
"""


def format_steps(base: int, modulus: int, outcome: Outcome) -> str:
    """Narrate an outcome step by step."""
    lines: List[str] = [f"Calculating the inverse of {base} mod {modulus}...", ""]

    if not outcome.success:
        lines.append(f"No inverse found ({outcome.reason.value}): {outcome.message}")
        if outcome.remainders:
            lines.append(f"r[] = [{', '.join(str(r) for r in outcome.remainders)}]")
        return "\n".join(lines)

    remainders = outcome.remainders
    for n, multiplier in enumerate(outcome.multipliers, start=1):
        previous, current = remainders[n - 1], remainders[n]
        lines.append(
            f"Step {n}: {modulus} < ({previous} * {multiplier}), "
            f"(({previous} * {multiplier}) % {modulus}) = {current}"
        )

    if outcome.method is Method.EXTENDED_EUCLID:
        lines.append("")
        reason = outcome.fallback_reason.value if outcome.fallback_reason else "unknown"
        lines.append(f"Heuristic search gave up ({reason}); inverse taken from the extended Euclidean algorithm.")

    lines.append("")
    lines.append(f"(k[1] * k[2] * ... * k[n]) mod {modulus} = {outcome.inverse}")
    lines.append("")
    lines.append(f"k[] = [{', '.join(str(k) for k in outcome.multipliers)}]")
    lines.append(f"r[] = [{', '.join(str(r) for r in remainders)}]")
    lines.append(f"z = {outcome.inverse}")
    lines.append("")
    lines.append(f"Validation: (({outcome.inverse} * {base}) mod {modulus}) == 1 is {(outcome.inverse * base) % modulus == 1}")
    return "\n".join(lines)


def format_result(base: int, modulus: int, outcome: Outcome) -> str:
    if outcome.success:
        return f"Inverse of {base} mod {modulus} = {outcome.inverse}"
    return f"No inverse of {base} mod {modulus}: {outcome.message}"


def explain(
    base: int,
    modulus: int,
    mode: Union[Mode, str] = Mode.GUARANTEED,
    config: Optional[SearchConfig] = None,
) -> str:
    return format_steps(base, modulus, compute_inverse(base, modulus, mode, config=config))
