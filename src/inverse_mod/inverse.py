"""Single entry point for computing a modular inverse.

compute_inverse validates its inputs, applies the coprimality gate, runs the
backtracking heuristic and, in guaranteed mode, falls back to the extended
Euclidean algorithm when the heuristic gives up.
"""

from typing import Optional, Union

import structlog

from inverse_mod.algorithm.assembler import assemble_inverse
from inverse_mod.algorithm.backtracking import BacktrackingController, SearchResult
from inverse_mod.algorithm.euclid import gcd, inverse_by_extended_gcd
from inverse_mod.config import DEFAULT_CONFIG, Mode, SearchConfig
from inverse_mod.errors import InternalInconsistencyError, InvalidInputError
from inverse_mod.outcome import Failure, Method, Outcome, Reason, Success

log = structlog.get_logger()


def validate_inputs(base, modulus) -> None:
    """Raise InvalidInputError unless both values are positive integers."""
    for name, value in (("base", base), ("modulus", modulus)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInputError(f"{name} must be a positive integer, got {type(value).__name__} {value!r}")
        if value <= 0:
            raise InvalidInputError(f"{name} must be a positive integer, got {value}")


def compute_inverse(
    base: int,
    modulus: int,
    mode: Union[Mode, str] = Mode.GUARANTEED,
    *,
    config: Optional[SearchConfig] = None,
) -> Outcome:
    """Find z with (z * base) mod modulus == 1.

    In heuristic-only mode an exhausted search is reported as a failure. In
    guaranteed mode every coprime pair with modulus > 1 succeeds, through the
    extended Euclidean fallback if necessary.
    """
    mode = Mode(mode)
    config = config or DEFAULT_CONFIG

    try:
        validate_inputs(base, modulus)
    except InvalidInputError as e:
        return Failure(reason=Reason.INVALID_INPUT, message=str(e))

    divisor = gcd(base, modulus)
    reduced = base % modulus
    if reduced == 0:
        return Failure(
            reason=Reason.NOT_COPRIME,
            message=f"{base} is a multiple of {modulus}, no inverse exists",
            gcd=divisor,
        )
    if divisor != 1:
        return Failure(
            reason=Reason.NOT_COPRIME,
            message=f"{base} and {modulus} are not coprime (gcd = {divisor}), no inverse exists",
            gcd=divisor,
        )

    result = BacktrackingController(config).search(base, modulus)
    if result.found:
        try:
            inverse = assemble_inverse(base, modulus, result.state.multipliers, result.state.remainders)
            return Success(
                inverse=inverse,
                method=Method.HEURISTIC,
                multipliers=result.state.multipliers,
                remainders=result.state.remainders,
                explored_nodes=result.explored_nodes,
                backtracks=result.backtracks,
            )
        except InternalInconsistencyError as e:
            log.error(
                "internal inconsistency",
                base=base,
                modulus=modulus,
                multipliers=result.state.multipliers,
                remainders=result.state.remainders,
                error=str(e),
            )
            if not mode.uses_fallback:
                return Failure(
                    reason=Reason.INTERNAL_INCONSISTENCY,
                    message=str(e),
                    remainders=result.state.remainders,
                    explored_nodes=result.explored_nodes,
                )
    else:
        log.info(
            "heuristic search exhausted",
            base=base,
            modulus=modulus,
            stop_reason=result.stop_reason.value,
            explored_nodes=result.explored_nodes,
            backtracks=result.backtracks,
        )
        if not mode.uses_fallback:
            return Failure(
                reason=Reason.SEARCH_EXHAUSTED,
                message=f"heuristic search stopped ({result.stop_reason.value}) at remainder {result.state.remainder}",
                remainders=result.state.remainders,
                explored_nodes=result.explored_nodes,
                stop_reason=result.stop_reason,
            )

    reason = Reason.INTERNAL_INCONSISTENCY if result.found else Reason.SEARCH_EXHAUSTED
    return _fallback(base, modulus, result, reason)


def _fallback(base: int, modulus: int, result: SearchResult, reason: Reason) -> Success:
    """Extended Euclid answer, presented as the single step r[0] * z = 1."""
    inverse = inverse_by_extended_gcd(base, modulus)
    multipliers = (inverse,)
    remainders = (base % modulus, 1)
    assemble_inverse(base, modulus, multipliers, remainders)
    log.info("extended gcd fallback", base=base, modulus=modulus, inverse=inverse, fallback_reason=reason.value)
    return Success(
        inverse=inverse,
        method=Method.EXTENDED_EUCLID,
        multipliers=multipliers,
        remainders=remainders,
        explored_nodes=result.explored_nodes,
        backtracks=result.backtracks,
        fallback_reason=reason,
    )


def modular_inverse(
    base: int,
    modulus: int,
    mode: Union[Mode, str] = Mode.GUARANTEED,
    *,
    config: Optional[SearchConfig] = None,
) -> Optional[int]:
    """Return just the inverse, or None when none was found."""
    outcome = compute_inverse(base, modulus, mode, config=config)
    return outcome.inverse if outcome.success else None
