import math
from typing import Sequence

from inverse_mod.errors import InternalInconsistencyError


def assemble_inverse(base: int, modulus: int, multipliers: Sequence[int], remainders: Sequence[int]) -> int:
    """Reduce an accepted multiplier sequence to the inverse and validate it.

    Any failed check means the engine or controller produced a sequence it
    should not have accepted, so it is reported as an internal inconsistency
    rather than as an ordinary search failure.
    """
    if len(remainders) != len(multipliers) + 1:
        raise InternalInconsistencyError(
            f"{len(multipliers)} multipliers but {len(remainders)} remainders"
        )
    if remainders[-1] != 1:
        raise InternalInconsistencyError(f"accepted sequence ends in remainder {remainders[-1]}, not 1")

    inverse = math.prod(multipliers) % modulus
    if (inverse * base) % modulus != 1:
        raise InternalInconsistencyError(
            f"({inverse} * {base}) mod {modulus} = {(inverse * base) % modulus}, expected 1"
        )
    return inverse
