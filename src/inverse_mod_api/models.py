from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from inverse_mod.outcome import Method, Outcome, Reason


class OutcomeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)

    success: bool
    inverse: Optional[int] = None
    method: Optional[Method] = None
    multipliers: List[int] = []
    remainders: List[int] = []
    explored_nodes: int = 0
    reason: Optional[Reason] = None
    gcd: Optional[int] = None
    fallback_reason: Optional[Reason] = None

    @classmethod
    def from_outcome(cls, outcome: Outcome) -> "OutcomeModel":
        if outcome.success:
            return cls(
                success=True,
                inverse=outcome.inverse,
                method=outcome.method,
                multipliers=list(outcome.multipliers),
                remainders=list(outcome.remainders),
                explored_nodes=outcome.explored_nodes,
                fallback_reason=outcome.fallback_reason,
            )
        return cls(
            success=False,
            reason=outcome.reason,
            gcd=outcome.gcd,
            remainders=list(outcome.remainders),
            explored_nodes=outcome.explored_nodes,
        )


class StepsResponse(BaseModel):
    steps: str
    outcome: OutcomeModel


class ResultResponse(BaseModel):
    result: str
    inverse: Optional[int] = None
    outcome: OutcomeModel


class ExplanationResponse(BaseModel):
    explanation: str
