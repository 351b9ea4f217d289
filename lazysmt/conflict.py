from enum import Enum
from typing import FrozenSet, Iterable

from lazysmt.atoms import Literal
from lazysmt.core.errors import OracleContractError

class ExplanationPolicy(str, Enum):
    """How much of a theory-inconsistent assignment a conflict clause blocks."""
    NAIVE = "naive"      # the whole theory part of the assignment
    MINIMAL = "minimal"  # the oracle's explanation, when it gives one

def build_conflict_clause(explanation: Iterable[Literal]) -> FrozenSet[Literal]:
    """
    Clause saying "not all of these hold together": the negation of every
    literal in the explanation.
    """
    clause = frozenset(~lit for lit in explanation)
    if not clause:
        raise OracleContractError("Empty explanation: the theory cannot be inconsistent on no literals")
    return clause
