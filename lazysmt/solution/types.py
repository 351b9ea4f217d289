from enum import Enum
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from lazysmt.atoms import Atom, Literal, as_literal

class SolveStatus(str, Enum):
    SAT = "SAT"
    UNSAT = "UNSAT"
    UNKNOWN = "UNKNOWN"

@dataclass
class IterationRecord:
    """One SAT engine call and what the driver learned from it."""
    index: int
    # None when the SAT engine reported UNSAT
    assignment: Optional[Tuple[Literal, ...]] = None
    conflict_clause: Optional[FrozenSet[Literal]] = None

@dataclass
class SolveResult:
    """
    Outcome of one lazy SMT solve.
    """
    status: SolveStatus
    # Boolean witness: atom -> truth value, total over the formula's atoms
    witness: Optional[Dict[Atom, bool]] = None
    # Values of theory symbols agreeing with the witness
    model: Dict[str, Fraction] = field(default_factory=dict)

    iterations: int = 0
    conflict_clauses: List[FrozenSet[Literal]] = field(default_factory=list)
    # Theory atoms the oracle could not check; a SAT answer may be unsound if non-empty
    opaque_atoms: FrozenSet[Atom] = frozenset()
    trace: List[IterationRecord] = field(default_factory=list)

    time_taken: float = 0.0

    @property
    def is_sat(self) -> bool:
        return self.status == SolveStatus.SAT

    @property
    def is_unsat(self) -> bool:
        return self.status == SolveStatus.UNSAT

    def value(self, item: Union[Atom, Literal]) -> bool:
        if self.witness is None:
            raise ValueError(f"No witness for a {self.status.value} result")
        lit = as_literal(item)
        return self.witness[lit.atom] == lit.positive

    def satisfies(self, formula: Iterable[Iterable[Union[Atom, Literal]]]) -> bool:
        """Check the witness against the boolean structure of a formula."""
        return all(any(self.value(lit) for lit in clause) for clause in formula)

    def serialize(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "iterations": self.iterations,
            "conflict_clauses": [sorted(str(l) for l in c) for c in self.conflict_clauses],
            "witness": {str(a): v for a, v in self.witness.items()} if self.witness else None,
            "model": {k: str(v) for k, v in self.model.items()},
            "opaque_atoms": sorted(str(a) for a in self.opaque_atoms),
            "time_taken": self.time_taken,
        }
