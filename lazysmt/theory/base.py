import abc
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Dict, Optional, Sequence, Tuple

from lazysmt.atoms import Atom, Literal

@dataclass
class TheoryVerdict:
    """
    Outcome of a theory consistency check.
    An inconsistent verdict may carry an explanation: a subset of the checked
    literals that is inconsistent on its own.
    """
    consistent: bool
    explanation: Optional[Tuple[Literal, ...]] = None
    # Satisfying values for the theory symbols, when consistent
    model: Dict[str, Fraction] = field(default_factory=dict)


class TheoryOracle(abc.ABC):
    @property
    def provides_explanations(self) -> bool:
        """Whether inconsistent verdicts carry an explanation the driver may use."""
        return False

    @abc.abstractmethod
    def validate(self, atom: Atom) -> None:
        """Raise UnsupportedAtomError if the oracle cannot reason about atom."""
        pass

    @abc.abstractmethod
    def check(self, literals: Sequence[Literal]) -> TheoryVerdict:
        pass
