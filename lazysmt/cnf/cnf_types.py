from typing import List
from pydantic import BaseModel, Field, field_validator
from pysat.formula import CNF

class CnfDocument(BaseModel):
    """
    Propositional CNF over dense integer variables ``1..num_vars``.

    An empty clause is allowed and stands for falsity.
    """
    num_vars: int = Field(ge=0)
    clauses: List[List[int]] = Field(default_factory=list)

    @field_validator('clauses')
    @classmethod
    def validate_clauses(cls, v: List[List[int]], info) -> List[List[int]]:
        num_vars = info.data.get('num_vars')
        for i, clause in enumerate(v):
            for lit in clause:
                if lit == 0:
                    raise ValueError(f"Literal 0 is invalid in clause {i}")
                if num_vars is not None and abs(lit) > num_vars:
                    raise ValueError(f"Literal {lit} exceeds num_vars {num_vars} in clause {i}")
        return v

    @property
    def has_empty_clause(self) -> bool:
        return any(not c for c in self.clauses)

    def to_pysat(self) -> CNF:
        """Snapshot as a PySAT CNF; later appends to this document are not seen."""
        formula = CNF()
        formula.nv = self.num_vars
        formula.clauses = [list(c) for c in self.clauses]
        return formula
