import logging
from typing import List, Optional

from pysat.solvers import Solver, SolverNames

from lazysmt.cnf.cnf_types import CnfDocument
from lazysmt.core.errors import ConfigError
from lazysmt.engines.base import SatEngine

logger = logging.getLogger(__name__)

def known_solver_names() -> List[str]:
    names = []
    for aliases in vars(SolverNames).values():
        if isinstance(aliases, tuple):
            names.extend(aliases)
    return names

class PySatEngine(SatEngine):
    """SAT engine backed by PySAT. Every call runs on a fresh solver instance."""
    def __init__(self, solver_name: str = "g3"):
        if solver_name not in known_solver_names():
            raise ConfigError(f"Unknown PySAT solver '{solver_name}'")
        self.solver_name = solver_name

    @property
    def name(self) -> str:
        return f"pysat:{self.solver_name}"

    def solve(self, cnf: CnfDocument) -> Optional[List[int]]:
        if cnf.has_empty_clause:
            return None

        formula = cnf.to_pysat()
        with Solver(name=self.solver_name, bootstrap_with=formula.clauses) as solver:
            if not solver.solve():
                return None
            model = solver.get_model() or []

        values = {abs(lit): lit for lit in model if abs(lit) <= formula.nv}
        # Variables the solver never saw are free; report them false
        return [values.get(v, -v) for v in range(1, formula.nv + 1)]
