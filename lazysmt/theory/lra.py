import logging
from fractions import Fraction
from typing import Dict, List, Optional, Sequence

import z3

from lazysmt.atoms import Atom, LinearAtom, Literal
from lazysmt.core.errors import TheoryError, UnsupportedAtomError
from lazysmt.theory.base import TheoryOracle, TheoryVerdict

logger = logging.getLogger(__name__)

class LinearArithmeticOracle(TheoryOracle):
    """
    Consistency oracle for linear real arithmetic, backed by z3.

    Each literal is asserted under its own assumption marker so the unsat core
    names the responsible literals. With ``minimize`` the core is shrunk by
    deletion until dropping any single literal makes it consistent. With
    ``explain=False`` the oracle only answers yes/no.
    """
    def __init__(self, explain: bool = True, minimize: bool = True, timeout_ms: Optional[int] = None):
        self.explain = explain
        self.minimize = minimize
        self.timeout_ms = timeout_ms

    @property
    def provides_explanations(self) -> bool:
        return self.explain

    def validate(self, atom: Atom) -> None:
        if not isinstance(atom, LinearAtom):
            raise UnsupportedAtomError(atom, "not a linear real arithmetic constraint")

    def check(self, literals: Sequence[Literal]) -> TheoryVerdict:
        literals = list(dict.fromkeys(literals))
        for lit in literals:
            self.validate(lit.atom)
        if not literals:
            return TheoryVerdict(consistent=True)

        # A private context per call; z3 contexts must not be shared across threads
        ctx = z3.Context()
        solver = z3.Solver(ctx=ctx)
        if self.timeout_ms:
            solver.set("timeout", self.timeout_ms)

        symbols: Dict[str, z3.ArithRef] = {}
        markers = []
        for i, lit in enumerate(literals):
            marker = z3.Bool(f"lit!{i}", ctx)
            solver.add(z3.Implies(marker, self._to_z3(lit, symbols, ctx)))
            markers.append(marker)

        result = self._run(solver, markers)
        if result == z3.sat:
            model = solver.model()
            values = {name: self._value(model.eval(sym, model_completion=True))
                      for name, sym in symbols.items()}
            return TheoryVerdict(consistent=True, model=values)

        if not self.explain:
            return TheoryVerdict(consistent=False)

        index = {str(m): i for i, m in enumerate(markers)}
        core = sorted(index[str(m)] for m in solver.unsat_core())
        if self.minimize:
            core = self._minimize(solver, markers, core)
        logger.debug(f"Theory conflict over {len(core)} of {len(literals)} literals")
        return TheoryVerdict(consistent=False, explanation=tuple(literals[i] for i in core))

    def _minimize(self, solver: z3.Solver, markers: List[z3.BoolRef], core: List[int]) -> List[int]:
        """Deletion-based shrinking of an unsat core to a minimal one."""
        needed = list(core)
        i = 0
        while i < len(needed):
            trial = needed[:i] + needed[i + 1:]
            if self._run(solver, [markers[j] for j in trial]) == z3.unsat:
                needed = trial
            else:
                i += 1
        return needed

    def _run(self, solver: z3.Solver, assumptions: List[z3.BoolRef]) -> z3.CheckSatResult:
        result = solver.check(*assumptions)
        if result == z3.unknown:
            raise TheoryError(f"z3 could not decide consistency: {solver.reason_unknown()}")
        return result

    @staticmethod
    def _to_z3(lit: Literal, symbols: Dict[str, z3.ArithRef], ctx: z3.Context) -> z3.BoolRef:
        atom = lit.atom
        lhs = z3.RealVal(0, ctx)
        for name, coeff in atom.terms:
            if name not in symbols:
                symbols[name] = z3.Real(name, ctx)
            lhs = lhs + z3.RealVal(str(coeff), ctx) * symbols[name]
        bound = z3.RealVal(str(atom.bound), ctx)

        if atom.op == "<=":
            expr = lhs <= bound
        elif atom.op == "<":
            expr = lhs < bound
        else:
            expr = lhs == bound
        return expr if lit.positive else z3.Not(expr)

    @staticmethod
    def _value(value: z3.ExprRef) -> Fraction:
        if not z3.is_rational_value(value):
            raise TheoryError(f"Expected a rational model value, got {value}")
        return value.as_fraction()
