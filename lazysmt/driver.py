"""
Lazy SMT driver.

A SAT engine proposes boolean assignments to the formula's atoms and a theory
oracle checks the theory part of each one. Every theory conflict becomes a
clause that blocks it, and the loop repeats until the SAT engine runs out of
assignments (UNSAT) or the oracle accepts one (SAT).

For a fixed set of n atoms each learned clause removes at least the
assignment that produced it, so the loop ends after at most 2**n SAT calls.
Oracles that introduce atoms of their own are not supported and come with no
such bound.
"""
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Set, Union

from lazysmt.atoms import Atom, Literal
from lazysmt.cnf.encoder import Encoding, decode, encode
from lazysmt.conflict import ExplanationPolicy, build_conflict_clause
from lazysmt.core.config import SolverConfig
from lazysmt.core.errors import OracleContractError, UnsupportedAtomError
from lazysmt.engines.base import SatEngine
from lazysmt.engines.pysat_engine import PySatEngine
from lazysmt.solution.types import IterationRecord, SolveResult, SolveStatus
from lazysmt.theory.base import TheoryOracle, TheoryVerdict
from lazysmt.theory.lra import LinearArithmeticOracle

logger = logging.getLogger(__name__)

Formula = Iterable[Iterable[Union[Atom, Literal]]]

class DriverState(str, Enum):
    SEARCHING = "SEARCHING"
    CHECKING = "CHECKING"
    SAT = "SAT"
    UNSAT = "UNSAT"
    UNKNOWN = "UNKNOWN"

TERMINAL_STATES = (DriverState.SAT, DriverState.UNSAT, DriverState.UNKNOWN)

@dataclass
class SolveSession:
    """Everything one solve call owns. Created per call, dropped on return."""
    encoding: Encoding
    state: DriverState = DriverState.SEARCHING
    iterations: int = 0
    assignment: List[Literal] = field(default_factory=list)
    model: Dict[str, Fraction] = field(default_factory=dict)
    conflict_clauses: list = field(default_factory=list)
    opaque_atoms: Set[Atom] = field(default_factory=set)
    trace: List[IterationRecord] = field(default_factory=list)


class LazySMTSolver:
    def __init__(self,
                 sat_engine: Optional[SatEngine] = None,
                 oracle: Optional[TheoryOracle] = None,
                 policy: Union[ExplanationPolicy, str] = ExplanationPolicy.MINIMAL,
                 max_iterations: Optional[int] = None):
        self.policy = ExplanationPolicy(policy)
        self.sat_engine = sat_engine if sat_engine else PySatEngine()
        # Naive conflict clauses ignore explanations
        self.oracle = oracle if oracle else LinearArithmeticOracle(
            explain=self.policy == ExplanationPolicy.MINIMAL)
        if self.policy == ExplanationPolicy.MINIMAL and not self.oracle.provides_explanations:
            logger.info(f"{type(self.oracle).__name__} gives no explanations; "
                        f"conflict clauses fall back to the naive policy")
        self.max_iterations = max_iterations

    @classmethod
    def from_config(cls, config: Optional[SolverConfig] = None) -> "LazySMTSolver":
        config = config if config else SolverConfig.from_env_or_file()
        oracle = LinearArithmeticOracle(
            explain=config.policy == ExplanationPolicy.MINIMAL.value,
            minimize=config.minimize_explanations,
            timeout_ms=config.theory_timeout_ms,
        )
        return cls(
            sat_engine=PySatEngine(config.sat_solver),
            oracle=oracle,
            policy=config.policy,
            max_iterations=config.max_iterations,
        )

    def solve(self, formula: Formula) -> SolveResult:
        """
        Decide a CNF formula over atoms.
        Returns a SAT result with a witness, an UNSAT result, or UNKNOWN when
        the iteration budget is exhausted.
        """
        start_time = time.time()
        session = SolveSession(encoding=encode(formula))
        logger.debug(f"Encoded {len(session.encoding.cnf.clauses)} clauses over "
                     f"{session.encoding.cnf.num_vars} atoms")

        while session.state not in TERMINAL_STATES:
            if session.state == DriverState.SEARCHING:
                self._search(session)
            else:
                self._check(session)

        result = SolveResult(
            status=SolveStatus(session.state.value),
            iterations=session.iterations,
            conflict_clauses=list(session.conflict_clauses),
            opaque_atoms=frozenset(session.opaque_atoms),
            trace=session.trace,
            time_taken=time.time() - start_time,
        )
        if session.state == DriverState.SAT:
            result.witness = {lit.atom: lit.positive for lit in session.assignment}
            result.model = session.model

        logger.info(f"Solve finished: {result.status.value} after {result.iterations} iterations, "
                    f"{len(result.conflict_clauses)} conflict clauses")
        return result

    def _search(self, session: SolveSession) -> None:
        if self.max_iterations is not None and session.iterations >= self.max_iterations:
            logger.warning(f"Iteration budget of {self.max_iterations} exhausted; giving up")
            session.state = DriverState.UNKNOWN
            return

        session.iterations += 1
        model = self.sat_engine.solve(session.encoding.cnf)
        if model is None:
            logger.debug(f"Iteration {session.iterations}: SAT engine reports UNSAT")
            session.trace.append(IterationRecord(index=session.iterations))
            session.state = DriverState.UNSAT
            return

        session.assignment = decode(model, session.encoding.table)
        session.trace.append(IterationRecord(index=session.iterations,
                                             assignment=tuple(session.assignment)))
        logger.debug(f"Iteration {session.iterations}: candidate "
                     f"{', '.join(str(l) for l in session.assignment)}")
        session.state = DriverState.CHECKING

    def _check(self, session: SolveSession) -> None:
        theory_literals = self._theory_literals(session)
        if theory_literals:
            verdict = self.oracle.check(theory_literals)
        else:
            verdict = TheoryVerdict(consistent=True)

        if verdict.consistent:
            session.model = verdict.model
            session.state = DriverState.SAT
            return

        explanation = self._explanation(verdict, theory_literals)
        clause = build_conflict_clause(explanation)
        assignment = set(session.assignment)
        if any(lit in assignment for lit in clause):
            raise OracleContractError("Conflict clause is not falsified by the assignment that triggered it")

        session.encoding.add_clause(clause)
        session.conflict_clauses.append(clause)
        session.trace[-1].conflict_clause = clause
        logger.debug(f"Iteration {session.iterations}: learned "
                     f"({' | '.join(sorted(str(l) for l in clause))})")
        session.state = DriverState.SEARCHING

    def _theory_literals(self, session: SolveSession) -> List[Literal]:
        literals = []
        for lit in session.assignment:
            if not lit.atom.is_theory:
                continue
            try:
                self.oracle.validate(lit.atom)
            except UnsupportedAtomError as e:
                if lit.atom not in session.opaque_atoms:
                    logger.warning(f"{e}; passing it through unchecked, SAT answers may be unsound")
                    session.opaque_atoms.add(lit.atom)
                continue
            literals.append(lit)
        return literals

    def _explanation(self, verdict: TheoryVerdict, theory_literals: List[Literal]) -> List[Literal]:
        if self.policy == ExplanationPolicy.NAIVE or not self.oracle.provides_explanations:
            return theory_literals
        if verdict.explanation is None:
            raise OracleContractError(
                f"{type(self.oracle).__name__} promises explanations but returned none for an inconsistent check")

        checked = set(theory_literals)
        stray = [lit for lit in verdict.explanation if lit not in checked]
        if stray:
            raise OracleContractError(
                f"Explanation literals not true in the current assignment: {', '.join(map(str, stray))}")
        return list(verdict.explanation)
