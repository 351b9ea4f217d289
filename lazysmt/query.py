import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, List, Optional, Union

from lazysmt.atoms import Atom, Literal, as_literal
from lazysmt.core.errors import InconsistentAssumptionsError
from lazysmt.driver import LazySMTSolver
from lazysmt.solution.types import SolveResult

logger = logging.getLogger(__name__)

def ask(proposition: Union[Atom, Literal],
        assumptions: Iterable[Iterable[Union[Atom, Literal]]] = (),
        solver_factory: Optional[Callable[[], LazySMTSolver]] = None,
        parallel: bool = True) -> Optional[bool]:
    """
    Three-valued query: does ``proposition`` follow from ``assumptions``?

    Returns True if the assumptions entail it, False if they entail its
    negation, and None if neither can be shown. Each of the two solves gets
    its own solver from ``solver_factory``.
    """
    literal = as_literal(proposition)
    base: List[list] = [list(clause) for clause in assumptions]
    with_true = base + [[literal]]
    with_false = base + [[~literal]]
    factory = solver_factory if solver_factory else LazySMTSolver.from_config

    def run(formula) -> SolveResult:
        return factory().solve(formula)

    if parallel:
        with ThreadPoolExecutor(max_workers=2) as pool:
            true_future = pool.submit(run, with_true)
            false_future = pool.submit(run, with_false)
            true_result = true_future.result()
            false_result = false_future.result()
    else:
        true_result = run(with_true)
        false_result = run(with_false)

    if true_result.is_unsat and false_result.is_unsat:
        raise InconsistentAssumptionsError(f"Assumptions are inconsistent (asked about {literal})")
    if false_result.is_unsat:
        return True
    if true_result.is_unsat:
        return False
    logger.debug(f"ask({literal}): undetermined ({true_result.status.value}/{false_result.status.value})")
    return None
