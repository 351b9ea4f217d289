import pytest
from lazysmt.atoms import Proposition, Reals
from lazysmt.core.errors import InconsistentAssumptionsError
from lazysmt.driver import LazySMTSolver
from lazysmt.query import ask

x, y = Reals("x y")

@pytest.mark.parametrize("parallel", [True, False])
def test_entailed(parallel):
    assert ask(x >= -1, [[x >= 0]], solver_factory=LazySMTSolver, parallel=parallel) is True

@pytest.mark.parametrize("parallel", [True, False])
def test_refuted(parallel):
    assert ask(x <= -1, [[x >= 0]], solver_factory=LazySMTSolver, parallel=parallel) is False

def test_undetermined():
    assert ask(y >= 0, [[x >= 0]], solver_factory=LazySMTSolver) is None

def test_negated_proposition():
    assert ask(~(x <= -1), [[x >= 0]], solver_factory=LazySMTSolver) is True

def test_disjunctive_assumptions():
    # x >= 1 or y >= 1, and y <= 0: so x >= 1
    assumptions = [[x >= 1, y >= 1], [y <= 0]]
    assert ask(x >= 0, assumptions, solver_factory=LazySMTSolver) is True

def test_boolean_assumptions():
    p, q = Proposition("p"), Proposition("q")
    assert ask(q, [[~p, q], [p]], solver_factory=LazySMTSolver) is True

def test_inconsistent_assumptions():
    with pytest.raises(InconsistentAssumptionsError):
        ask(y >= 0, [[x >= 0], [x <= -1]], solver_factory=LazySMTSolver)
    with pytest.raises(ValueError):
        ask(y >= 0, [[x >= 0], [x <= -1]], solver_factory=LazySMTSolver, parallel=False)

def test_exhausted_budget_is_undetermined():
    def factory():
        return LazySMTSolver(max_iterations=1)
    # The negated side needs a learned clause before it can be refuted
    assert ask(x >= -1, [[x >= 0]], solver_factory=factory) is None

def test_default_factory_reads_config(monkeypatch):
    monkeypatch.setenv("LAZYSMT_POLICY", "naive")
    assert ask(x >= -1, [[x >= 0]]) is True
