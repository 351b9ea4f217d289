import itertools

import pytest
from lazysmt.atoms import LinearAtom, Literal, Predicate, Proposition, Real, Reals
from lazysmt.conflict import ExplanationPolicy, build_conflict_clause
from lazysmt.core.errors import OracleContractError
from lazysmt.driver import LazySMTSolver
from lazysmt.engines import PySatEngine, SatEngine
from lazysmt.solution.types import SolveStatus
from lazysmt.theory import LinearArithmeticOracle, TheoryOracle, TheoryVerdict

SYMBOLS = "w x y z v u"

def bound_family(n):
    """
    n independent contradictions s <= -1 / s >= 0, tied together by one
    clause asking for at least one s >= 0.
    """
    syms = Reals(" ".join(SYMBOLS.split()[:n]))
    return [[s <= -1] for s in syms] + [[s >= 0 for s in syms]]

def ordering_formula():
    w, x, y, z = Reals("w x y z")
    return [[w >= x, w >= y], [x >= z, y >= z], [z >= w + 1]]

def naive_solver(**kwargs):
    return LazySMTSolver(policy=ExplanationPolicy.NAIVE, **kwargs)

def assert_sound(result, formula):
    assert result.is_sat
    assert result.satisfies(formula)
    for atom, value in result.witness.items():
        if isinstance(atom, LinearAtom):
            assert atom.evaluate(result.model) == value


def test_pure_boolean_formula_is_sat_first_time():
    a, b, c, d, e = (Proposition(n) for n in "ABCDE")
    formula = [[a, b], [c, d], [e]]
    result = LazySMTSolver().solve(formula)
    assert result.status == SolveStatus.SAT
    assert result.iterations == 1
    assert result.conflict_clauses == []
    assert result.satisfies(formula)
    assert result.value(e)

def test_ordering_example_minimal():
    formula = ordering_formula()
    result = LazySMTSolver().solve(formula)
    assert_sound(result, formula)
    # Four minimal conflicts exist, so at most four clauses are learned
    assert result.iterations <= 5

def test_ordering_example_naive():
    formula = ordering_formula()
    naive = naive_solver().solve(formula)
    assert_sound(naive, formula)
    assert naive.iterations <= 2 ** 5
    for clause in naive.conflict_clauses:
        assert len(clause) == 5

class EnumeratingEngine(SatEngine):
    """Proposes the first model in a fixed order: variable 1 first, true before false."""
    @property
    def name(self) -> str:
        return "enumerate"

    def solve(self, cnf):
        for values in itertools.product((True, False), repeat=cnf.num_vars):
            model = [v if value else -v for v, value in enumerate(values, start=1)]
            chosen = set(model)
            if all(any(lit in chosen for lit in clause) for clause in cnf.clauses):
                return model
        return None

def test_ordering_example_minimal_beats_naive():
    formula = ordering_formula()
    naive = naive_solver(sat_engine=EnumeratingEngine()).solve(formula)
    minimal = LazySMTSolver(sat_engine=EnumeratingEngine()).solve(formula)
    assert_sound(naive, formula)
    assert_sound(minimal, formula)
    # Five inconsistent candidates precede the first consistent one;
    # the two cycle cores w>=x>=z and w>=y>=z cover all of them
    assert naive.iterations == 6
    assert minimal.iterations == 3
    assert minimal.iterations < naive.iterations
    for clause in minimal.conflict_clauses:
        assert len(clause) == 3

def test_bound_contradictions_unsat():
    formula = bound_family(4)
    naive = naive_solver().solve(formula)
    minimal = LazySMTSolver().solve(formula)
    assert naive.status == SolveStatus.UNSAT
    assert minimal.status == SolveStatus.UNSAT
    assert naive.iterations == 16
    assert minimal.iterations == 5
    assert len(minimal.conflict_clauses) == 4
    for clause in minimal.conflict_clauses:
        assert len(clause) == 2

@pytest.mark.parametrize("n", [1, 2, 3, 4])
def test_iteration_counts_exponential_vs_linear(n):
    formula = bound_family(n)
    assert naive_solver().solve(formula).iterations == 2 ** n
    assert LazySMTSolver().solve(formula).iterations == n + 1

def test_degraded_oracle_falls_back_to_naive():
    solver = LazySMTSolver(oracle=LinearArithmeticOracle(explain=False))
    result = solver.solve(bound_family(3))
    assert result.is_unsat
    assert result.iterations == 8

def test_conflict_clauses_block_their_assignment():
    for solver in (naive_solver(), LazySMTSolver()):
        result = solver.solve(bound_family(3))
        seen = set()
        for record in result.trace:
            if record.assignment is None:
                continue
            assignment = frozenset(record.assignment)
            assert assignment not in seen
            seen.add(assignment)
            if record.conflict_clause is not None:
                assert all(~lit in assignment for lit in record.conflict_clause)
        assert result.trace[-1].assignment is None
        assert len(result.trace) == result.iterations

def test_sat_witness_is_total():
    formula = ordering_formula()
    result = LazySMTSolver().solve(formula)
    atoms = {a for clause in formula for a in clause}
    assert set(result.witness) == atoms

def test_opaque_atoms_pass_through():
    prime = Predicate("prime", ("x",))
    x = Real("x")
    formula = [[prime], [x >= 2]]
    result = LazySMTSolver().solve(formula)
    assert result.is_sat
    assert result.opaque_atoms == frozenset({prime})
    assert result.value(prime)
    # No theory reasoning about prime(x): contradicting facts are not caught
    assert LazySMTSolver().solve([[prime], [x.eq(4)]]).is_sat

def test_iteration_budget():
    result = naive_solver(max_iterations=3).solve(bound_family(4))
    assert result.status == SolveStatus.UNKNOWN
    assert result.iterations == 3
    assert result.witness is None

def test_empty_formula_and_empty_clause():
    result = LazySMTSolver().solve([])
    assert result.is_sat
    assert result.witness == {}
    assert LazySMTSolver().solve([[]]).is_unsat

def test_boolean_unsat_needs_no_theory():
    p = Proposition("p")
    result = LazySMTSolver().solve([[p], [~p]])
    assert result.is_unsat
    assert result.iterations == 1
    assert result.conflict_clauses == []

def test_alternate_sat_engine():
    formula = bound_family(2)
    result = LazySMTSolver(sat_engine=PySatEngine("m22")).solve(formula)
    assert result.is_unsat
    assert result.iterations == 3

def test_serialize():
    result = LazySMTSolver().solve(ordering_formula())
    data = result.serialize()
    assert data["status"] == "SAT"
    assert set(data["model"]) == {"w", "x", "y", "z"}

def test_build_conflict_clause():
    x = Real("x")
    explanation = [Literal(x <= -1), Literal(x >= 0)]
    assert build_conflict_clause(explanation) == frozenset({~(x <= -1), ~(x >= 0)})
    with pytest.raises(OracleContractError):
        build_conflict_clause([])


def test_naive_policy_default_oracle_skips_explanations():
    assert not naive_solver().oracle.provides_explanations
    assert LazySMTSolver().oracle.provides_explanations
    custom = LinearArithmeticOracle()
    assert naive_solver(oracle=custom).oracle is custom


class SilentOracle(TheoryOracle):
    """Rejects every check without saying why."""
    def __init__(self, claims_explanations):
        self.claims_explanations = claims_explanations

    @property
    def provides_explanations(self) -> bool:
        return self.claims_explanations

    def validate(self, atom):
        pass

    def check(self, literals):
        return TheoryVerdict(consistent=False)

def test_oracle_without_explanations_gets_naive_clauses():
    result = LazySMTSolver(oracle=SilentOracle(False)).solve(bound_family(2))
    assert result.is_unsat
    assert result.iterations == 4
    for clause in result.conflict_clauses:
        assert len(clause) == 4

def test_missing_promised_explanation_is_a_contract_error():
    with pytest.raises(OracleContractError):
        LazySMTSolver(oracle=SilentOracle(True)).solve(bound_family(2))


class StrayOracle(TheoryOracle):
    """Blames a literal the assignment never made true."""
    @property
    def provides_explanations(self) -> bool:
        return True

    def validate(self, atom):
        pass

    def check(self, literals):
        return TheoryVerdict(consistent=False, explanation=(~literals[0],))

def test_explanation_must_hold_in_assignment():
    x = Real("x")
    with pytest.raises(OracleContractError):
        LazySMTSolver(oracle=StrayOracle()).solve([[x >= 0]])
