"""
lazysmt: a lazy SMT solver pairing a SAT engine with a theory oracle.
"""
from lazysmt.core import get_logger, SolverConfig
from lazysmt.core.errors import (
    LazySMTError,
    EncodingLookupError,
    UnsupportedAtomError,
    OracleContractError,
    TheoryError,
    ConfigError,
    InconsistentAssumptionsError,
)
from lazysmt.atoms import Atom, Proposition, Predicate, LinearAtom, LinearExpr, Literal, Real, Reals
from lazysmt.cnf import CnfDocument, Encoding, EncodingTable, encode, decode
from lazysmt.conflict import ExplanationPolicy, build_conflict_clause
from lazysmt.engines import SatEngine, PySatEngine
from lazysmt.theory import TheoryOracle, TheoryVerdict, LinearArithmeticOracle
from lazysmt.solution import SolveStatus, SolveResult, IterationRecord
from lazysmt.driver import DriverState, LazySMTSolver
from lazysmt.query import ask

__all__ = [
    "get_logger", "SolverConfig",
    "LazySMTError", "EncodingLookupError", "UnsupportedAtomError",
    "OracleContractError", "TheoryError", "ConfigError",
    "InconsistentAssumptionsError",
    "Atom", "Proposition", "Predicate", "LinearAtom", "LinearExpr", "Literal", "Real", "Reals",
    "CnfDocument", "Encoding", "EncodingTable", "encode", "decode",
    "ExplanationPolicy", "build_conflict_clause",
    "SatEngine", "PySatEngine",
    "TheoryOracle", "TheoryVerdict", "LinearArithmeticOracle",
    "SolveStatus", "SolveResult", "IterationRecord",
    "DriverState", "LazySMTSolver",
    "ask",
]
