from lazysmt.engines.base import SatEngine
from lazysmt.engines.pysat_engine import PySatEngine, known_solver_names

__all__ = ["SatEngine", "PySatEngine", "known_solver_names"]
