from lazysmt.solution.types import SolveStatus, SolveResult, IterationRecord

__all__ = ["SolveStatus", "SolveResult", "IterationRecord"]
