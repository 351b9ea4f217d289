from lazysmt.theory.base import TheoryOracle, TheoryVerdict
from lazysmt.theory.lra import LinearArithmeticOracle

__all__ = ["TheoryOracle", "TheoryVerdict", "LinearArithmeticOracle"]
