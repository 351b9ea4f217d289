from lazysmt.core.errors import (
    LazySMTError,
    EncodingLookupError,
    UnsupportedAtomError,
    OracleContractError,
    TheoryError,
    ConfigError,
    InconsistentAssumptionsError,
)
from lazysmt.core.logging import get_logger
from lazysmt.core.config import SolverConfig

__all__ = [
    "LazySMTError", "EncodingLookupError", "UnsupportedAtomError",
    "OracleContractError", "TheoryError", "ConfigError",
    "InconsistentAssumptionsError",
    "get_logger",
    "SolverConfig",
]
