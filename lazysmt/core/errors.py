class LazySMTError(Exception):
    """Base exception for all lazysmt related errors."""
    pass

class EncodingLookupError(LazySMTError, LookupError):
    """Raised when an atom or variable id is missing from an encoding table."""
    pass

class UnsupportedAtomError(LazySMTError):
    """Raised when a theory oracle cannot reason about an atom at all."""
    def __init__(self, atom, reason: str = ""):
        self.atom = atom
        message = f"Unsupported atom: {atom}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)

class OracleContractError(LazySMTError):
    """Raised when a theory oracle returns an explanation that breaks its contract."""
    pass

class TheoryError(LazySMTError):
    """Raised when the theory backend fails to decide a consistency query."""
    pass

class ConfigError(LazySMTError):
    """Raised when solver configuration is invalid."""
    pass

class InconsistentAssumptionsError(LazySMTError, ValueError):
    """Raised when the assumptions of a query contradict each other."""
    pass
