import abc
from typing import List, Optional

from lazysmt.cnf.cnf_types import CnfDocument

class SatEngine(abc.ABC):
    """
    Black-box propositional solver.

    ``solve`` returns None for an unsatisfiable formula, otherwise one signed
    literal per variable ``1..cnf.num_vars``.
    """
    @property
    @abc.abstractmethod
    def name(self) -> str:
        pass

    @abc.abstractmethod
    def solve(self, cnf: CnfDocument) -> Optional[List[int]]:
        pass
