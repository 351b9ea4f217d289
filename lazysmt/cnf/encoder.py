from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Union

from lazysmt.atoms import Atom, Literal, as_literal
from lazysmt.cnf.cnf_types import CnfDocument
from lazysmt.core.errors import EncodingLookupError

LiteralLike = Union[Atom, Literal]

class EncodingTable:
    """
    Bijection between atoms and dense SAT variable ids.
    Ids are handed out in first-seen order starting at 1 and never change
    for the lifetime of the table.
    """
    def __init__(self):
        self._atom_to_id: Dict[Atom, int] = {}
        self._id_to_atom: Dict[int, Atom] = {}
        self._next_id: int = 1

    @property
    def max_id(self) -> int:
        return self._next_id - 1

    def __len__(self) -> int:
        return len(self._atom_to_id)

    def __contains__(self, atom: Atom) -> bool:
        return atom in self._atom_to_id

    def declare(self, atom: Atom) -> int:
        """
        Declare an atom. Returns the existing id if already declared.
        """
        if not isinstance(atom, Atom):
            raise TypeError(f"Expected an Atom, got {type(atom).__name__}")
        if atom in self._atom_to_id:
            return self._atom_to_id[atom]

        vid = self._next_id
        self._atom_to_id[atom] = vid
        self._id_to_atom[vid] = atom
        self._next_id += 1
        return vid

    def id_for(self, atom: Atom) -> int:
        try:
            return self._atom_to_id[atom]
        except KeyError:
            raise EncodingLookupError(f"Atom {atom} is not in the encoding table") from None

    def atom_for(self, vid: int) -> Atom:
        try:
            return self._id_to_atom[vid]
        except KeyError:
            raise EncodingLookupError(f"Variable id {vid} is not in the encoding table") from None

    def encode_literal(self, literal: LiteralLike) -> int:
        lit = as_literal(literal)
        vid = self.declare(lit.atom)
        return vid if lit.positive else -vid

    def decode_literal(self, value: int) -> Literal:
        if value == 0:
            raise ValueError("0 is not a valid signed literal")
        return Literal(self.atom_for(abs(value)), value > 0)

    def atoms(self) -> List[Atom]:
        """Atoms in id order."""
        return [self._id_to_atom[i] for i in range(1, self._next_id)]


def _ordered(clause: Iterable[LiteralLike]) -> List[Literal]:
    # Sets carry no order of their own; sort them so id allocation is reproducible
    if isinstance(clause, (set, frozenset)):
        items = sorted((as_literal(x) for x in clause), key=str)
    else:
        items = [as_literal(x) for x in clause]
    return list(dict.fromkeys(items))


@dataclass
class Encoding:
    """A propositional formula together with the table that produced it."""
    cnf: CnfDocument
    table: EncodingTable = field(default_factory=EncodingTable)

    def add_clause(self, clause: Iterable[LiteralLike]) -> List[int]:
        """Encode and append a clause. Clauses are only ever appended."""
        encoded = encode_clause(clause, self.table)
        self.cnf.clauses.append(encoded)
        self.cnf.num_vars = self.table.max_id
        return encoded


def encode_clause(clause: Iterable[LiteralLike], table: EncodingTable) -> List[int]:
    if isinstance(clause, (Atom, Literal)):
        raise TypeError("A clause must be a collection of literals, not a single literal")
    return sorted({table.encode_literal(lit) for lit in _ordered(clause)}, key=lambda x: (abs(x), x))


def encode(formula: Iterable[Iterable[LiteralLike]]) -> Encoding:
    """
    Encode a CNF formula over atoms into integer CNF with a fresh table.
    """
    table = EncodingTable()
    clauses = [encode_clause(clause, table) for clause in formula]
    return Encoding(cnf=CnfDocument(num_vars=table.max_id, clauses=clauses), table=table)


def decode(assignment: Sequence[int], table: EncodingTable) -> List[Literal]:
    """
    Map a signed integer assignment back to literals. Pure; raises
    EncodingLookupError for ids the table never handed out.
    """
    return [table.decode_literal(value) for value in assignment]
