"""
Atoms, literals and a small builder for linear constraints.

Atoms are immutable and compared structurally, so the same proposition
written twice collapses to one encoding id. Linear constraints are normalised
to ``sum(c_i * x_i) op k`` with ``op`` in ``<=``, ``<``, ``==``; ``w >= x`` and
``x <= w`` build the same atom.
"""
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterable, Mapping, Tuple, Union

Number = Union[int, float, Fraction]

LINEAR_OPS = ("<=", "<", "==")

def _to_fraction(value: Number) -> Fraction:
    if isinstance(value, bool):
        raise TypeError("Booleans are not numeric coefficients")
    if isinstance(value, float):
        # Parse the decimal text so 0.1 stays 1/10
        return Fraction(str(value))
    if isinstance(value, (int, Fraction)):
        return Fraction(value)
    raise TypeError(f"Expected a rational number, got {type(value).__name__}")

def _format_terms(terms: Tuple[Tuple[str, Fraction], ...]) -> str:
    if not terms:
        return "0"
    parts = []
    for i, (name, coeff) in enumerate(terms):
        sign = "-" if coeff < 0 else "+"
        mag = abs(coeff)
        body = name if mag == 1 else f"{mag}*{name}"
        if i == 0:
            parts.append(f"-{body}" if sign == "-" else body)
        else:
            parts.append(f"{sign} {body}")
    return " ".join(parts)


@dataclass(frozen=True)
class Atom:
    """Base class for atoms. Equality and hashing are structural."""
    is_theory = False

    def __invert__(self) -> "Literal":
        return Literal(self, False)


@dataclass(frozen=True)
class Proposition(Atom):
    """A purely boolean atom with no theory meaning."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Predicate(Atom):
    """
    A theory-level assumption outside linear arithmetic, e.g. ``prime(x)``.
    """
    name: str
    args: Tuple[str, ...] = ()
    is_theory = True

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    def __str__(self) -> str:
        return f"{self.name}({', '.join(self.args)})"


@dataclass(frozen=True)
class LinearAtom(Atom):
    """
    A normalised linear constraint ``sum(c_i * x_i) op bound`` over the reals.

    Use :meth:`build` (or the comparison operators of :class:`LinearExpr`)
    rather than the constructor so the normal form is respected.
    """
    terms: Tuple[Tuple[str, Fraction], ...]
    op: str
    bound: Fraction
    is_theory = True

    def __post_init__(self):
        if self.op not in LINEAR_OPS:
            raise ValueError(f"Normalised operator must be one of {LINEAR_OPS}, got '{self.op}'")

    @classmethod
    def build(cls,
              coeffs: Union[Mapping[str, Number], Iterable[Tuple[str, Number]]],
              op: str,
              bound: Number = 0) -> "LinearAtom":
        bound = _to_fraction(bound)
        pairs = coeffs.items() if isinstance(coeffs, Mapping) else coeffs
        merged = {}
        for name, coeff in pairs:
            merged[name] = merged.get(name, Fraction(0)) + _to_fraction(coeff)
        terms = tuple(sorted((n, c) for n, c in merged.items() if c != 0))

        if op in (">=", ">"):
            terms = tuple((n, -c) for n, c in terms)
            bound = -bound
            op = "<=" if op == ">=" else "<"
        elif op == "==":
            if terms and terms[0][1] < 0:
                terms = tuple((n, -c) for n, c in terms)
                bound = -bound
        elif op not in LINEAR_OPS:
            raise ValueError(f"Unknown comparison operator '{op}'")
        return cls(terms, op, bound)

    @property
    def variables(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.terms)

    def evaluate(self, values: Mapping[str, Number]) -> bool:
        """Truth value of the constraint under a real assignment of its variables."""
        lhs = sum((c * _to_fraction(values[n]) for n, c in self.terms), Fraction(0))
        if self.op == "<=":
            return lhs <= self.bound
        if self.op == "<":
            return lhs < self.bound
        return lhs == self.bound

    def __str__(self) -> str:
        return f"{_format_terms(self.terms)} {self.op} {self.bound}"


@dataclass(frozen=True)
class Literal:
    """An atom paired with a polarity."""
    atom: Atom
    positive: bool = True

    def __invert__(self) -> "Literal":
        return Literal(self.atom, not self.positive)

    def is_complement(self, other: "Literal") -> bool:
        return self.atom == other.atom and self.positive != other.positive

    def __str__(self) -> str:
        return str(self.atom) if self.positive else f"~{self.atom}"


def as_literal(item: Union[Atom, Literal]) -> Literal:
    """Atoms stand for their positive literal."""
    if isinstance(item, Literal):
        return item
    if isinstance(item, Atom):
        return Literal(item, True)
    raise TypeError(f"Expected an Atom or Literal, got {type(item).__name__}")


@dataclass(frozen=True)
class LinearExpr:
    """A linear expression over named real symbols, used to build atoms."""
    coeffs: Tuple[Tuple[str, Fraction], ...] = ()
    constant: Fraction = Fraction(0)

    def __add__(self, other) -> "LinearExpr":
        other = _expr(other)
        merged = dict(self.coeffs)
        for name, coeff in other.coeffs:
            merged[name] = merged.get(name, Fraction(0)) + coeff
        terms = tuple(sorted((n, c) for n, c in merged.items() if c != 0))
        return LinearExpr(terms, self.constant + other.constant)

    __radd__ = __add__

    def __neg__(self) -> "LinearExpr":
        return self * -1

    def __sub__(self, other) -> "LinearExpr":
        return self + (-_expr(other))

    def __rsub__(self, other) -> "LinearExpr":
        return _expr(other) - self

    def __mul__(self, factor) -> "LinearExpr":
        if isinstance(factor, LinearExpr):
            raise TypeError("Product of two expressions is not linear")
        k = _to_fraction(factor)
        terms = tuple((n, c * k) for n, c in self.coeffs if c * k != 0)
        return LinearExpr(terms, self.constant * k)

    __rmul__ = __mul__

    def _relate(self, other, op: str) -> LinearAtom:
        diff = self - _expr(other)
        return LinearAtom.build(diff.coeffs, op, -diff.constant)

    def __le__(self, other) -> LinearAtom:
        return self._relate(other, "<=")

    def __lt__(self, other) -> LinearAtom:
        return self._relate(other, "<")

    def __ge__(self, other) -> LinearAtom:
        return self._relate(other, ">=")

    def __gt__(self, other) -> LinearAtom:
        return self._relate(other, ">")

    def eq(self, other) -> LinearAtom:
        return self._relate(other, "==")

    def __str__(self) -> str:
        text = _format_terms(self.coeffs)
        if self.constant:
            text += f" + {self.constant}" if self.constant > 0 else f" - {-self.constant}"
        return text


def _expr(value) -> LinearExpr:
    if isinstance(value, LinearExpr):
        return value
    return LinearExpr((), _to_fraction(value))


def Real(name: str) -> LinearExpr:
    return LinearExpr(((name, Fraction(1)),))


def Reals(names: str) -> Tuple[LinearExpr, ...]:
    """``Reals("w x y")`` -> three real symbols."""
    return tuple(Real(n) for n in names.split())
