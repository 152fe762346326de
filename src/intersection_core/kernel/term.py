"""
src/intersection_core/kernel/term.py
Término Inmutable v2.1.
Coeficiente racional (sympy) + vector canónico de exponentes sobre x_i y Delta_{i,j}.
"""
from dataclasses import dataclass, field
from fractions import Fraction
from typing import Any, Dict, FrozenSet, Mapping, Tuple, Union

from sympy import Rational

from ..generators import Delta, Generator, X
from ..hashing.canonization import Canonizer, ExponentItems


def as_rational(value: Any) -> Rational:
    """int, Fraction, str ('1/2') o números sympy -> Rational exacto."""
    if isinstance(value, Rational):
        return value
    return Rational(value)


@dataclass(frozen=True)
class Term:
    """
    Monomio con coeficiente.
    Invariante: el término de coeficiente 0 es el cero canónico y no tiene exponentes.
    Nunca se muta; toda edición produce un Term nuevo.
    """
    coefficient: Any = 1
    exponents: ExponentItems = ()
    _lookup: Dict[Generator, int] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        coeff = as_rational(self.coefficient)
        items = () if coeff == 0 else Canonizer.sort_exponents(self.exponents)
        object.__setattr__(self, 'coefficient', coeff)
        object.__setattr__(self, 'exponents', items)
        object.__setattr__(self, '_lookup', dict(items))

    # --- Constructores Estáticos ---
    @staticmethod
    def make(coefficient: Any = 1, exponents: Union[Mapping[Generator, int], ExponentItems, None] = None) -> 'Term':
        return Term(coefficient, exponents or ())

    @staticmethod
    def zero() -> 'Term':
        return Term(0)

    @staticmethod
    def one() -> 'Term':
        return Term(1)

    @staticmethod
    def of(*gens: Generator, coefficient: Any = 1) -> 'Term':
        """Term.of(X(1), Delta(1, 2), Delta(1, 2)) -> x1*D_1_2^2"""
        return Term(coefficient, tuple((gen, 1) for gen in gens))

    # --- Introspección ---
    @property
    def is_zero(self) -> bool:
        return self.coefficient == 0

    @property
    def monomial(self) -> ExponentItems:
        """Clave de agrupación: el vector de exponentes sin coeficiente."""
        return self.exponents

    @property
    def degree(self) -> int:
        return sum(exp for _, exp in self.exponents)

    def exponent(self, gen: Generator) -> int:
        return self._lookup.get(gen, 0)

    def x_exponents(self) -> Tuple[Tuple[int, int], ...]:
        return tuple((gen.i, exp) for gen, exp in self.exponents if isinstance(gen, X))

    def delta_exponents(self) -> Tuple[Tuple[Tuple[int, int], int], ...]:
        return tuple(((gen.i, gen.j), exp) for gen, exp in self.exponents if isinstance(gen, Delta))

    @property
    def x_indices(self) -> FrozenSet[int]:
        return frozenset(i for i, _ in self.x_exponents())

    @property
    def delta_pairs(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(pair for pair, _ in self.delta_exponents())

    @property
    def delta_indices(self) -> FrozenSet[int]:
        return frozenset(idx for pair in self.delta_pairs for idx in pair)

    @property
    def touched_indices(self) -> FrozenSet[int]:
        """Índices que aparecen en algún factor, x o Delta."""
        return self.x_indices | self.delta_indices

    def is_reduced(self) -> bool:
        """
        Punto fijo de las tres relaciones:
        exponentes en {0, 1} y soportes de x y de Delta disjuntos.
        """
        if self.is_zero:
            return True
        if any(exp > 1 for _, exp in self.exponents):
            return False
        return not (self.x_indices & self.delta_indices)

    # --- Edición Funcional ---
    def scale(self, factor: Any) -> 'Term':
        return Term(self.coefficient * as_rational(factor), self.exponents)

    def update(self, factor: Any = 1, changes: Mapping[Generator, int] = None) -> 'Term':
        """
        Multiplica el coeficiente por `factor` y suma `changes` a los exponentes.
        Un exponente resultante negativo es un error de contrato.
        """
        if self.is_zero:
            return self
        exps = dict(self.exponents)
        for gen, diff in (changes or {}).items():
            exps[gen] = exps.get(gen, 0) + diff
        return Term(self.coefficient * as_rational(factor), exps)

    def times(self, other: 'Term') -> 'Term':
        """Producto de términos: coeficientes multiplicados, exponentes sumados."""
        if self.is_zero or other.is_zero:
            return Term.zero()
        return Term(self.coefficient * other.coefficient, Canonizer.merge(self.exponents, other.exponents))

    # --- Aritmética ---
    def __mul__(self, other: Any) -> 'Term':
        if isinstance(other, Term):
            return self.times(other)
        if isinstance(other, (X, Delta)):
            return self * Term.of(other)
        if isinstance(other, (int, Fraction, Rational)):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other: Any) -> 'Term':
        return self * other

    def __neg__(self) -> 'Term':
        return self.scale(-1)

    def __repr__(self):
        if self.is_zero:
            return "0"
        factors = [gen.name if exp == 1 else f"{gen.name}^{exp}" for gen, exp in self.exponents]
        if not factors:
            return str(self.coefficient)
        if self.coefficient == 1:
            return "*".join(factors)
        return "*".join([str(self.coefficient)] + factors)
