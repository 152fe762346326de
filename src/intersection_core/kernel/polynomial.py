"""
src/intersection_core/kernel/polynomial.py
Polinomio Formal v1.3.
Suma formal inmutable de Terms. Antes de reducir puede contener monomios repetidos;
la suma y el producto consolidan (agrupan coeficientes por monomio).
"""
from fractions import Fraction
from typing import Any, Dict, Iterable, Iterator, Tuple

from sympy import Rational

from ..generators import Delta, Generator, X, sort_key
from ..hashing.canonization import ExponentItems
from .term import Term, as_rational

_SCALARS = (int, Fraction, Rational)


def _monomial_key(monomial: ExponentItems) -> Tuple:
    # Grado descendente, después orden canónico de generadores
    degree = sum(exp for _, exp in monomial)
    return (-degree, tuple(sort_key(gen) + (exp,) for gen, exp in monomial))


class Polynomial:
    """
    Handle inmutable sobre una tupla de términos.
    El polinomio vacío (o solo de ceros) es la identidad aditiva.
    """
    __slots__ = ('terms',)

    def __init__(self, terms: Iterable[Term] = ()):
        object.__setattr__(self, 'terms', tuple(terms))

    def __setattr__(self, name, value):
        raise AttributeError("Polynomial es inmutable")

    # --- Constructores Estáticos ---
    @staticmethod
    def zero() -> 'Polynomial':
        return Polynomial()

    @staticmethod
    def constant(value: Any) -> 'Polynomial':
        return Polynomial((Term(value),))

    @staticmethod
    def generator(gen: Generator, coefficient: Any = 1) -> 'Polynomial':
        return Polynomial((Term(coefficient, ((gen, 1),)),))

    @staticmethod
    def coerce(obj: Any) -> 'Polynomial':
        if isinstance(obj, Polynomial): return obj
        if isinstance(obj, Term): return Polynomial((obj,))
        if isinstance(obj, (X, Delta)): return Polynomial.generator(obj)
        if isinstance(obj, _SCALARS): return Polynomial.constant(obj)
        raise TypeError(f"No se puede convertir {type(obj)} a Polynomial")

    # --- Consolidación ---
    def collect(self) -> 'Polynomial':
        """Agrupa monomios iguales, elimina ceros y ordena canónicamente."""
        counts: Dict[ExponentItems, Rational] = {}
        for term in self.terms:
            if term.is_zero:
                continue
            counts[term.monomial] = counts.get(term.monomial, 0) + term.coefficient
        return Polynomial(
            Term(coeff, mono)
            for mono, coeff in sorted(counts.items(), key=lambda kv: _monomial_key(kv[0]))
            if coeff != 0
        )

    def as_dict(self) -> Dict[ExponentItems, Rational]:
        return {term.monomial: term.coefficient for term in self.collect()}

    @property
    def is_zero(self) -> bool:
        return all(term.is_zero for term in self.terms)

    @property
    def degree(self) -> int:
        """Grado total máximo; -1 para el polinomio nulo."""
        return max((term.degree for term in self.terms if not term.is_zero), default=-1)

    def homogeneous_part(self, degree: int) -> 'Polynomial':
        return Polynomial(term for term in self.terms if not term.is_zero and term.degree == degree)

    def map_terms(self, fn) -> 'Polynomial':
        """Aplica fn: Term -> Term a cada término y consolida."""
        return Polynomial(fn(term) for term in self.terms).collect()

    # --- Aritmética ---
    def __add__(self, other: Any) -> 'Polynomial':
        try:
            other = Polynomial.coerce(other)
        except TypeError:
            return NotImplemented
        return Polynomial(self.terms + other.terms).collect()

    __radd__ = __add__

    def __neg__(self) -> 'Polynomial':
        return Polynomial(-term for term in self.terms)

    def __sub__(self, other: Any) -> 'Polynomial':
        try:
            other = Polynomial.coerce(other)
        except TypeError:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other: Any) -> 'Polynomial':
        return (-self) + other

    def __mul__(self, other: Any) -> 'Polynomial':
        if isinstance(other, _SCALARS):
            factor = as_rational(other)
            return Polynomial(term.scale(factor) for term in self.terms).collect()
        try:
            other = Polynomial.coerce(other)
        except TypeError:
            return NotImplemented
        products = []
        for left in self.terms:
            for right in other.terms:
                products.append(left * right)
        return Polynomial(products).collect()

    __rmul__ = __mul__

    def __pow__(self, power: int) -> 'Polynomial':
        if not isinstance(power, int) or power < 0:
            raise ValueError(f"Potencia no soportada: {power!r}")
        result = Polynomial.constant(1)
        for _ in range(power):
            result = result * self
        return result

    # --- Dunders de Reflexión ---
    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __eq__(self, other):
        if isinstance(other, _SCALARS + (Term, X, Delta)):
            other = Polynomial.coerce(other)
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self):
        return hash(frozenset(self.as_dict().items()))

    def __repr__(self):
        collected = self.collect()
        if not collected.terms:
            return "0"
        return " + ".join(repr(term) for term in collected.terms)
