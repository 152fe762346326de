"""
src/intersection_core/kernel/ring.py
Puente con el Anillo Polinomial (sympy).
Construye los símbolos de C^n y traduce entre expresiones sympy y Polynomial.
"""
from typing import Dict, List, Tuple

import sympy

from ..config import CurveConfig
from ..generators import Delta, Generator, X, parse
from .polynomial import Polynomial
from .term import Term


class RingBridge:
    """
    Anillo Q[x_1..x_n, D_i_j] de sympy para una configuración fija.
    Orden de generadores: x_1..x_n y después D_i_j en orden ascendente de pares.
    """

    def __init__(self, config: CurveConfig):
        self.config = config
        self.generators: Tuple[Generator, ...] = tuple(
            [X(i) for i in config.indices()] + list(config.deltas())
        )
        self.symbols: Tuple[sympy.Symbol, ...] = tuple(sympy.Symbol(gen.name) for gen in self.generators)
        self._by_name: Dict[str, sympy.Symbol] = {s.name: s for s in self.symbols}

    def x(self, i: int) -> sympy.Symbol:
        return self.symbol(X(i))

    def delta(self, i: int, j: int) -> sympy.Symbol:
        return self.symbol(Delta(i, j))

    def symbol(self, gen: Generator) -> sympy.Symbol:
        self.config.validate_generator(gen)
        return self._by_name[gen.name]

    # =========================================================================
    # sympy -> Polynomial
    # =========================================================================
    def from_expr(self, expr) -> Polynomial:
        """
        Expande `expr` como polinomio en los generadores del anillo.
        Un símbolo ajeno al anillo es un generador mal formado.
        """
        expr = sympy.sympify(expr)
        for sym in expr.free_symbols:
            # parse() y validate_generator() fallan con el error tipado
            self.config.validate_generator(parse(sym.name))
        poly = sympy.Poly(expr, *self.symbols, domain=sympy.QQ)
        terms: List[Term] = []
        for monom, coeff in poly.terms():
            exps = {gen: exp for gen, exp in zip(self.generators, monom) if exp}
            terms.append(Term(sympy.Rational(coeff), exps))
        return Polynomial(terms)

    # =========================================================================
    # Polynomial -> sympy
    # =========================================================================
    def term_to_expr(self, term: Term):
        expr = term.coefficient
        for gen, exp in term.exponents:
            expr = expr * self.symbol(gen) ** exp
        return expr

    def to_expr(self, poly) -> sympy.Expr:
        poly = Polynomial.coerce(poly)
        return sympy.Add(*[self.term_to_expr(term) for term in poly.collect()])
