"""
tests/intersection_core/kernel/test_ring.py
Tests del Puente sympy <-> Polynomial.
"""
import unittest

import sympy

from intersection_core.config import CurveConfig
from intersection_core.errors import MalformedGeneratorError
from intersection_core.generators import Delta, X
from intersection_core.kernel.polynomial import Polynomial
from intersection_core.kernel.reducer import reduce_polynomial
from intersection_core.kernel.ring import RingBridge
from intersection_core.kernel.term import Term


class TestRingBridge(unittest.TestCase):

    def setUp(self):
        self.config = CurveConfig(3, 3)
        self.ring = RingBridge(self.config)

    def test_generator_universe(self):
        names = [s.name for s in self.ring.symbols]
        self.assertEqual(names, ["x1", "x2", "x3", "D_1_2", "D_1_3", "D_2_3"])
        self.assertEqual(self.ring.x(2), sympy.Symbol("x2"))
        self.assertEqual(self.ring.delta(1, 3), sympy.Symbol("D_1_3"))
        with self.assertRaises(MalformedGeneratorError):
            self.ring.x(4)

    def test_from_expr_collects(self):
        x1, d12 = self.ring.x(1), self.ring.delta(1, 2)
        poly = self.ring.from_expr(x1 * d12 + 2 * x1 * d12)
        self.assertEqual(poly, Polynomial([Term(3, {X(1): 1, Delta(1, 2): 1})]))

    def test_rational_coefficients(self):
        poly = self.ring.from_expr(sympy.Rational(1, 2) * self.ring.x(1))
        self.assertEqual(poly.terms[0].coefficient, sympy.Rational(1, 2))

    def test_foreign_symbols_rejected(self):
        with self.assertRaises(MalformedGeneratorError):
            self.ring.from_expr(sympy.Symbol("y") + self.ring.x(1))
        with self.assertRaises(MalformedGeneratorError):
            self.ring.from_expr(sympy.Symbol("x5"))

    def test_to_expr(self):
        x1, x2, d12 = self.ring.x(1), self.ring.x(2), self.ring.delta(1, 2)
        expr = (2 * x1 + 2 * x2 + d12) ** 2
        poly = self.ring.from_expr(expr)
        self.assertEqual(sympy.expand(self.ring.to_expr(poly) - expr), 0)
        self.assertEqual(self.ring.to_expr(Polynomial.zero()), 0)

    def test_reduction_through_sympy(self):
        """El flujo externo: sympy -> reducción -> sympy."""
        x1, x2, d12 = self.ring.x(1), self.ring.x(2), self.ring.delta(1, 2)
        reduced = reduce_polynomial(self.ring.from_expr(d12 ** 2 + x1 * d12), self.config)
        self.assertEqual(self.ring.to_expr(reduced), -3 * x1 * x2)


if __name__ == "__main__":
    unittest.main()
