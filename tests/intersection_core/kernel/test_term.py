"""
tests/intersection_core/kernel/test_term.py
Tests del Término Inmutable.
Verifica: Cero canónico, Canonización de exponentes, Edición funcional y Aritmética.
"""
import dataclasses
import unittest
from fractions import Fraction

from sympy import Rational

from intersection_core.errors import MalformedGeneratorError
from intersection_core.generators import Delta, X
from intersection_core.kernel.term import Term


class TestTerm(unittest.TestCase):

    # =========================================================================
    # 1. INVARIANTES DE CONSTRUCCIÓN
    # =========================================================================

    def test_zero_is_exponent_free(self):
        t = Term(0, {X(1): 1, Delta(1, 2): 3})
        self.assertTrue(t.is_zero)
        self.assertEqual(t.exponents, ())
        self.assertEqual(t, Term.zero())

    def test_canonical_exponents(self):
        """Orden de inserción irrelevante; repetidos se acumulan; ceros se descartan."""
        a = Term(3, {Delta(1, 2): 1, X(2): 1, X(1): 1})
        b = Term(3, {X(1): 1, X(2): 1, Delta(1, 2): 1})
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(a.exponents[0][0], X(1))

        repeated = Term(1, ((X(1), 1), (X(1), 1)))
        self.assertEqual(repeated.exponent(X(1)), 2)
        self.assertEqual(Term(1, {X(1): 0}).exponents, ())

    def test_negative_exponent_rejected(self):
        with self.assertRaises(MalformedGeneratorError):
            Term(1, {X(1): -1})
        with self.assertRaises(MalformedGeneratorError):
            Term(1, {X(1): 1.5})

    def test_rational_coefficients(self):
        self.assertEqual(Term(Fraction(1, 2)).coefficient, Rational(1, 2))
        self.assertEqual(Term("3/4").coefficient, Rational(3, 4))
        self.assertEqual(Term.make(5).coefficient, 5)

    def test_immutability(self):
        t = Term.of(X(1))
        with self.assertRaises(dataclasses.FrozenInstanceError):
            t.coefficient = 2

    # =========================================================================
    # 2. INTROSPECCIÓN
    # =========================================================================

    def test_degree_and_supports(self):
        t = Term.of(X(4), Delta(1, 2), Delta(1, 2), Delta(2, 3))
        self.assertEqual(t.degree, 4)
        self.assertEqual(t.exponent(Delta(1, 2)), 2)
        self.assertEqual(t.exponent(X(1)), 0)
        self.assertEqual(t.x_indices, frozenset({4}))
        self.assertEqual(t.delta_pairs, ((1, 2), (2, 3)))
        self.assertEqual(t.delta_indices, frozenset({1, 2, 3}))
        self.assertEqual(t.touched_indices, frozenset({1, 2, 3, 4}))
        self.assertEqual(Term.zero().touched_indices, frozenset())

    def test_is_reduced(self):
        self.assertTrue(Term.of(X(1), Delta(2, 3)).is_reduced())
        self.assertTrue(Term.zero().is_reduced())
        self.assertFalse(Term.of(X(1), Delta(1, 2)).is_reduced())
        self.assertFalse(Term.of(X(1), X(1)).is_reduced())
        self.assertFalse(Term.of(Delta(1, 2), Delta(1, 2)).is_reduced())

    # =========================================================================
    # 3. EDICIÓN FUNCIONAL
    # =========================================================================

    def test_update_returns_new_term(self):
        square = Term.of(Delta(1, 2), Delta(1, 2))
        replaced = square.update(-4, {Delta(1, 2): -2, X(1): 1, X(2): 1})
        self.assertEqual(replaced, Term(-4, {X(1): 1, X(2): 1}))
        # El original no cambia
        self.assertEqual(square.exponent(Delta(1, 2)), 2)

    def test_update_below_zero_is_contract_violation(self):
        with self.assertRaises(MalformedGeneratorError):
            Term.of(X(1)).update(1, {Delta(1, 2): -1})

    def test_update_on_zero_stays_zero(self):
        self.assertTrue(Term.zero().update(3, {X(1): 1}).is_zero)

    # =========================================================================
    # 4. ARITMÉTICA Y REPRESENTACIÓN
    # =========================================================================

    def test_multiplication(self):
        a = Term.of(X(1), coefficient=2)
        b = Term.of(Delta(1, 2), coefficient=3)
        self.assertEqual(a * b, Term(6, {X(1): 1, Delta(1, 2): 1}))
        self.assertEqual(a * X(1), Term(2, {X(1): 2}))
        self.assertEqual(3 * a, Term(6, {X(1): 1}))
        self.assertTrue((a * Term.zero()).is_zero)
        self.assertEqual(-a, Term(-2, {X(1): 1}))

    def test_times_matches_operator(self):
        a = Term.of(X(1), Delta(2, 3), coefficient=2)
        b = Term.of(Delta(2, 3), coefficient=Fraction(1, 2))
        self.assertEqual(a.times(b), Term(1, {X(1): 1, Delta(2, 3): 2}))
        self.assertEqual(a.times(b), a * b)
        self.assertTrue(a.times(Term.zero()).is_zero)

    def test_default_coefficient_is_rational_one(self):
        self.assertIsInstance(Term().coefficient, Rational)
        self.assertEqual(Term(), Term.one())
        self.assertEqual(Term.one().exponents, ())
        self.assertEqual(Term.one() * Term.of(X(2)), Term.of(X(2)))

    def test_repr(self):
        self.assertEqual(repr(Term(2, {X(1): 1, Delta(1, 2): 2})), "2*x1*D_1_2^2")
        self.assertEqual(repr(Term.of(X(3))), "x3")
        self.assertEqual(repr(Term(5)), "5")
        self.assertEqual(repr(Term.zero()), "0")


if __name__ == "__main__":
    unittest.main()
