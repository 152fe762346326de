"""
src/intersection_core/kernel/reducer.py
Versión 2.2 (Reductor Canónico).
Orquesta las tres relaciones en una forma normal por término y la extiende a polinomios.

NOVEDADES v2.2:
- Contexto (n, g) inyectado en el constructor, sin variables globales.
- Hash Consing de monomios reducidos: reduce(c*m) = c*reduce(m).
- reduce_product: reducción incremental de productos largos.
"""
import logging
import threading
from typing import Any, Dict, Iterable, Optional, Tuple

from sympy import Rational

from ..config import CurveConfig
from ..hashing.canonization import ExponentItems
from .polynomial import Polynomial
from .relations import RelationStrategy
from .term import Term

_logger = logging.getLogger(__name__)

# Monomios distintos retenidos por ReductionCache; None = sin límite
DEFAULT_CACHE_SIZE = 1 << 16


class ReductionCache:
    """
    Memoización de formas reducidas por monomio.
    Seguro entre hilos: los términos son inmutables y la tabla se protege con RLock.
    Con max_size = None la tabla crece sin límite durante la vida del Reducer;
    con un tope, las entradas nuevas se descartan al llenarse (se recalculan).
    """

    def __init__(self, max_size: Optional[int] = DEFAULT_CACHE_SIZE):
        if max_size is not None and max_size < 0:
            raise ValueError(f"max_size debe ser >= 0, recibido {max_size}")
        self._lock = threading.RLock()
        self.max_size = max_size
        # (config, monomio) -> (factor escalar, monomio reducido)
        self._lookup: Dict[Tuple[CurveConfig, ExponentItems], Tuple[Rational, ExponentItems]] = {}
        self.hits = 0
        self.misses = 0

    def get(self, config: CurveConfig, monomial: ExponentItems) -> Optional[Tuple[Rational, ExponentItems]]:
        with self._lock:
            entry = self._lookup.get((config, monomial))
            if entry is None:
                self.misses += 1
            else:
                self.hits += 1
        return entry

    def put(self, config: CurveConfig, monomial: ExponentItems, reduced: Term) -> None:
        with self._lock:
            if self.max_size is not None and len(self._lookup) >= self.max_size:
                return
            self._lookup.setdefault((config, monomial), (reduced.coefficient, reduced.exponents))

    def clear(self) -> None:
        with self._lock:
            self._lookup.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self):
        with self._lock:
            return len(self._lookup)


class Reducer:
    """
    Forma canónica de términos y polinomios para una configuración fija.
    """

    def __init__(self, config: CurveConfig, cache: Optional[ReductionCache] = None):
        self.config = config
        self.cache = cache if cache is not None else ReductionCache()

    # =========================================================================
    # TÉRMINO
    # =========================================================================
    def reduce_term(self, term: Term) -> Term:
        """Relación 1, después relación 3, después relación 2."""
        if term.is_zero:
            return term
        self.config.validate_term(term)

        # 1. Hash Consing Optimista
        entry = self.cache.get(self.config, term.monomial)
        if entry is not None:
            factor, monomial = entry
            return Term(term.coefficient * factor, monomial)

        # 2. Reescritura sobre el monomio unitario
        reduced = Term(1, term.monomial)
        for relation in RelationStrategy.pipeline():
            reduced = relation(reduced, self.config)
            if reduced.is_zero:
                break

        self.cache.put(self.config, term.monomial, reduced)
        _logger.debug("reduce_term: %r -> %r", Term(1, term.monomial), reduced)
        return reduced.scale(term.coefficient)

    # =========================================================================
    # POLINOMIO
    # =========================================================================
    def reduce_polynomial(self, poly: Any) -> Polynomial:
        """Suma de las formas reducidas; los términos nulos no contribuyen."""
        poly = Polynomial.coerce(poly)
        result = poly.map_terms(self.reduce_term)
        _logger.debug("reduce_polynomial: %d términos -> %d", len(poly), len(result))
        return result

    def reduce_product(self, factors: Iterable[Any]) -> Polynomial:
        """
        Producto reducido de varios factores.
        Reduce tras cada multiplicación: las relaciones son multiplicativas y confluentes,
        así que el resultado coincide con reducir el producto expandido.
        """
        result = Polynomial((Term.one(),))
        for step, factor in enumerate(factors, start=1):
            result = self.reduce_polynomial(result * self.reduce_polynomial(factor))
            _logger.debug("reduce_product: paso %d, %d términos", step, len(result))
            if result.is_zero:
                break
        return result


# =============================================================================
# FACHADA FUNCIONAL
# =============================================================================

def reduce_term(term: Term, config: CurveConfig) -> Term:
    return Reducer(config).reduce_term(term)


def reduce_polynomial(poly: Any, config: CurveConfig) -> Polynomial:
    return Reducer(config).reduce_polynomial(poly)


def reduce_product(factors: Iterable[Any], config: CurveConfig) -> Polynomial:
    return Reducer(config).reduce_product(factors)
