"""
src/intersection_core/scenarios/scorza.py
Escenario de Validación: Correspondencias de Scorza.
Producto cíclico S_12 S_23 ... S_(n-1)n S_1n en C^n y su número de intersección.
"""
import logging
from typing import Iterator, List, Tuple

from sympy import Rational

from ..config import CurveConfig
from ..generators import X, delta
from ..graph.evaluator import intersection_number, top_degree_part
from ..kernel.polynomial import Polynomial
from ..kernel.reducer import Reducer

_logger = logging.getLogger(__name__)


def point_class(i: int) -> Polynomial:
    return Polynomial.generator(X(i))


def diagonal_class(i: int, j: int) -> Polynomial:
    return Polynomial.generator(delta(i, j))


def scorza_class(i: int, j: int, config: CurveConfig) -> Polynomial:
    """S_{i,j} = (g-1)(x_i + x_j) + Delta_{i,j}."""
    gen = delta(i, j)
    config.validate_generator(gen)
    return (point_class(gen.i) + point_class(gen.j)) * (config.g - 1) + Polynomial.generator(gen)


def cyclic_pairs(n: int) -> Iterator[Tuple[int, int]]:
    """(1,2), (2,3), ..., (n-1,n), (1,n). Para n = 2 el par (1,2) aparece dos veces."""
    for i in range(1, n):
        yield (i, i + 1)
    if n >= 2:
        yield (1, n)


def scorza_factors(config: CurveConfig) -> List[Polynomial]:
    return [scorza_class(i, j, config) for i, j in cyclic_pairs(config.n)]


def scorza_cycle(config: CurveConfig) -> Polynomial:
    """Producto expandido sin reducir."""
    result = Polynomial.constant(1)
    for factor in scorza_factors(config):
        result = result * factor
    return result


def scorza_cycle_reduced(config: CurveConfig, reducer: Reducer = None) -> Polynomial:
    reducer = reducer or Reducer(config)
    return reducer.reduce_product(scorza_factors(config))


def scorza_cycle_intersection(config: CurveConfig) -> Rational:
    reduced = scorza_cycle_reduced(config)
    return intersection_number(top_degree_part(reduced, config), config)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    config = CurveConfig.from_env()
    reduced = scorza_cycle_reduced(config)
    _logger.info("C^%d, g=%d: forma reducida %r", config.n, config.g, reduced)
    value = intersection_number(top_degree_part(reduced, config), config)
    _logger.info("Número de intersección: %s", value)


if __name__ == "__main__":
    main()
