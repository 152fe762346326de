"""
src/intersection_core/graph/evaluator.py
Evaluador de Intersección v1.4.
Convierte un término reducido de grado n en un número mediante
las componentes conexas de su grafo de diagonales.
"""
import logging
from typing import Any, List, Tuple

import networkx as nx
from sympy import Integer, Rational

from ..config import CurveConfig
from ..errors import DegreeMismatchError, NotReducedError
from ..kernel.polynomial import Polynomial
from ..kernel.term import Term

_logger = logging.getLogger(__name__)


def reduction_graph(term: Term, config: CurveConfig) -> nx.Graph:
    """
    Vértices {1..n}; una arista por cada Delta_{i,j} con exponente 1.
    Los índices sin arista quedan aislados (factores x_i o índices libres).
    """
    G = nx.Graph()
    G.add_nodes_from(config.indices())
    G.add_edges_from(term.delta_pairs)
    return G


def component_profile(term: Term, config: CurveConfig) -> List[Tuple[int, int]]:
    """(vértices, aristas) de cada componente, en orden de menor vértice."""
    G = reduction_graph(term, config)
    profile = []
    for nodes in sorted(nx.connected_components(G), key=min):
        sub = G.subgraph(nodes)
        profile.append((sub.number_of_nodes(), sub.number_of_edges()))
    return profile


def evaluate_term(term: Term, config: CurveConfig) -> Rational:
    """
    Número de intersección de un término reducido de grado total n.
    Componente aislada: factor 1. Componente con V == E (un ciclo): factor -(2g-2).
    Componente con V != E: el término vale 0.
    """
    if term.is_zero:
        return Integer(0)
    config.validate_term(term)
    if term.degree != config.n:
        raise DegreeMismatchError(term.degree, config.n)
    if not term.is_reduced():
        raise NotReducedError(f"Término no reducido: {term!r}")

    value = Integer(1)
    for vertices, edges in component_profile(term, config):
        if vertices == 1:
            continue
        if vertices != edges:
            _logger.debug("evaluate_term: %r -> 0 (componente V=%d, E=%d)", term, vertices, edges)
            return Integer(0)
        value *= config.diagonal_square

    return value * term.coefficient


def top_degree_part(poly: Any, config: CurveConfig) -> Polynomial:
    """Parte homogénea de grado n, la única con número de intersección."""
    return Polynomial.coerce(poly).homogeneous_part(config.n)


def intersection_number(poly: Any, config: CurveConfig) -> Rational:
    """Suma de los números de intersección de cada término (ya reducido, de grado n)."""
    poly = Polynomial.coerce(poly)
    total = Integer(0)
    for term in poly:
        total += evaluate_term(term, config)
    _logger.debug("intersection_number: %d términos -> %s", len(poly), total)
    return total
