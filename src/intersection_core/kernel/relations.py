"""
src/intersection_core/kernel/relations.py
Motor de Relaciones v2.0.
Las tres reglas de reescritura de la subálgebra generada por x_i y Delta_{i,j} en C^n.
Cada regla es pura: Term -> Term (posiblemente el cero canónico).
"""
from collections import deque
from typing import Deque, Optional, Tuple

from ..config import CurveConfig
from ..generators import Delta, X
from .term import Term


class RelationStrategy:

    # =========================================================================
    # RELACIÓN 1: x_i^2 = 0
    # =========================================================================
    @staticmethod
    def nilpotency(term: Term, config: CurveConfig) -> Term:
        """
        Un punto no tiene autointersección en una curva:
        cualquier exponente de x_i >= 2 anula el término.
        """
        for _, exp in term.x_exponents():
            if exp >= 2:
                return Term.zero()
        return term

    # =========================================================================
    # RELACIÓN 3: Delta^2 = -(2g-2) x_i x_j,  Delta^3 = 0
    # =========================================================================
    @staticmethod
    def diagonal_powers(term: Term, config: CurveConfig) -> Term:
        """
        Recorre los pares en orden ascendente (i, luego j).
        e >= 3 -> cero (corta el recorrido); e == 2 -> escalar por -(2g-2) y x_i x_j.
        """
        # Solo se tocan exponentes de x: la lista de pares capturada sigue siendo válida.
        for (i, j), exp in term.delta_exponents():
            if exp >= 3:
                return Term.zero()
            if exp == 2:
                term = term.update(config.diagonal_square, {Delta(i, j): -2, X(i): 1, X(j): 1})
                if term.is_zero:
                    # g = 1: el escalar es 0
                    return term
        return term

    # =========================================================================
    # RELACIÓN 2: x_i Delta_{i,j} = x_i x_j
    # =========================================================================
    @staticmethod
    def absorption(term: Term, config: CurveConfig) -> Term:
        """
        Absorbe cada Delta incidente a un índice con x_i de grado 1,
        propagando x_j al otro extremo, hasta alcanzar un punto fijo.
        """
        if term.is_zero:
            return term

        pending: Deque[int] = deque()
        for i, exp in term.x_exponents():
            if exp >= 2:
                return Term.zero()
            pending.append(i)
        queued = set(pending)

        while pending:
            i = pending.popleft()
            queued.discard(i)

            while True:
                edge = RelationStrategy._incident_edge(term, i)
                if edge is None:
                    break
                other = edge.j if edge.i == i else edge.i

                # x_i se conserva; una unidad de Delta se transforma en x_other
                term = term.update(1, {edge: -1, X(other): 1})
                if term.exponent(X(other)) >= 2:
                    return Term.zero()

                # Worklist: el nuevo x_other puede exponer incidencias ya visitadas
                if other not in queued:
                    pending.append(other)
                    queued.add(other)

        return term

    # =========================================================================
    # UTILIDADES
    # =========================================================================
    @staticmethod
    def _incident_edge(term: Term, index: int) -> Optional[Delta]:
        """Primer Delta presente (orden canónico) que toca `index`."""
        for (i, j), _ in term.delta_exponents():
            if i == index or j == index:
                return Delta(i, j)
        return None

    @staticmethod
    def pipeline() -> Tuple:
        """Orden fijo de aplicación: relación 1, relación 3, relación 2."""
        return (
            RelationStrategy.nilpotency,
            RelationStrategy.diagonal_powers,
            RelationStrategy.absorption,
        )
