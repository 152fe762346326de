"""
src/intersection_core/hashing/canonization.py
Motor de Normalización Canónica.
Garantiza que monomios iguales tengan la misma representación en memoria.
"""
from typing import Iterable, Mapping, Tuple, Union

from ..errors import MalformedGeneratorError
from ..generators import Generator, sort_key

ExponentItems = Tuple[Tuple[Generator, int], ...]


class Canonizer:
    """
    Ordena el vector de exponentes para garantizar igualdad y hash deterministas.
    """

    @staticmethod
    def sort_exponents(items: Union[Mapping[Generator, int], Iterable[Tuple[Generator, int]]]) -> ExponentItems:
        """
        Acumula exponentes repetidos, descarta los nulos y ordena por generador
        (x antes que Delta, después por índices).
        """
        if isinstance(items, Mapping):
            items = items.items()

        counts = {}
        for gen, exp in items:
            if isinstance(exp, bool) or not isinstance(exp, int):
                raise MalformedGeneratorError(f"Exponente no entero para {gen!r}: {exp!r}")
            if exp < 0:
                raise MalformedGeneratorError(f"Exponente negativo para {gen!r}: {exp}")
            counts[gen] = counts.get(gen, 0) + exp

        # Sort estricto por generador: el orden de inserción nunca es observable
        return tuple(
            (gen, exp) for gen, exp in sorted(counts.items(), key=lambda kv: sort_key(kv[0]))
            if exp
        )

    @staticmethod
    def merge(left: ExponentItems, right: ExponentItems) -> ExponentItems:
        """Producto de monomios: suma de vectores de exponentes."""
        return Canonizer.sort_exponents(left + right)
