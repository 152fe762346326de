"""
src/intersection_core/generators.py
Ontología de Generadores v1.2.
Variante cerrada de índices: X(i) | Delta(i, j) con 1 <= i < j.
"""
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Tuple, Union

from .errors import MalformedGeneratorError


class GeneratorKind(IntEnum):
    # El orden numérico fija el orden canónico: primero x, después Delta.
    X     = 0  # Pullback del punto por la proyección i-ésima
    DELTA = 1  # Pullback de la diagonal por la proyección (i, j)


def _check_index(value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedGeneratorError(f"Índice no entero: {value!r}")
    if value < 1:
        raise MalformedGeneratorError(f"Índice fuera de rango: {value} < 1")


@dataclass(frozen=True)
class X:
    """Clase x_i."""
    i: int
    kind: ClassVar[GeneratorKind] = GeneratorKind.X

    def __post_init__(self):
        _check_index(self.i)

    @property
    def indices(self) -> Tuple[int, ...]:
        return (self.i,)

    @property
    def name(self) -> str:
        return f"x{self.i}"

    def __repr__(self):
        return self.name


@dataclass(frozen=True)
class Delta:
    """
    Clase Delta_{i,j}.
    Los pares se almacenan siempre con i < j; no existe entidad para i >= j.
    """
    i: int
    j: int
    kind: ClassVar[GeneratorKind] = GeneratorKind.DELTA

    def __post_init__(self):
        _check_index(self.i)
        _check_index(self.j)
        if self.i >= self.j:
            raise MalformedGeneratorError(f"Par diagonal mal formado: ({self.i}, {self.j}) requiere i < j")

    @property
    def indices(self) -> Tuple[int, ...]:
        return (self.i, self.j)

    @property
    def name(self) -> str:
        return f"D_{self.i}_{self.j}"

    def __repr__(self):
        return self.name


Generator = Union[X, Delta]

_NAME_PATTERN = re.compile(r"^(?:x(\d+)|D_(\d+)_(\d+))$")


def delta(a: int, b: int) -> Delta:
    """Constructor tolerante al orden: delta(3, 1) -> Delta(1, 3)."""
    if a == b:
        raise MalformedGeneratorError(f"Delta_{{{a},{a}}} no existe")
    return Delta(min(a, b), max(a, b))


def sort_key(gen: Generator) -> Tuple[int, ...]:
    """Clave de orden total: (tipo, índices...)."""
    return (int(gen.kind),) + gen.indices


def parse(name: str) -> Generator:
    """Inversa de `.name`: 'x3' -> X(3), 'D_1_2' -> Delta(1, 2)."""
    match = _NAME_PATTERN.match(name)
    if match is None:
        raise MalformedGeneratorError(f"Nombre de generador desconocido: {name!r}")
    if match.group(1) is not None:
        return X(int(match.group(1)))
    return Delta(int(match.group(2)), int(match.group(3)))
