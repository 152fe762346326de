"""
src/intersection_core/config.py
Configuración de la Sesión v1.1.
(n, g) es un valor inmutable que se inyecta en cada reductor y evaluador;
no existe estado global mutable.
"""
import os
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from sympy import Integer

from .errors import ConfigurationError, MalformedGeneratorError
from .generators import Delta, Generator

# Escenario de referencia: correspondencias de Scorza en C^7, curva de género 3.
DEFAULT_N = 7
DEFAULT_G = 3

ENV_N = "CURVE_N"
ENV_G = "CURVE_G"


@dataclass(frozen=True)
class CurveConfig:
    """
    n: tamaño del producto C^n (n >= 1).
    g: género de la curva C (g >= 0).
    """
    n: int
    g: int

    def __post_init__(self):
        for label, value in (("n", self.n), ("g", self.g)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{label} debe ser entero, recibido {value!r}")
        if self.n < 1:
            raise ConfigurationError(f"n debe ser >= 1, recibido {self.n}")
        if self.g < 0:
            raise ConfigurationError(f"g debe ser >= 0, recibido {self.g}")

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> 'CurveConfig':
        """Lee CURVE_N / CURVE_G; los ausentes toman el escenario por defecto."""
        env = os.environ if environ is None else environ
        try:
            n = int(env.get(ENV_N, DEFAULT_N))
            g = int(env.get(ENV_G, DEFAULT_G))
        except ValueError as exc:
            raise ConfigurationError(f"Variables {ENV_N}/{ENV_G} ilegibles: {exc}") from exc
        return cls(n=n, g=g)

    @property
    def diagonal_square(self) -> Integer:
        """Escalar de la relación Delta_{i,j}^2 = -(2g-2) x_i x_j."""
        return Integer(-(2 * self.g - 2))

    def indices(self) -> range:
        return range(1, self.n + 1)

    def pairs(self) -> Iterator[Tuple[int, int]]:
        """Pares (i, j), i < j, en orden ascendente por i y después por j."""
        for i in range(1, self.n + 1):
            for j in range(i + 1, self.n + 1):
                yield (i, j)

    def validate_generator(self, gen: Generator) -> Generator:
        for idx in gen.indices:
            if idx > self.n:
                raise MalformedGeneratorError(f"{gen!r} fuera de C^{self.n}: índice {idx} > {self.n}")
        return gen

    def validate_term(self, term) -> None:
        """Comprueba que todo generador con exponente no nulo viva en C^n."""
        for gen, _ in term.exponents:
            self.validate_generator(gen)

    def deltas(self) -> Iterator[Delta]:
        for i, j in self.pairs():
            yield Delta(i, j)
