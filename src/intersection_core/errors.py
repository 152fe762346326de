"""
src/intersection_core/errors.py
Taxonomía de Errores v1.0.
Toda violación de contrato se señala explícitamente; el cero nunca es un error.
"""


class IntersectionError(ValueError):
    """Raíz común. Hereda de ValueError para capturas amplias."""


class ConfigurationError(IntersectionError):
    """Parámetros (n, g) inválidos o ilegibles."""


class MalformedGeneratorError(IntersectionError):
    """
    Generador fuera del universo de C^n:
    índice fuera de [1, n], par con i >= j, o exponente negativo / no entero.
    """


class DegreeMismatchError(IntersectionError):
    """El evaluador solo acepta términos de grado total exactamente n."""

    def __init__(self, degree: int, expected: int):
        super().__init__(f"Grado {degree} != dimensión {expected}. Filtra la parte de grado superior primero.")
        self.degree = degree
        self.expected = expected


class NotReducedError(IntersectionError):
    """El término no es un punto fijo de las tres relaciones."""
