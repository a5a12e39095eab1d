from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Union

from .errors import GradientError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Palette:
    """Caracteres ordenados que hacen de colores del degradado."""

    colors: str
    bin_size: float

    def pick(self, bin_index: int) -> str:
        if bin_index < 0:
            return self.colors[0]
        if bin_index >= len(self.colors):
            return self.colors[-1]
        return self.colors[bin_index]


@dataclass(frozen=True)
class RadialGradient:
    x: float
    y: float
    radius: float

    def norm(self) -> float:
        return self.radius

    def color(self, palette: Palette, a: float, b: float) -> str:
        length = math.hypot(a - self.x, b - self.y)
        return palette.pick(int(length / palette.bin_size))


@dataclass(frozen=True)
class LinearGradient:
    x0: float
    y0: float
    x1: float
    y1: float

    def norm(self) -> float:
        return math.hypot(self.x1 - self.x0, self.y1 - self.y0)

    def dot(self, a: float, b: float) -> float:
        return a * (self.x1 - self.x0) + b * (self.y1 - self.y0)

    def color(self, palette: Palette, a: float, b: float) -> str:
        projection = self.dot(a, b) / self.norm()
        if projection < 0:
            # Las proyecciones negativas se cuentan desde el final de la paleta.
            return palette.pick(len(palette.colors) + int(projection / palette.bin_size) - 1)
        return palette.pick(int(projection / palette.bin_size))


Gradient = Union[LinearGradient, RadialGradient]

_GRADIENT_FIELDS = {"linear": ("x0", "y0", "x1", "y1"), "radial": ("x", "y", "radius")}


@dataclass(frozen=True)
class GradientSpecification:
    width: int
    height: int
    palette: Palette
    gradient: Gradient


def _parse_gradient(line: str, line_number: int) -> Gradient:
    parts = line.split()
    kind = parts[0] if parts else ""
    if kind not in _GRADIENT_FIELDS:
        raise GradientError(f"Línea {line_number}: degradado desconocido: {line!r}")
    fields = _GRADIENT_FIELDS[kind]
    if len(parts) != len(fields) + 1:
        raise GradientError(
            f"Línea {line_number}: el degradado '{kind}' requiere {len(fields)} valores ({', '.join(fields)})."
        )
    try:
        values = [float(part) for part in parts[1:]]
    except ValueError as error:
        raise GradientError(f"Línea {line_number}: valor no numérico en {line!r}.") from error
    if kind == "linear":
        return LinearGradient(*values)
    return RadialGradient(*values)


def parse_gradient(lines: Iterable[str]) -> GradientSpecification:
    """Valida las tres líneas de configuración: tamaño, paleta y degradado."""

    raw = [line.rstrip("\r\n") for line in lines]
    while raw and not raw[-1].strip():
        raw.pop()
    if len(raw) > 3:
        raise GradientError("Demasiadas líneas: se esperaban tamaño, paleta y degradado.")
    if len(raw) < 3:
        raise GradientError("Faltan líneas: se esperaban tamaño, paleta y degradado.")

    size_line, colors, gradient_line = raw
    size = size_line.split()
    if len(size) != 2:
        raise GradientError("Línea 1: se esperaba '<ancho> <alto>'.")
    try:
        width, height = int(size[0]), int(size[1])
    except ValueError as error:
        raise GradientError(f"Línea 1: dimensiones no enteras: {size_line!r}.") from error
    if width < 0 or height < 0:
        raise GradientError("Línea 1: las dimensiones no pueden ser negativas.")

    if not colors:
        raise GradientError("Línea 2: la paleta de colores está vacía.")

    gradient = _parse_gradient(gradient_line, 3)
    norm = gradient.norm()
    if norm <= 0:
        raise GradientError("Línea 3: la norma del degradado debe ser positiva.")

    palette = Palette(colors=colors, bin_size=norm / len(colors))
    logger.debug("Degradado %s de %dx%d con %d colores", gradient, width, height, len(colors))
    return GradientSpecification(width=width, height=height, palette=palette, gradient=gradient)


def load_gradient(path: str | Path) -> GradientSpecification:
    with Path(path).open("r", encoding="utf-8") as handle:
        return parse_gradient(handle)


def render(spec: GradientSpecification) -> List[str]:
    """Devuelve las filas de caracteres del degradado."""

    return [
        "".join(spec.gradient.color(spec.palette, float(x), float(y)) for x in range(spec.width))
        for y in range(spec.height)
    ]
