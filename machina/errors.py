from __future__ import annotations

from typing import Any, Optional


class MachineError(ValueError):
    """Error fatal al cargar o ejecutar una descripción de MT."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        line_number: Optional[int] = None,
        field: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.source = source
        self.line_number = line_number
        self.field = field

    def __str__(self) -> str:
        location = ""
        if self.source is not None:
            location = self.source
            if self.line_number is not None:
                location += f":{self.line_number}"
            location += ": "
        elif self.line_number is not None:
            location = f"línea {self.line_number}: "
        if self.field is not None:
            location += f"campo '{self.field}': "
        return f"{location}{self.message}"


class UnknownState(MachineError):
    """Estado que no pertenece a la lista declarada."""


class UnknownSymbol(MachineError):
    """Símbolo que no pertenece al alfabeto (blanco incluido)."""


class DuplicateTransition(MachineError):
    """La condición (estado, símbolo) ya tiene una transición."""


class InvalidDirection(MachineError):
    """Movimiento distinto de izquierda o derecha."""


class MalformedLine(MachineError):
    """Línea con un número de campos inesperado o ausente."""


class NoTransitionDefined(MachineError):
    """Configuración alcanzable sin regla definida."""

    def __init__(self, condition: Any, step: int) -> None:
        super().__init__(f"No existe transición para {condition} (paso {step}).")
        self.condition = condition
        self.step = step


class ConfigurationError(ValueError):
    """Archivo YAML de ajustes inválido."""


class GradientError(ValueError):
    """Descripción de degradado inválida."""
