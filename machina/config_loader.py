from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

import yaml

from .errors import (
    ConfigurationError,
    DuplicateTransition,
    InvalidDirection,
    MalformedLine,
    UnknownState,
    UnknownSymbol,
)

logger = logging.getLogger(__name__)

LEFT = -1
RIGHT = 1

_HEADER_FIELDS = ("alfabeto", "estados", "estado inicial", "estado de aceptación", "cinta inicial")


@dataclass(frozen=True)
class Settings:
    """Ajustes de ejecución, opcionalmente leídos desde YAML."""

    blank_symbol: str = "_"
    left_token: str = "<"
    right_token: str = ">"
    max_steps: Optional[int] = None

    def movement(self, token: str) -> Optional[int]:
        if token == self.left_token:
            return LEFT
        if token == self.right_token:
            return RIGHT
        return None


DEFAULT_SETTINGS = Settings()


@dataclass(frozen=True)
class Condition:
    """Entrada de una transición: (estado, símbolo bajo la cabeza)."""

    state: str
    symbol: str

    def __str__(self) -> str:
        return f"estado={self.state} símbolo={self.symbol!r}"


@dataclass(frozen=True)
class Effect:
    """Salida de una transición: (estado siguiente, símbolo a escribir, movimiento)."""

    state: str
    symbol: str
    movement: int

    def __str__(self) -> str:
        direction = "izquierda" if self.movement == LEFT else "derecha"
        return f"estado={self.state} símbolo={self.symbol!r} dirección={direction}"


@dataclass(frozen=True)
class MachineDescription:
    """Estructura de datos inmutable con la descripción completa de la MT."""

    alphabet: Tuple[str, ...]
    states: Tuple[str, ...]
    start_state: str
    accept_state: str
    initial_tape: str
    transitions: Mapping[Condition, Effect]
    blank_symbol: str = "_"


def _normalize_config(data: Dict) -> Dict:
    """Acepta configuraciones con o sin el nodo 'machina'."""

    if "machina" in data and isinstance(data["machina"], dict):
        return data["machina"]
    return data


def load_settings(path: str | Path) -> Settings:
    """Carga y valida el archivo YAML de ajustes."""

    with Path(path).open("r", encoding="utf-8") as handle:
        try:
            raw_data = yaml.safe_load(handle)
        except yaml.YAMLError as error:
            raise ConfigurationError(f"YAML inválido en {path}: {error}") from error

    if raw_data is None:
        return DEFAULT_SETTINGS
    if not isinstance(raw_data, dict):
        raise ConfigurationError("El archivo YAML debe describir un objeto mapeo.")

    config = _normalize_config(raw_data)

    blank_symbol = config.get("blank", DEFAULT_SETTINGS.blank_symbol)
    if not isinstance(blank_symbol, str) or len(blank_symbol) != 1 or blank_symbol.isspace():
        raise ConfigurationError("'blank' debe ser un único carácter visible.")

    movements = config.get("movements") or {}
    if not isinstance(movements, dict):
        raise ConfigurationError("El bloque 'movements' debe ser un objeto.")
    left_token = movements.get("left", DEFAULT_SETTINGS.left_token)
    right_token = movements.get("right", DEFAULT_SETTINGS.right_token)
    for name, token in (("left", left_token), ("right", right_token)):
        if not isinstance(token, str) or not token or any(char.isspace() for char in token):
            raise ConfigurationError(f"'movements.{name}' debe ser un token sin espacios.")
    if left_token == right_token:
        raise ConfigurationError("'movements.left' y 'movements.right' deben ser distintos.")

    max_steps = config.get("max_steps")
    if max_steps is not None:
        if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps <= 0:
            raise ConfigurationError("'max_steps' debe ser un entero positivo o null.")

    settings = Settings(
        blank_symbol=blank_symbol,
        left_token=left_token,
        right_token=right_token,
        max_steps=max_steps,
    )
    logger.debug("Ajustes cargados desde %s: %s", path, settings)
    return settings


def _symbol(token: str, alphabet: Tuple[str, ...], **where) -> str:
    if len(token) != 1 or token not in alphabet:
        raise UnknownSymbol(f"Símbolo desconocido [{token}].", **where)
    return token


def _state(token: str, states: Tuple[str, ...], **where) -> str:
    if token not in states:
        raise UnknownState(f"Estado desconocido [{token}].", **where)
    return token


def _add_transition(
    transitions: Dict[Condition, Effect],
    line: str,
    line_number: int,
    alphabet: Tuple[str, ...],
    states: Tuple[str, ...],
    settings: Settings,
    source: str,
) -> None:
    parts = line.split()
    if len(parts) != 6:
        raise MalformedLine(
            f"Se esperaban 6 campos '<estado> <símbolo> -> <estado> <símbolo> <dirección>', hay {len(parts)}.",
            source=source,
            line_number=line_number,
            field="transición",
        )
    from_state, read_symbol, _, to_state, write_symbol, direction = parts

    def where(field: str) -> dict:
        return {"source": source, "line_number": line_number, "field": field}

    _state(from_state, states, **where("estado origen"))
    _state(to_state, states, **where("estado destino"))
    _symbol(read_symbol, alphabet, **where("símbolo leído"))
    _symbol(write_symbol, alphabet, **where("símbolo escrito"))

    condition = Condition(state=from_state, symbol=read_symbol)
    if condition in transitions:
        raise DuplicateTransition(
            f"La condición [{condition}] ya tiene una transición.", **where("condición")
        )

    movement = settings.movement(direction)
    if movement is None:
        raise InvalidDirection(
            f"Dirección inválida [{direction}]. Valores permitidos: "
            f"{settings.left_token!r}, {settings.right_token!r}.",
            **where("dirección"),
        )

    transitions[condition] = Effect(state=to_state, symbol=write_symbol, movement=movement)


def parse_description(
    lines: Iterable[str],
    settings: Settings = DEFAULT_SETTINGS,
    source: str = "<string>",
) -> MachineDescription:
    """Valida las líneas de una descripción y construye la tabla de transiciones.

    Las cinco primeras líneas son posicionales (alfabeto, estados, estado
    inicial, estado de aceptación, cinta inicial); el resto son reglas.
    Cualquier error aborta la carga completa.
    """

    header: List[str] = []
    transitions: Dict[Condition, Effect] = {}
    alphabet: Tuple[str, ...] = ()
    states: Tuple[str, ...] = ()

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        index = line_number - 1
        if index >= len(_HEADER_FIELDS):
            if line.strip():
                _add_transition(transitions, line, line_number, alphabet, states, settings, source)
            continue

        where = {"source": source, "line_number": line_number, "field": _HEADER_FIELDS[index]}
        if index == 0:
            alphabet = tuple(dict.fromkeys(line + settings.blank_symbol))
        elif index == 1:
            tokens = line.split()
            if not tokens:
                raise MalformedLine("La lista de estados está vacía.", **where)
            repeated = sorted({token for token in tokens if tokens.count(token) > 1})
            if repeated:
                raise MalformedLine(f"Estados repetidos: {', '.join(repeated)}.", **where)
            states = tuple(tokens)
        elif index in (2, 3):
            line = _state(line.strip(), states, **where)
        else:
            for char in line:
                _symbol(char, alphabet, **where)
        header.append(line)

    if len(header) < len(_HEADER_FIELDS):
        missing = _HEADER_FIELDS[len(header)]
        raise MalformedLine(
            f"Falta la línea '{missing}'.",
            source=source,
            line_number=len(header) + 1,
            field=missing,
        )

    description = MachineDescription(
        alphabet=alphabet,
        states=states,
        start_state=header[2],
        accept_state=header[3],
        initial_tape=header[4],
        transitions=MappingProxyType(transitions),
        blank_symbol=settings.blank_symbol,
    )
    logger.debug(
        "%s: %d símbolos, %d estados, %d transiciones",
        source,
        len(alphabet),
        len(states),
        len(transitions),
    )
    return description


def load_description(path: str | Path, settings: Settings = DEFAULT_SETTINGS) -> MachineDescription:
    """Carga y valida el archivo de texto que describe la MT."""

    with Path(path).open("r", encoding="utf-8") as handle:
        return parse_description(handle, settings=settings, source=str(path))
