from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO

from .config_loader import DEFAULT_SETTINGS, Condition, MachineDescription, Settings
from .errors import NoTransitionDefined

logger = logging.getLogger(__name__)


@dataclass
class Frame:
    """Representa una descripción instantánea de la MT, lista para imprimir."""

    step: int
    state: str
    head_position: int
    tape: str
    zero: int

    def format(self) -> str:
        """Devuelve las tres líneas de la traza: estado, cinta y punteros.

        ``|`` marca la posición lógica 0 y ``^`` la celda bajo la cabeza.

        >>> print(Frame(step=1, state="B", head_position=-1, tape="10", zero=1).format())
        B
        10
        ^|
        >>> print(Frame(step=2, state="C", head_position=-3, tape="10", zero=1).format())
        C
          10
        ^  |
        """

        left = min(-self.zero, self.head_position)
        padding = -self.zero - left
        zero_column = -left
        head_column = self.head_position - left

        pointer = [" "] * (max(zero_column, head_column) + 1)
        pointer[zero_column] = "|"
        if head_column != zero_column:
            pointer[head_column] = "^"
        return "\n".join([self.state, " " * padding + self.tape, "".join(pointer)])


@dataclass
class MachineResult:
    """Resultado final de la simulación."""

    accepted: bool
    steps: int
    reason: str
    final_frame: Frame


class Tape:
    """Cinta infinita hacia ambos lados, materializada como dos pilas.

    ``negative`` guarda las celdas de posiciones -1, -2, ... (en ese orden) y
    ``nonnegative`` las de 0, 1, ...; cualquier otra posición se lee como blanco.

    >>> tape = Tape("_", "01")
    >>> tape.write(-1, "1")
    >>> tape.write(2, "0")
    >>> str(tape), tape.zero, tape.read(5)
    ('1010', 1, '_')
    """

    def __init__(self, blank_symbol: str, initial_input: str = "") -> None:
        self.blank_symbol = blank_symbol
        self.negative: List[str] = []
        self.nonnegative: List[str] = list(initial_input)

    @property
    def zero(self) -> int:
        """Número de celdas materializadas a la izquierda de la posición 0."""
        return len(self.negative)

    def __len__(self) -> int:
        return len(self.negative) + len(self.nonnegative)

    def __str__(self) -> str:
        return "".join(reversed(self.negative)) + "".join(self.nonnegative)

    def read(self, position: int) -> str:
        if position >= 0:
            if position < len(self.nonnegative):
                return self.nonnegative[position]
            return self.blank_symbol
        index = -position - 1
        if index < len(self.negative):
            return self.negative[index]
        return self.blank_symbol

    def write(self, position: int, symbol: str) -> None:
        if position >= 0:
            cells, index = self.nonnegative, position
        else:
            cells, index = self.negative, -position - 1

        if index < len(cells):
            cells[index] = symbol
        elif index == len(cells):
            cells.append(symbol)
            logger.debug("Cinta extendida hasta la posición %d", position)
        else:
            raise IndexError(
                f"La posición {position} está a más de una celda de la ventana materializada."
            )


class TuringMachine:
    """Intérprete de Máquinas de Turing deterministas de una cinta."""

    def __init__(self, description: MachineDescription, settings: Settings = DEFAULT_SETTINGS) -> None:
        self.description = description
        self.settings = settings
        self.tape = Tape(description.blank_symbol, description.initial_tape)
        self.state = description.start_state
        self.head_position = 0
        self.steps = 0

    @property
    def accepted(self) -> bool:
        return self.state == self.description.accept_state

    def condition(self) -> Condition:
        return Condition(state=self.state, symbol=self.tape.read(self.head_position))

    def frame(self) -> Frame:
        return Frame(
            step=self.steps,
            state=self.state,
            head_position=self.head_position,
            tape=str(self.tape),
            zero=self.tape.zero,
        )

    def step(self) -> None:
        """Aplica una transición: escribe, mueve la cabeza y cambia de estado."""

        condition = self.condition()
        effect = self.description.transitions.get(condition)
        if effect is None:
            raise NoTransitionDefined(condition, self.steps + 1)

        self.tape.write(self.head_position, effect.symbol)
        self.head_position += effect.movement
        self.state = effect.state
        self.steps += 1

    def frames(self, max_steps: Optional[int] = None) -> Iterator[Frame]:
        """Genera la configuración inicial y la posterior a cada paso.

        Termina tras el marco del estado de aceptación o al alcanzar
        ``max_steps``; sin límite, una máquina que no se detiene no termina.
        """

        yield self.frame()
        while not self.accepted:
            if max_steps is not None and self.steps >= max_steps:
                return
            self.step()
            yield self.frame()

    def run(self, stream: Optional[TextIO] = None, max_steps: Optional[int] = None) -> MachineResult:
        """Ejecuta la máquina imprimiendo la traza completa en ``stream`` (por defecto, la salida estándar)."""

        if stream is None:
            stream = sys.stdout
        if max_steps is None:
            max_steps = self.settings.max_steps

        frame = None
        for frame in self.frames(max_steps=max_steps):
            stream.write(frame.format())
            stream.write("\n\n")

        if self.accepted:
            logger.debug("Estado de aceptación %s alcanzado en %d pasos", self.state, self.steps)
            return MachineResult(
                accepted=True,
                steps=self.steps,
                reason="Estado de aceptación alcanzado",
                final_frame=frame,
            )
        return MachineResult(
            accepted=False,
            steps=self.steps,
            reason="Se alcanzó el límite máximo de pasos",
            final_frame=frame,
        )
