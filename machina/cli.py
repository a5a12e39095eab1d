from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List

from .config_loader import DEFAULT_SETTINGS, load_description, load_settings
from .errors import ConfigurationError, GradientError, MachineError
from .gradient import load_gradient, render
from .machine import TuringMachine

logger = logging.getLogger("machina")

EXIT_FAILURE = 1
EXIT_STEP_LIMIT = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="machina",
        description="Intérprete de Máquinas de Turing de una cinta con traza paso a paso",
    )
    parser.add_argument("description", type=Path, help="Ruta al archivo de descripción de la máquina")
    parser.add_argument(
        "--config",
        type=Path,
        help="Archivo YAML opcional con ajustes (blanco, tokens de movimiento, límite de pasos)",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=None,
        help="Número máximo de pasos antes de detener la simulación (por defecto, sin límite)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Muestra mensajes de depuración en la salida de error",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.max_steps is not None and args.max_steps <= 0:
        parser.error("--max-steps debe ser un entero positivo")

    try:
        settings = load_settings(args.config) if args.config is not None else DEFAULT_SETTINGS
        if args.max_steps is not None:
            settings = replace(settings, max_steps=args.max_steps)
        description = load_description(args.description, settings=settings)
        result = TuringMachine(description, settings=settings).run(sys.stdout)
    except (MachineError, ConfigurationError) as error:
        logger.error("%s", error)
        return EXIT_FAILURE
    except (OSError, UnicodeDecodeError) as error:
        logger.error("No se pudo leer el archivo: %s", error)
        return EXIT_FAILURE

    if not result.accepted:
        logger.error("%s tras %d pasos sin alcanzar el estado de aceptación", result.reason, result.steps)
        return EXIT_STEP_LIMIT
    return 0


def build_gradient_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="machina-gradient",
        description="Dibuja un degradado lineal o radial con caracteres ASCII",
    )
    parser.add_argument("config", type=Path, help="Ruta al archivo de configuración del degradado")
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Muestra mensajes de depuración en la salida de error",
    )
    return parser


def gradient_main(argv: List[str] | None = None) -> int:
    parser = build_gradient_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        spec = load_gradient(args.config)
    except GradientError as error:
        logger.error("%s: %s", args.config, error)
        return EXIT_FAILURE
    except (OSError, UnicodeDecodeError) as error:
        logger.error("No se pudo leer el archivo: %s", error)
        return EXIT_FAILURE

    for row in render(spec):
        print(row)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
