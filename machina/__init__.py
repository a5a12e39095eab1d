from .config_loader import (
    Condition,
    Effect,
    MachineDescription,
    Settings,
    load_description,
    load_settings,
    parse_description,
)
from .errors import (
    ConfigurationError,
    DuplicateTransition,
    GradientError,
    InvalidDirection,
    MachineError,
    MalformedLine,
    NoTransitionDefined,
    UnknownState,
    UnknownSymbol,
)
from .machine import Frame, MachineResult, Tape, TuringMachine

__all__ = [
    "Condition",
    "Effect",
    "MachineDescription",
    "Settings",
    "load_description",
    "load_settings",
    "parse_description",
    "TuringMachine",
    "MachineResult",
    "Frame",
    "Tape",
    "MachineError",
    "UnknownState",
    "UnknownSymbol",
    "DuplicateTransition",
    "InvalidDirection",
    "MalformedLine",
    "NoTransitionDefined",
    "ConfigurationError",
    "GradientError",
]
