import doctest

import machina.machine as machine_module


def test_doctests_machine() -> None:
    """Los ejemplos de la documentación del motor deben seguir siendo válidos."""
    failures, _ = doctest.testmod(machine_module)
    assert failures == 0, f"Fallos de doctest en {machine_module.__name__}"
