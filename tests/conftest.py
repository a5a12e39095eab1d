import textwrap

import pytest

FLIP = """\
01
A B
A
B
1
A 1 -> B 0 >
"""

INCREMENT = """\
01
R C H
R
H
{tape}
R 0 -> R 0 >
R 1 -> R 1 >
R _ -> C _ <
C 1 -> C 0 <
C 0 -> H 1 <
C _ -> H 1 <
"""


@pytest.fixture
def write_file(tmp_path):
    """Escribe un archivo de texto en tmp_path y devuelve su ruta."""

    def _write(text, name="machine.tm"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    return _write
