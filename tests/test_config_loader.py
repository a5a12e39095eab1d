import pytest

from machina.config_loader import (
    DEFAULT_SETTINGS,
    LEFT,
    RIGHT,
    Condition,
    Effect,
    Settings,
    load_description,
    load_settings,
    parse_description,
)
from machina.errors import (
    ConfigurationError,
    DuplicateTransition,
    InvalidDirection,
    MalformedLine,
    UnknownState,
    UnknownSymbol,
)

from .conftest import FLIP, INCREMENT


def _lines(text):
    return text.splitlines()


def test_parse_flip_machine():
    description = parse_description(_lines(FLIP))

    assert description.alphabet == ("0", "1", "_")
    assert description.states == ("A", "B")
    assert description.start_state == "A"
    assert description.accept_state == "B"
    assert description.initial_tape == "1"
    assert dict(description.transitions) == {
        Condition("A", "1"): Effect(state="B", symbol="0", movement=RIGHT),
    }


def test_transition_table_is_read_only():
    description = parse_description(_lines(FLIP))
    with pytest.raises(TypeError):
        description.transitions[Condition("B", "0")] = Effect("A", "1", LEFT)


def test_loading_twice_is_deterministic(write_file):
    path = write_file(INCREMENT.format(tape="1011"))
    first = load_description(path)
    second = load_description(path)

    assert dict(first.transitions) == dict(second.transitions)
    assert len(first.transitions) == 6


def test_blank_is_always_valid_and_tape_may_be_empty():
    description = parse_description(["01", "A B", "A", "B", "", "A _ -> B _ >"])
    assert description.initial_tape == ""
    assert Condition("A", "_") in description.transitions


def test_blank_rule_lines_are_skipped():
    description = parse_description(_lines(FLIP) + ["", "   "])
    assert len(description.transitions) == 1


@pytest.mark.parametrize(
    "line_number, value",
    [(3, "Z"), (4, "Z")],
)
def test_unknown_start_or_accept_state(line_number, value):
    lines = _lines(FLIP)
    lines[line_number - 1] = value
    with pytest.raises(UnknownState) as excinfo:
        parse_description(lines, source="flip.tm")
    assert excinfo.value.line_number == line_number
    assert "flip.tm:%d" % line_number in str(excinfo.value)


@pytest.mark.parametrize(
    "rule, field",
    [
        ("Z 1 -> B 0 >", "estado origen"),
        ("A 1 -> Z 0 >", "estado destino"),
    ],
)
def test_rule_with_unknown_state(rule, field):
    with pytest.raises(UnknownState) as excinfo:
        parse_description(_lines(FLIP)[:5] + [rule])
    assert excinfo.value.field == field
    assert excinfo.value.line_number == 6


@pytest.mark.parametrize(
    "rule, field",
    [
        ("A 2 -> B 0 >", "símbolo leído"),
        ("A 1 -> B 2 >", "símbolo escrito"),
        ("A 10 -> B 0 >", "símbolo leído"),
    ],
)
def test_rule_with_unknown_symbol(rule, field):
    with pytest.raises(UnknownSymbol) as excinfo:
        parse_description(_lines(FLIP)[:5] + [rule])
    assert excinfo.value.field == field


def test_states_are_checked_before_symbols():
    with pytest.raises(UnknownState):
        parse_description(_lines(FLIP)[:5] + ["A 2 -> Z 0 >"])


def test_initial_tape_with_unknown_symbol():
    lines = _lines(FLIP)
    lines[4] = "1x1"
    with pytest.raises(UnknownSymbol) as excinfo:
        parse_description(lines)
    assert excinfo.value.line_number == 5


def test_identical_duplicate_is_rejected():
    with pytest.raises(DuplicateTransition) as excinfo:
        parse_description(_lines(FLIP) + ["A 1 -> B 0 >"])
    assert excinfo.value.line_number == 7


def test_conflicting_duplicate_is_rejected():
    with pytest.raises(DuplicateTransition):
        parse_description(_lines(FLIP) + ["A 1 -> A 1 <"])


def test_invalid_direction():
    with pytest.raises(InvalidDirection) as excinfo:
        parse_description(_lines(FLIP)[:5] + ["A 1 -> B 0 R"])
    assert excinfo.value.field == "dirección"


@pytest.mark.parametrize("rule", ["A 1 -> B 0", "A 1 -> B 0 > extra", "A1->B0>"])
def test_rule_with_wrong_field_count(rule):
    with pytest.raises(MalformedLine):
        parse_description(_lines(FLIP)[:5] + [rule])


def test_missing_header_lines():
    with pytest.raises(MalformedLine) as excinfo:
        parse_description(["01", "A B", "A"])
    assert excinfo.value.line_number == 4
    assert excinfo.value.field == "estado de aceptación"


@pytest.mark.parametrize("states", ["", "A A B"])
def test_invalid_state_list(states):
    with pytest.raises(MalformedLine) as excinfo:
        parse_description(["01", states, "A", "A", ""])
    assert excinfo.value.line_number == 2


def test_custom_settings_change_blank_and_directions():
    settings = Settings(blank_symbol="#", left_token="L", right_token="R")
    description = parse_description(
        ["ab", "q f", "q", "f", "", "q # -> f a R"], settings=settings
    )
    assert description.blank_symbol == "#"
    assert description.transitions[Condition("q", "#")] == Effect("f", "a", RIGHT)


def test_load_settings(write_file):
    path = write_file(
        """\
        machina:
          blank: "."
          movements:
            left: L
            right: R
          max_steps: 50
        """,
        name="settings.yaml",
    )
    assert load_settings(path) == Settings(
        blank_symbol=".", left_token="L", right_token="R", max_steps=50
    )


def test_load_empty_settings(write_file):
    assert load_settings(write_file("", name="settings.yaml")) == DEFAULT_SETTINGS


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "blank: ab\n",
        "movements:\n  left: '>'\n",
        "movements: [1, 2]\n",
        "max_steps: 0\n",
        "max_steps: true\n",
        "movements: [unclosed\n",
    ],
)
def test_invalid_settings(write_file, text):
    with pytest.raises(ConfigurationError):
        load_settings(write_file(text, name="settings.yaml"))
