import pytest

from quiniela.parsing.text_normalizer import has_separator, normalize_text


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Real Madrid – Barcelona", "Real Madrid - Barcelona"),
        ("Real Madrid—Barcelona", "Real Madrid - Barcelona"),
        ("Betis − Celta", "Betis - Celta"),
        ("Betis &ndash; Celta", "Betis - Celta"),
        ("Betis&#8211;Celta", "Betis - Celta"),
        ("GETAFE.-OSASUNA", "GETAFE - OSASUNA"),
        ("Celta  -Rayo", "Celta - Rayo"),
        ("Celta- Rayo", "Celta - Rayo"),
        ("Celta-- Rayo", "Celta - Rayo"),
        ("Celta.-- Rayo", "Celta - Rayo"),
        ("Getafe - - Osasuna", "Getafe - Osasuna"),
        ("Getafe– -Osasuna", "Getafe - Osasuna"),
        ("Celta\t\t- Rayo", "Celta - Rayo"),
    ],
)
def test_dashes_become_canonical_separator(raw, expected):
    assert normalize_text(raw) == expected


def test_hyphen_inside_a_word_is_kept():
    assert normalize_text("Saint-Etienne - Lyon") == "Saint-Etienne - Lyon"
    assert normalize_text("P-15 Getafe") == "P-15 Getafe"


def test_line_breaks_survive_and_blank_lines_go():
    raw = "  1. Getafe - Osasuna  \r\n\r\n\t2. Betis - Celta\r3. Eibar - Elche\n\n"
    assert normalize_text(raw) == "1. Getafe - Osasuna\n2. Betis - Celta\n3. Eibar - Elche"


@pytest.mark.parametrize("raw", ["", "   ", "\n \n\t\n"])
def test_blank_input_normalizes_to_empty(raw):
    assert normalize_text(raw) == ""


@pytest.mark.parametrize(
    "raw",
    [
        "Real Madrid – Barcelona\nGETAFE.-OSASUNA",
        "A  -  B  C\n\n  D&mdash;E ",
        "Saint-Etienne‐Lyon - - Nantes",
        "x.- y . - z",
        "Celta-- Rayo",
        "Celta --Rayo",
        "Celta.-- Rayo",
        "sa-- ; #18;8 ",
    ],
)
def test_normalization_is_idempotent(raw):
    once = normalize_text(raw)
    assert normalize_text(once) == once


def test_has_separator():
    assert has_separator("Celta - Rayo")
    assert has_separator("GETAFE-OSASUNA")
    assert not has_separator("Celta Rayo")
    assert not has_separator("P-15")
