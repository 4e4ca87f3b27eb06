import pytest

from utils.name_normalizer import normalize_name, is_non_person_label, salesperson_key


@pytest.mark.parametrize("raw, expected", [
    ("1-7 Carol (FUNCIONARIO)", "Carol"),
    ("12-345 Ana Paula", "Ana Paula"),
    ("Bruno (GERENTE)", "Bruno"),
    ("  Dan  ", "Dan"),
    ("Edilma", "Edilma"),
    ("", ""),
    (None, ""),
])
def test_normalize_name(raw, expected):
    assert normalize_name(raw) == expected


@pytest.mark.parametrize("raw", [
    "1-7 Carol (FUNCIONARIO)",
    "1-2 3-4 Ana",
    "Ana (A) (B)",
    " 1-2 Ana (x) ",
    "1-2 (x)",
    "Ana ((x))",
    "5-6 Ana(x)(y)",
    "1-2\t Bruno",
    "(only role)",
    "",
])
def test_normalize_name_is_idempotent(raw):
    once = normalize_name(raw)
    assert normalize_name(once) == once


def test_normalize_name_keeps_hyphenated_names():
    assert normalize_name("Ana-Maria") == "Ana-Maria"


@pytest.mark.parametrize("label", ["", "  ", "Total", "TOTAL GERAL", "vendedor", "Data: 01/01/2024"])
def test_non_person_labels_are_skipped(label):
    assert is_non_person_label(label)
    assert salesperson_key(label) == ""


def test_salesperson_key_normalizes_person_rows():
    assert not is_non_person_label("1-7 Carol (FUNCIONARIO)")
    assert salesperson_key("1-7 Carol (FUNCIONARIO)") == "Carol"


def test_salesperson_key_skips_rows_that_normalize_to_nothing():
    assert salesperson_key("1-2 (FUNCIONARIO)") == ""
