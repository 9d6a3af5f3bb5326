# tests/test_diagnosis_codes.py
from app.notes.diagnosis_codes import (
    add_diagnosis,
    parse_diagnoses,
    parse_diagnosis_line,
    remove_diagnosis,
    serialize_diagnoses,
)
from app.reference.icd10_codes import describe_icd10, search_icd10

GAD = {"code": "F41.1", "description": "Generalized anxiety disorder"}
MDD = {"code": "F33.1", "description": "Major depressive disorder, recurrent, moderate"}


def test_serialize_one_line_per_code():
    assert serialize_diagnoses([GAD, MDD]) == (
        "F41.1 - Generalized anxiety disorder\n"
        "F33.1 - Major depressive disorder, recurrent, moderate"
    )


def test_parse_splits_on_first_separator_only():
    dx = parse_diagnosis_line("F43.10 - Post-traumatic stress disorder - unspecified")
    assert dx == {"code": "F43.10", "description": "Post-traumatic stress disorder - unspecified"}


def test_parse_skips_blank_lines():
    assert parse_diagnoses("F41.1 - Generalized anxiety disorder\n\n  \n") == [GAD]
    assert parse_diagnoses(None) == []


def test_line_without_separator_keeps_code():
    assert parse_diagnosis_line("Z63.0") == {"code": "Z63.0", "description": ""}


def test_adding_a_selected_code_is_a_no_op():
    selection = add_diagnosis([GAD], {"code": "F41.1", "description": "something else"})
    assert selection == [GAD]


def test_remove_by_code():
    assert remove_diagnosis([GAD, MDD], "F41.1") == [MDD]


def test_icd10_search_is_case_insensitive_and_limited():
    results = search_icd10("ANXIETY", limit=3)
    assert 0 < len(results) <= 3
    assert all("anxiety" in r["description"].lower() or "anxiety" in r["code"].lower() for r in results)
    assert describe_icd10("F41.1") != ""
