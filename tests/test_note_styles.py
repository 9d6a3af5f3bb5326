# tests/test_note_styles.py
import pytest

from app.notes.note_styles import (
    NoteStyle,
    build_content_for_note,
    build_note_content,
    list_note_styles,
    missing_required_fields,
    summarize,
)


def test_soap_content_is_labeled_blocks_in_fixed_order():
    content = build_note_content("soap", {
        "plan": "P",
        "subjective": "S",
        "assessment": "A",
        "objective": "O",
    })
    assert content == "SUBJECTIVE:\nS\n\nOBJECTIVE:\nO\n\nASSESSMENT:\nA\n\nPLAN:\nP"


def test_dap_uses_its_own_field_names():
    content = build_note_content(NoteStyle.DAP, {"data": "D", "dap_assessment": "A", "dap_plan": "P"})
    assert content == "DATA:\nD\n\nASSESSMENT:\nA\n\nPLAN:\nP"


def test_missing_section_still_gets_its_header():
    content = build_note_content("birp", {"behavior": "B", "intervention": "I", "response": "R"})
    assert content.endswith("PLAN:\n")


@pytest.mark.parametrize("style, field", [("freeform", "freeform_note"), ("comprehensive", "clinical_impression")])
def test_narrative_styles_return_text_verbatim(style, field):
    assert build_note_content(style, {field: "  As written.\n"}) == "  As written.\n"


def test_unknown_style_is_rejected():
    with pytest.raises(ValueError):
        build_note_content("haiku", {})


def test_missing_fields_for_progress_note():
    missing = missing_required_fields("progress_note", "soap", {"subjective": "S", "objective": ""})
    assert missing == ["objective", "assessment", "plan"]


def test_presence_only_whitespace_counts_as_present():
    fields = {"goals": " ", "girp_intervention": "I", "girp_response": "R", "girp_plan": "P"}
    assert missing_required_fields("progress_note", "girp", fields) == []


def test_comprehensive_requires_four_fields():
    missing = missing_required_fields("progress_note", "comprehensive", {"clinical_impression": "x"})
    assert missing == ["chief_complaint", "presenting_problem", "interventions"]


def test_diagnosis_entry_requires_a_diagnosis():
    assert missing_required_fields("diagnosis_treatment", "soap", {}, []) == ["diagnosis"]
    assert missing_required_fields("diagnosis_treatment", "soap", {}, [{"code": "F41.1"}]) == []


def test_chart_note_requires_content():
    assert missing_required_fields("chart_note", "freeform", {}) == ["chart_note_content"]


def test_content_for_chart_and_diagnosis_notes():
    assert build_content_for_note("chart_note", "freeform", {"chart_note_content": "Called client."}) == "Called client."
    assert build_content_for_note("diagnosis_treatment", "soap", {}, "F41.1 - GAD") == "F41.1 - GAD"
    assert build_content_for_note(
        "diagnosis_treatment", "soap", {"treatment_plan_text": "Plan text"}, "F41.1 - GAD"
    ) == "Plan text"


def test_summary_is_first_200_characters():
    assert summarize("x" * 250) == "x" * 200
    assert summarize(None) == ""


def test_style_catalogue_lists_every_style():
    ids = [style["id"] for style in list_note_styles()]
    assert ids == ["soap", "dap", "birp", "girp", "comprehensive", "freeform"]
