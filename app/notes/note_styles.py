# app/notes/note_styles.py
"""
Note styles and note content assembly.

Each style is registered once with its ordered, labeled sections and the
fields that must be present before a note in that style can be signed.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

SUMMARY_LENGTH = 200


class NoteStyle(str, Enum):
    SOAP = "soap"
    DAP = "dap"
    BIRP = "birp"
    GIRP = "girp"
    COMPREHENSIVE = "comprehensive"
    FREEFORM = "freeform"


class NoteType(str, Enum):
    PROGRESS_NOTE = "progress_note"
    CHART_NOTE = "chart_note"
    DIAGNOSIS_TREATMENT = "diagnosis_treatment"


@dataclass(frozen=True)
class NoteStyleSpec:
    style: NoteStyle
    name: str
    description: str
    # (HEADER, field) pairs; ignored when body_field is set
    sections: Tuple[Tuple[str, str], ...] = ()
    body_field: Optional[str] = None
    required_fields: Tuple[str, ...] = field(default_factory=tuple)

    def build(self, fields: Mapping[str, object]) -> str:
        if self.body_field:
            return _text(fields.get(self.body_field))
        return "\n\n".join(f"{header}:\n{_text(fields.get(name))}" for header, name in self.sections)


def _text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def _present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) > 0
    return True


NOTE_STYLE_SPECS: Dict[NoteStyle, NoteStyleSpec] = {
    NoteStyle.SOAP: NoteStyleSpec(
        style=NoteStyle.SOAP,
        name="SOAP",
        description="Subjective, Objective, Assessment, Plan",
        sections=(
            ("SUBJECTIVE", "subjective"),
            ("OBJECTIVE", "objective"),
            ("ASSESSMENT", "assessment"),
            ("PLAN", "plan"),
        ),
        required_fields=("subjective", "objective", "assessment", "plan"),
    ),
    NoteStyle.DAP: NoteStyleSpec(
        style=NoteStyle.DAP,
        name="DAP",
        description="Data, Assessment, Plan",
        sections=(
            ("DATA", "data"),
            ("ASSESSMENT", "dap_assessment"),
            ("PLAN", "dap_plan"),
        ),
        required_fields=("data", "dap_assessment", "dap_plan"),
    ),
    NoteStyle.BIRP: NoteStyleSpec(
        style=NoteStyle.BIRP,
        name="BIRP",
        description="Behavior, Intervention, Response, Plan",
        sections=(
            ("BEHAVIOR", "behavior"),
            ("INTERVENTION", "intervention"),
            ("RESPONSE", "response"),
            ("PLAN", "birp_plan"),
        ),
        required_fields=("behavior", "intervention", "response", "birp_plan"),
    ),
    NoteStyle.GIRP: NoteStyleSpec(
        style=NoteStyle.GIRP,
        name="GIRP",
        description="Goals, Intervention, Response, Plan",
        sections=(
            ("GOALS", "goals"),
            ("INTERVENTION", "girp_intervention"),
            ("RESPONSE", "girp_response"),
            ("PLAN", "girp_plan"),
        ),
        required_fields=("goals", "girp_intervention", "girp_response", "girp_plan"),
    ),
    NoteStyle.COMPREHENSIVE: NoteStyleSpec(
        style=NoteStyle.COMPREHENSIVE,
        name="Comprehensive",
        description="Full clinical note with MSE",
        body_field="clinical_impression",
        required_fields=("chief_complaint", "presenting_problem", "interventions", "clinical_impression"),
    ),
    NoteStyle.FREEFORM: NoteStyleSpec(
        style=NoteStyle.FREEFORM,
        name="Free-form",
        description="Simple narrative note",
        body_field="freeform_note",
        required_fields=("freeform_note",),
    ),
}

SECTION_HEADERS = sorted(
    {header for spec in NOTE_STYLE_SPECS.values() for header, _ in spec.sections}
)


def get_style_spec(style) -> NoteStyleSpec:
    return NOTE_STYLE_SPECS[NoteStyle(style)]


def list_note_styles() -> List[Dict[str, str]]:
    return [
        {"id": spec.style.value, "name": spec.name, "description": spec.description}
        for spec in NOTE_STYLE_SPECS.values()
    ]


def build_note_content(style, fields: Mapping[str, object]) -> str:
    """Assemble the flat note body for a style from its form fields."""
    return get_style_spec(style).build(fields)


def build_content_for_note(note_type, style, fields: Mapping[str, object], diagnosis_text: str = "") -> str:
    """Note body for any note type: chart notes and diagnosis entries carry their own text."""
    note_type = NoteType(note_type)
    if note_type == NoteType.CHART_NOTE:
        return _text(fields.get("chart_note_content"))
    if note_type == NoteType.DIAGNOSIS_TREATMENT:
        plan_text = _text(fields.get("treatment_plan_text"))
        return plan_text or diagnosis_text
    return build_note_content(style, fields)


def missing_required_fields(
    note_type,
    style,
    fields: Mapping[str, object],
    diagnoses: Sequence[object] = (),
) -> List[str]:
    """Names of the fields that must be filled before signing. Presence only."""
    note_type = NoteType(note_type)
    if note_type == NoteType.DIAGNOSIS_TREATMENT:
        return [] if diagnoses else ["diagnosis"]
    if note_type == NoteType.CHART_NOTE:
        return [] if _present(fields.get("chart_note_content")) else ["chart_note_content"]
    spec = get_style_spec(style)
    return [name for name in spec.required_fields if not _present(fields.get(name))]


def summarize(content: Optional[str]) -> str:
    return (content or "")[:SUMMARY_LENGTH]
