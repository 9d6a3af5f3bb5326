# app/notes/diagnosis_codes.py
"""
Diagnosis selection stored as one newline-delimited text field.

Each line is ``CODE - description``; parsing splits on the first `` - ``.
"""
from typing import Dict, List, Optional

SEPARATOR = " - "

Diagnosis = Dict[str, str]


def format_diagnosis(dx: Diagnosis) -> str:
    return f"{dx['code']}{SEPARATOR}{dx['description']}"


def serialize_diagnoses(selection: List[Diagnosis]) -> str:
    return "\n".join(format_diagnosis(dx) for dx in selection)


def parse_diagnosis_line(line: str) -> Optional[Diagnosis]:
    line = line.strip()
    if not line:
        return None
    code, sep, description = line.partition(SEPARATOR)
    if not sep:
        return {"code": code.strip(), "description": ""}
    return {"code": code.strip(), "description": description.strip()}


def parse_diagnoses(text: Optional[str]) -> List[Diagnosis]:
    if not text:
        return []
    parsed = []
    for line in text.split("\n"):
        dx = parse_diagnosis_line(line)
        if dx:
            parsed.append(dx)
    return parsed


def add_diagnosis(selection: List[Diagnosis], dx: Diagnosis) -> List[Diagnosis]:
    """Append ``dx`` unless its code is already selected."""
    if any(existing["code"] == dx["code"] for existing in selection):
        return list(selection)
    return [*selection, {"code": dx["code"], "description": dx["description"]}]


def remove_diagnosis(selection: List[Diagnosis], code: str) -> List[Diagnosis]:
    return [dx for dx in selection if dx["code"] != code]
