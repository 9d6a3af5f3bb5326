# app/reference/cpt_codes.py
from typing import Dict, List

CPT_DESCRIPTIONS: Dict[str, str] = {
    # Diagnostic Evaluation
    "90791": "Intake and Assessment",
    "90792": "Psychiatric Diagnostic Eval w/ Medical Services",
    # Individual Psychotherapy
    "90832": "Psychotherapy, 16-37 min",
    "90834": "Psychotherapy, 38-52 min",
    "90837": "Psychotherapy, 53+ min",
    # Crisis Psychotherapy
    "90839": "Psychotherapy for Crisis, first 60 min",
    "90840": "Psychotherapy for Crisis, +30 min add-on",
    # Family/Couples Therapy
    "90846": "Family Psychotherapy w/o Patient, 50 min",
    "90847": "Family Psychotherapy w/ Patient, 50 min",
    "90849": "Multiple Family Group Psychotherapy",
    # Group Therapy
    "90853": "Group Psychotherapy",
    # Psychotherapy Add-Ons
    "90833": "Psychotherapy, 16-37 min add-on",
    "90836": "Psychotherapy, 38-52 min add-on",
    "90838": "Psychotherapy, 53+ min add-on",
    "90785": "Interactive Complexity add-on",
    # Psychological Testing
    "96130": "Psychological Testing Evaluation, first hour",
    "96131": "Psychological Testing Evaluation, +hour",
    "96136": "Psychological Test Administration, first 30 min",
    "96137": "Psychological Test Administration, +30 min",
    "96138": "Psych Test Technician Administration, first 30 min",
    "96139": "Psych Test Technician Administration, +30 min",
    # Other Services
    "90882": "Environmental Intervention",
    "90887": "Interpretation or Explanation of Results",
    "99354": "Prolonged Service, first hour",
    "99355": "Prolonged Service, +30 min",
}

DEFAULT_CPT_CODE = "90834"


def describe_cpt(code: str) -> str:
    """Description for a CPT code; unknown codes describe themselves."""
    return CPT_DESCRIPTIONS.get(code, code)


def list_cpt_codes() -> List[Dict[str, str]]:
    return [{"code": code, "description": description} for code, description in CPT_DESCRIPTIONS.items()]
