# app/helpers/exceptions.py
from typing import List, Optional

from fastapi import HTTPException


class ChartError(Exception):
    """Base class for domain errors raised by the chart services."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PatientNotFoundError(ChartError, LookupError):
    status_code = 404

    def __init__(self, patient_id):
        super().__init__(f"Patient {patient_id} not found")
        self.patient_id = patient_id


class NoteNotFoundError(ChartError, LookupError):
    status_code = 404

    def __init__(self, note_id):
        super().__init__(f"Note {note_id} not found")
        self.note_id = note_id


class NoteAccessDeniedError(ChartError):
    status_code = 403

    def __init__(self, note_id):
        super().__init__(f"Access denied to note {note_id}")
        self.note_id = note_id


class InvalidNoteTransitionError(ChartError):
    status_code = 409


class NoteLockedError(InvalidNoteTransitionError):
    """A signed or completed note was asked to change."""

    def __init__(self, note_id, status: str):
        super().__init__(f"Note {note_id} is {status} and cannot be modified")
        self.note_id = note_id
        self.status = status


class NoteValidationError(ChartError, ValueError):
    status_code = 422

    def __init__(self, message: str, missing_fields: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_fields = missing_fields or []


class DuplicatePayerError(ChartError):
    status_code = 400

    def __init__(self, payer_id: str):
        super().__init__("Payer ID already exists")
        self.payer_id = payer_id


def to_http_exception(exc: ChartError) -> HTTPException:
    detail = exc.message
    missing = getattr(exc, "missing_fields", None)
    if missing:
        detail = {"message": exc.message, "missing_fields": missing}
    return HTTPException(status_code=exc.status_code, detail=detail)
