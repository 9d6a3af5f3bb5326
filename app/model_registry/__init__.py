# app/model_registry/__init__.py


# Register all models here

# User models
from app.users.user_models.user_model import User
from app.users.auth_token_model.token_model import Token

# System models
from app.system_models.patient_model.patient_model import Patient
from app.system_models.appointment_model.appointment_model import Appointment
from app.system_models.progress_note_model.progress_note_model import ProgressNote
from app.system_models.patient_diagnosis_model.patient_diagnosis_model import PatientDiagnosis
from app.system_models.audit_log_model.audit_log_model import AuditLog
from app.system_models.billing_model.billing_model import FeeSchedule, CustomPayer, PracticeInfo
