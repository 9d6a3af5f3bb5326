# app/system_services/create_appointment.py
from datetime import date
from typing import List, Optional

from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.time import end_of_day, start_of_day, to_utc
from app.system_models.appointment_model.appointment_model import Appointment
from app.system_models.appointment_model.appointment_schemas import AppointmentCreate
from app.system_services.create_patient import get_patient


async def create_appointment(db: AsyncSession, appointment: AppointmentCreate, location_id: str):
    """
    Mirror an appointment from the scheduling system.

    An appointment already imported under the same external id is refreshed
    in place instead of duplicated.
    """
    await get_patient(db, appointment.patient_id, location_id)

    data = appointment.model_dump()
    data["start_time"] = to_utc(data["start_time"])
    data["end_time"] = to_utc(data["end_time"])

    db_appointment = None
    if appointment.external_id:
        result = await db.execute(
            select(Appointment).where(
                Appointment.external_id == appointment.external_id,
                Appointment.location_id == location_id,
            )
        )
        db_appointment = result.scalars().first()

    if db_appointment is None:
        db_appointment = Appointment(**data, location_id=location_id)
        db.add(db_appointment)
    else:
        for key, value in data.items():
            setattr(db_appointment, key, value)

    await db.commit()
    await db.refresh(db_appointment)
    return db_appointment


async def list_appointments(
    db: AsyncSession,
    location_id: str,
    patient_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[Appointment]:
    query = select(Appointment).where(Appointment.location_id == location_id)
    if patient_id is not None:
        query = query.where(Appointment.patient_id == patient_id)
    if start_date:
        query = query.where(Appointment.start_time >= to_utc(start_of_day(start_date)))
    if end_date:
        query = query.where(Appointment.start_time <= to_utc(end_of_day(end_date)))
    result = await db.execute(query.order_by(Appointment.start_time))
    return result.scalars().all()
