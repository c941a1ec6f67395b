from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from care_api.database import get_db
from care_api.models.appointment import Appointment
from care_api.models.patient import Patient
from care_api.schemas.appointment import AppointmentCreate, AppointmentUpdate, AppointmentResponse

router = APIRouter()


def _with_patient_name():
    return select(Appointment, Patient.full_name).join(Patient, Appointment.patient_id == Patient.id)


def _to_response(appointment: Appointment, patient_name: Optional[str]) -> AppointmentResponse:
    response = AppointmentResponse.model_validate(appointment)
    response.patient_name = patient_name
    return response


async def _require_patient(db: AsyncSession, patient_id: int) -> Patient:
    patient = await db.get(Patient, patient_id)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(
    patient_id: Optional[int] = Query(None, alias="pacienteId"),
    status: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    query = _with_patient_name()
    if patient_id is not None:
        query = query.where(Appointment.patient_id == patient_id)
    if status:
        query = query.where(Appointment.status == status)
    result = await db.execute(query.order_by(Appointment.appointment_date.desc()))
    return [_to_response(appointment, name) for appointment, name in result.all()]


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(appointment_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(_with_patient_name().where(Appointment.id == appointment_id))
    row = result.first()
    if not row:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return _to_response(*row)


@router.post("", response_model=AppointmentResponse, status_code=201)
async def create_appointment(data: AppointmentCreate, db: AsyncSession = Depends(get_db)):
    patient = await _require_patient(db, data.patient_id)
    appointment = Appointment(**data.model_dump())
    db.add(appointment)
    await db.flush()
    await db.refresh(appointment)
    return _to_response(appointment, patient.full_name)


@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdate,
    db: AsyncSession = Depends(get_db),
):
    appointment = await db.get(Appointment, appointment_id)
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")

    update_data = data.model_dump(exclude_unset=True)
    if "patient_id" in update_data:
        await _require_patient(db, update_data["patient_id"])
    for key, value in update_data.items():
        setattr(appointment, key, value)

    await db.flush()
    await db.refresh(appointment)
    patient = await db.get(Patient, appointment.patient_id)
    return _to_response(appointment, patient.full_name if patient else None)


@router.delete("/{appointment_id}")
async def delete_appointment(appointment_id: int, db: AsyncSession = Depends(get_db)):
    appointment = await db.get(Appointment, appointment_id)
    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    await db.delete(appointment)
    await db.flush()
    return {"deleted": True, "appointment_id": appointment_id}
