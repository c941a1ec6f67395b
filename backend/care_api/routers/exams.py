from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from care_api.database import get_db
from care_api.models.exam import Exam
from care_api.models.patient import Patient
from care_api.schemas.exam import ExamCreate, ExamUpdate, ExamResponse

router = APIRouter()


def _with_patient_name():
    return select(Exam, Patient.full_name).join(Patient, Exam.patient_id == Patient.id)


def _to_response(exam: Exam, patient_name: Optional[str]) -> ExamResponse:
    response = ExamResponse.model_validate(exam)
    response.patient_name = patient_name
    return response


async def _require_patient(db: AsyncSession, patient_id: int) -> Patient:
    patient = await db.get(Patient, patient_id)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient


@router.get("", response_model=list[ExamResponse])
async def list_exams(
    patient_id: Optional[int] = Query(None, alias="pacienteId"),
    status: Optional[str] = Query(None),
    exam_type: Optional[str] = Query(None, alias="tipoExame"),
    db: AsyncSession = Depends(get_db),
):
    query = _with_patient_name()
    if patient_id is not None:
        query = query.where(Exam.patient_id == patient_id)
    if status:
        query = query.where(Exam.status == status)
    if exam_type:
        query = query.where(Exam.exam_type == exam_type)

    result = await db.execute(query.order_by(Exam.scheduled_date.desc()))
    return [_to_response(exam, name) for exam, name in result.all()]


@router.get("/{exam_id}", response_model=ExamResponse)
async def get_exam(exam_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(_with_patient_name().where(Exam.id == exam_id))
    row = result.first()
    if not row:
        raise HTTPException(status_code=404, detail="Exam not found")
    return _to_response(*row)


@router.post("", response_model=ExamResponse, status_code=201)
async def create_exam(data: ExamCreate, db: AsyncSession = Depends(get_db)):
    patient = await _require_patient(db, data.patient_id)
    exam = Exam(**data.model_dump())
    db.add(exam)
    await db.flush()
    await db.refresh(exam)
    return _to_response(exam, patient.full_name)


@router.put("/{exam_id}", response_model=ExamResponse)
async def update_exam(exam_id: int, data: ExamUpdate, db: AsyncSession = Depends(get_db)):
    exam = await db.get(Exam, exam_id)
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")

    update_data = data.model_dump(exclude_unset=True)
    if "patient_id" in update_data:
        await _require_patient(db, update_data["patient_id"])
    for key, value in update_data.items():
        setattr(exam, key, value)

    await db.flush()
    await db.refresh(exam)
    patient = await db.get(Patient, exam.patient_id)
    return _to_response(exam, patient.full_name if patient else None)


@router.delete("/{exam_id}")
async def delete_exam(exam_id: int, db: AsyncSession = Depends(get_db)):
    exam = await db.get(Exam, exam_id)
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")
    await db.delete(exam)
    await db.flush()
    return {"deleted": True, "exam_id": exam_id}
