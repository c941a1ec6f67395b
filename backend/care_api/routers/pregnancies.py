from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from care_api.container import ServiceContainer
from care_api.database import get_db
from care_api.dependencies import get_container
from care_api.models.exam import Exam
from care_api.models.patient import Patient
from care_api.models.pregnancy import PregnancyMonitoring, PregnancyExam
from care_api.schemas.pregnancy import (
    PregnancyCreate,
    PregnancyUpdate,
    PregnancyResponse,
    PregnancyDetail,
    PregnancyExamCreate,
    PregnancyExamUpdate,
    PregnancyExamResponse,
)

router = APIRouter()


def _with_patient_name():
    return select(PregnancyMonitoring, Patient.full_name).join(
        Patient, PregnancyMonitoring.patient_id == Patient.id
    )


def _to_response(record: PregnancyMonitoring, patient_name: Optional[str]) -> PregnancyResponse:
    response = PregnancyResponse.model_validate(record)
    response.patient_name = patient_name
    return response


def _exam_response(link: PregnancyExam, exam: Optional[Exam]) -> PregnancyExamResponse:
    response = PregnancyExamResponse.model_validate(link)
    if exam is not None:
        response.exam_type = exam.exam_type
        response.scheduled_date = exam.scheduled_date
        response.status = exam.status
    return response


@router.get("", response_model=list[PregnancyResponse])
async def list_pregnancies(
    patient_id: Optional[int] = Query(None, alias="pacienteId"),
    db: AsyncSession = Depends(get_db),
):
    query = _with_patient_name()
    if patient_id is not None:
        query = query.where(PregnancyMonitoring.patient_id == patient_id)
    result = await db.execute(query.order_by(PregnancyMonitoring.created_at.desc(), PregnancyMonitoring.id.desc()))
    return [_to_response(record, name) for record, name in result.all()]


@router.get("/{pregnancy_id}", response_model=PregnancyDetail)
async def get_pregnancy(pregnancy_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(_with_patient_name().where(PregnancyMonitoring.id == pregnancy_id))
    row = result.first()
    if not row:
        raise HTTPException(status_code=404, detail="Pregnancy monitoring not found")
    record, patient_name = row

    exams_result = await db.execute(
        select(PregnancyExam, Exam)
        .join(Exam, PregnancyExam.exam_id == Exam.id)
        .where(PregnancyExam.pregnancy_id == pregnancy_id)
        .order_by(PregnancyExam.id)
    )
    detail = PregnancyDetail(**_to_response(record, patient_name).model_dump())
    detail.exams = [_exam_response(link, exam) for link, exam in exams_result.all()]
    return detail


@router.post("", response_model=PregnancyResponse, status_code=201)
async def create_pregnancy(data: PregnancyCreate, container: ServiceContainer = Depends(get_container)):
    """Create the record and flag the patient as pregnant in one transaction."""
    record = await container.monitoring.create_pregnancy(data)
    return PregnancyResponse.model_validate(record)


@router.put("/{pregnancy_id}", response_model=PregnancyResponse)
async def update_pregnancy(pregnancy_id: int, data: PregnancyUpdate, db: AsyncSession = Depends(get_db)):
    record = await db.get(PregnancyMonitoring, pregnancy_id)
    if not record:
        raise HTTPException(status_code=404, detail="Pregnancy monitoring not found")

    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(record, key, value)

    await db.flush()
    await db.refresh(record)
    return PregnancyResponse.model_validate(record)


@router.post("/{pregnancy_id}/exames", response_model=PregnancyExamResponse, status_code=201)
async def add_pregnancy_exam(
    pregnancy_id: int,
    data: PregnancyExamCreate,
    db: AsyncSession = Depends(get_db),
):
    if not await db.get(PregnancyMonitoring, pregnancy_id):
        raise HTTPException(status_code=404, detail="Pregnancy monitoring not found")
    exam = await db.get(Exam, data.exam_id)
    if not exam:
        raise HTTPException(status_code=404, detail="Exam not found")

    link = PregnancyExam(pregnancy_id=pregnancy_id, **data.model_dump())
    db.add(link)
    await db.flush()
    await db.refresh(link)
    return _exam_response(link, exam)


@router.put("/exames/{link_id}", response_model=PregnancyExamResponse)
async def update_pregnancy_exam(link_id: int, data: PregnancyExamUpdate, db: AsyncSession = Depends(get_db)):
    link = await db.get(PregnancyExam, link_id)
    if not link:
        raise HTTPException(status_code=404, detail="Pregnancy exam not found")
    link.is_completed = data.is_completed
    await db.flush()
    await db.refresh(link)
    return _exam_response(link, await db.get(Exam, link.exam_id))
