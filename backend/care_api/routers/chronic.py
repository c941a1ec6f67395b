from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from care_api.container import ServiceContainer
from care_api.database import get_db
from care_api.dependencies import get_container
from care_api.models.chronic import ChronicMonitoring, BloodPressureRecord, GlucoseRecord
from care_api.models.patient import Patient
from care_api.schemas.chronic import (
    ChronicCreate,
    ChronicUpdate,
    ChronicResponse,
    BloodPressureCreate,
    BloodPressureResponse,
    GlucoseCreate,
    GlucoseResponse,
)

router = APIRouter()


def _with_patient_name():
    return select(ChronicMonitoring, Patient.full_name).join(
        Patient, ChronicMonitoring.patient_id == Patient.id
    )


def _to_response(record: ChronicMonitoring, patient_name: Optional[str]) -> ChronicResponse:
    response = ChronicResponse.model_validate(record)
    response.patient_name = patient_name
    return response


async def _get_or_404(db: AsyncSession, monitoring_id: int) -> ChronicMonitoring:
    record = await db.get(ChronicMonitoring, monitoring_id)
    if not record:
        raise HTTPException(status_code=404, detail="Chronic condition monitoring not found")
    return record


@router.get("", response_model=list[ChronicResponse])
async def list_chronic(
    patient_id: Optional[int] = Query(None, alias="pacienteId"),
    condition_type: Optional[str] = Query(None, alias="tipoCondicao"),
    db: AsyncSession = Depends(get_db),
):
    query = _with_patient_name()
    if patient_id is not None:
        query = query.where(ChronicMonitoring.patient_id == patient_id)
    if condition_type:
        query = query.where(ChronicMonitoring.condition_type == condition_type)
    result = await db.execute(query.order_by(ChronicMonitoring.created_at.desc(), ChronicMonitoring.id.desc()))
    return [_to_response(record, name) for record, name in result.all()]


@router.get("/{monitoring_id}", response_model=ChronicResponse)
async def get_chronic(monitoring_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(_with_patient_name().where(ChronicMonitoring.id == monitoring_id))
    row = result.first()
    if not row:
        raise HTTPException(status_code=404, detail="Chronic condition monitoring not found")
    return _to_response(*row)


@router.post("", response_model=ChronicResponse, status_code=201)
async def create_chronic(data: ChronicCreate, container: ServiceContainer = Depends(get_container)):
    """Create the record and set the matching patient flag in one transaction."""
    record = await container.monitoring.create_chronic(data)
    return ChronicResponse.model_validate(record)


@router.put("/{monitoring_id}", response_model=ChronicResponse)
async def update_chronic(monitoring_id: int, data: ChronicUpdate, db: AsyncSession = Depends(get_db)):
    record = await _get_or_404(db, monitoring_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(record, key, value)
    await db.flush()
    await db.refresh(record)
    return ChronicResponse.model_validate(record)


@router.post("/{monitoring_id}/pressao-arterial", response_model=BloodPressureResponse, status_code=201)
async def add_blood_pressure(
    monitoring_id: int,
    data: BloodPressureCreate,
    db: AsyncSession = Depends(get_db),
):
    await _get_or_404(db, monitoring_id)
    record = BloodPressureRecord(chronic_monitoring_id=monitoring_id, **data.model_dump())
    db.add(record)
    await db.flush()
    await db.refresh(record)
    return BloodPressureResponse.model_validate(record)


@router.get("/{monitoring_id}/pressao-arterial", response_model=list[BloodPressureResponse])
async def list_blood_pressure(monitoring_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(BloodPressureRecord)
        .where(BloodPressureRecord.chronic_monitoring_id == monitoring_id)
        .order_by(BloodPressureRecord.measurement_date.desc())
    )
    return [BloodPressureResponse.model_validate(r) for r in result.scalars().all()]


@router.post("/{monitoring_id}/glicemia", response_model=GlucoseResponse, status_code=201)
async def add_glucose(
    monitoring_id: int,
    data: GlucoseCreate,
    db: AsyncSession = Depends(get_db),
):
    await _get_or_404(db, monitoring_id)
    record = GlucoseRecord(chronic_monitoring_id=monitoring_id, **data.model_dump())
    db.add(record)
    await db.flush()
    await db.refresh(record)
    return GlucoseResponse.model_validate(record)


@router.get("/{monitoring_id}/glicemia", response_model=list[GlucoseResponse])
async def list_glucose(monitoring_id: int, db: AsyncSession = Depends(get_db)):
    result = await db.execute(
        select(GlucoseRecord)
        .where(GlucoseRecord.chronic_monitoring_id == monitoring_id)
        .order_by(GlucoseRecord.measurement_date.desc())
    )
    return [GlucoseResponse.model_validate(r) for r in result.scalars().all()]
