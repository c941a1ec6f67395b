from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from care_api.database import get_db
from care_api.models.patient import Patient
from care_api.schemas.patient import PatientCreate, PatientUpdate, PatientResponse

router = APIRouter()


async def _get_patient_or_404(db: AsyncSession, patient_id: int) -> Patient:
    patient = await db.get(Patient, patient_id)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient


@router.get("", response_model=list[PatientResponse])
async def list_patients(
    search: str = Query("", description="Search by name, CPF or SUS card"),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
):
    query = select(Patient)
    if search:
        pattern = f"%{search}%"
        query = query.where(
            or_(
                Patient.full_name.ilike(pattern),
                Patient.cpf.ilike(pattern),
                Patient.sus_card.ilike(pattern),
            )
        )
    result = await db.execute(query.order_by(Patient.full_name).limit(limit))
    return [PatientResponse.model_validate(p) for p in result.scalars().all()]


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(patient_id: int, db: AsyncSession = Depends(get_db)):
    return PatientResponse.model_validate(await _get_patient_or_404(db, patient_id))


@router.post("", response_model=PatientResponse, status_code=201)
async def create_patient(data: PatientCreate, db: AsyncSession = Depends(get_db)):
    patient = Patient(**data.model_dump())
    db.add(patient)
    await db.flush()
    await db.refresh(patient)
    return PatientResponse.model_validate(patient)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(patient_id: int, data: PatientUpdate, db: AsyncSession = Depends(get_db)):
    patient = await _get_patient_or_404(db, patient_id)

    update_data = data.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(patient, key, value)

    await db.flush()
    await db.refresh(patient)
    return PatientResponse.model_validate(patient)


@router.delete("/{patient_id}")
async def delete_patient(patient_id: int, db: AsyncSession = Depends(get_db)):
    patient = await _get_patient_or_404(db, patient_id)
    await db.delete(patient)
    await db.flush()
    return {"deleted": True, "patient_id": patient_id}
