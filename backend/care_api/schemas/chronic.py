from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional


class ChronicCreate(BaseModel):
    patient_id: int
    condition_type: str  # "hypertension" | "diabetes"
    medications: Optional[str] = None
    treatment_adherence: Optional[str] = None


class ChronicUpdate(BaseModel):
    medications: Optional[str] = None
    treatment_adherence: Optional[str] = None


class ChronicResponse(ChronicCreate):
    id: int
    patient_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class BloodPressureCreate(BaseModel):
    measurement_date: date
    systolic: int = Field(gt=0)
    diastolic: int = Field(gt=0)
    notes: Optional[str] = None


class BloodPressureResponse(BloodPressureCreate):
    id: int
    chronic_monitoring_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class GlucoseCreate(BaseModel):
    measurement_date: date
    glucose_level: float = Field(gt=0)
    measurement_type: Optional[str] = None
    notes: Optional[str] = None


class GlucoseResponse(GlucoseCreate):
    id: int
    chronic_monitoring_id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
