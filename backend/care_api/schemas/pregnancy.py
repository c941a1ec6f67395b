from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional


class PregnancyBase(BaseModel):
    last_period_date: Optional[date] = None
    expected_birth_date: Optional[date] = None
    pregnancy_number: Optional[int] = None
    risk_classification: Optional[str] = None
    first_appointment_date: Optional[date] = None
    has_pregnancy_card: bool = False


class PregnancyCreate(PregnancyBase):
    patient_id: int


class PregnancyUpdate(BaseModel):
    last_period_date: Optional[date] = None
    expected_birth_date: Optional[date] = None
    pregnancy_number: Optional[int] = None
    risk_classification: Optional[str] = None
    first_appointment_date: Optional[date] = None
    has_pregnancy_card: Optional[bool] = None


class PregnancyExamCreate(BaseModel):
    exam_id: int
    is_completed: bool = False


class PregnancyExamUpdate(BaseModel):
    is_completed: bool


class PregnancyExamResponse(BaseModel):
    id: int
    pregnancy_id: int
    exam_id: int
    is_completed: bool
    exam_type: Optional[str] = None
    scheduled_date: Optional[date] = None
    status: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PregnancyResponse(PregnancyBase):
    id: int
    patient_id: int
    patient_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PregnancyDetail(PregnancyResponse):
    exams: list[PregnancyExamResponse] = []
