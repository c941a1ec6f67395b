from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional


class ExamBase(BaseModel):
    patient_id: int
    exam_type: str
    scheduled_date: Optional[date] = None
    status: Optional[str] = None
    result_url: Optional[str] = None
    result_text: Optional[str] = None
    observations: Optional[str] = None


class ExamCreate(ExamBase):
    pass


class ExamUpdate(BaseModel):
    patient_id: Optional[int] = None
    exam_type: Optional[str] = None
    scheduled_date: Optional[date] = None
    status: Optional[str] = None
    result_url: Optional[str] = None
    result_text: Optional[str] = None
    observations: Optional[str] = None


class ExamResponse(ExamBase):
    id: int
    patient_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
