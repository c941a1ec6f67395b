from pydantic import BaseModel
from datetime import date, datetime
from typing import Optional


class PatientBase(BaseModel):
    full_name: str
    cpf: Optional[str] = None
    sus_card: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    mother_name: Optional[str] = None
    profession: Optional[str] = None
    education: Optional[str] = None
    record_number: Optional[str] = None
    is_pregnant: bool = False
    is_hypertensive: bool = False
    is_diabetic: bool = False
    other_groups: Optional[str] = None
    observations: Optional[str] = None


class PatientCreate(PatientBase):
    pass


class PatientUpdate(BaseModel):
    full_name: Optional[str] = None
    cpf: Optional[str] = None
    sus_card: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    mother_name: Optional[str] = None
    profession: Optional[str] = None
    education: Optional[str] = None
    record_number: Optional[str] = None
    is_pregnant: Optional[bool] = None
    is_hypertensive: Optional[bool] = None
    is_diabetic: Optional[bool] = None
    other_groups: Optional[str] = None
    observations: Optional[str] = None


class PatientResponse(PatientBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
