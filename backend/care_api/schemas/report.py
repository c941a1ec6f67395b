from pydantic import BaseModel
from datetime import date
from typing import Optional


class SummaryReport(BaseModel):
    total_patients: int
    pregnant_patients: int
    hypertensive_patients: int
    diabetic_patients: int
    pending_exams: int


class HighRiskPregnancyAlert(BaseModel):
    id: int
    patient_id: int
    patient_name: str


class BloodPressureAlert(BaseModel):
    id: int
    patient_id: int
    patient_name: str
    measurement_date: date
    systolic: int
    diastolic: int
    notes: Optional[str] = None


class GlucoseAlert(BaseModel):
    id: int
    patient_id: int
    patient_name: str
    measurement_date: date
    glucose_level: float
    measurement_type: Optional[str] = None
    notes: Optional[str] = None


class AlertsReport(BaseModel):
    high_risk_pregnancies: list[HighRiskPregnancyAlert]
    high_blood_pressure: list[BloodPressureAlert]
    high_glucose: list[GlucoseAlert]
