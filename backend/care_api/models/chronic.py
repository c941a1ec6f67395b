from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from care_api.database import Base

# Condition kind -> patient flag it sets on creation
CONDITION_FLAGS = {
    "hypertension": "is_hypertensive",
    "diabetes": "is_diabetic",
}


class ChronicMonitoring(Base):
    __tablename__ = "chronic_monitoring"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    condition_type = Column(String(20), nullable=False, index=True)
    medications = Column(Text)
    treatment_adherence = Column(String(50))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class BloodPressureRecord(Base):
    __tablename__ = "blood_pressure_records"

    id = Column(Integer, primary_key=True, index=True)
    chronic_monitoring_id = Column(
        Integer, ForeignKey("chronic_monitoring.id", ondelete="CASCADE"), nullable=False, index=True
    )
    measurement_date = Column(Date, nullable=False)
    systolic = Column(Integer, nullable=False)
    diastolic = Column(Integer, nullable=False)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class GlucoseRecord(Base):
    __tablename__ = "glucose_records"

    id = Column(Integer, primary_key=True, index=True)
    chronic_monitoring_id = Column(
        Integer, ForeignKey("chronic_monitoring.id", ondelete="CASCADE"), nullable=False, index=True
    )
    measurement_date = Column(Date, nullable=False)
    glucose_level = Column(Float, nullable=False)
    measurement_type = Column(String(50))  # fasting, postprandial, random
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
