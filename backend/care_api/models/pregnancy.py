from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func

from care_api.database import Base

HIGH_RISK = "alto"


class PregnancyMonitoring(Base):
    __tablename__ = "pregnancy_monitoring"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    last_period_date = Column(Date)
    expected_birth_date = Column(Date)
    pregnancy_number = Column(Integer)
    risk_classification = Column(String(20))  # "baixo" | "medio" | "alto"
    first_appointment_date = Column(Date)
    has_pregnancy_card = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class PregnancyExam(Base):
    __tablename__ = "pregnancy_exams"

    id = Column(Integer, primary_key=True, index=True)
    pregnancy_id = Column(Integer, ForeignKey("pregnancy_monitoring.id", ondelete="CASCADE"), nullable=False, index=True)
    exam_id = Column(Integer, ForeignKey("exams.id", ondelete="CASCADE"), nullable=False)
    is_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
