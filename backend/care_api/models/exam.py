from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from care_api.database import Base

# Statuses counted as "pending" by the summary report
PENDING_EXAM_STATUSES = ("Agendado", "Marcado", "Marcado - Aguardando protocolo")


class Exam(Base):
    __tablename__ = "exams"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)
    exam_type = Column(String(100), nullable=False)
    scheduled_date = Column(Date)
    status = Column(String(50))
    result_url = Column(Text)
    result_text = Column(Text)
    observations = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
