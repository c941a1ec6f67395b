from sqlalchemy import Boolean, Column, Date, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from care_api.database import Base


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(200), nullable=False, index=True)
    cpf = Column(String(14), index=True)
    sus_card = Column(String(20), index=True)
    birth_date = Column(Date)
    gender = Column(String(20))
    address = Column(Text)
    phone = Column(String(20))
    mother_name = Column(String(200))
    profession = Column(String(100))
    education = Column(String(100))
    record_number = Column(String(50))
    is_pregnant = Column(Boolean, nullable=False, default=False)
    is_hypertensive = Column(Boolean, nullable=False, default=False)
    is_diabetic = Column(Boolean, nullable=False, default=False)
    other_groups = Column(Text)
    observations = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
