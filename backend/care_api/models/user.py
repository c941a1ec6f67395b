from sqlalchemy import Boolean, Column, DateTime, Index, Integer, String, func

from care_api.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False)
    password = Column(String(100), nullable=False)  # bcrypt hash, never plaintext
    name = Column(String(200))
    role = Column(String(20), nullable=False, default="staff")  # "admin" | "doctor" | "nurse" | "staff"
    is_admin = Column(Boolean, nullable=False, default=False)
    department = Column(String(100))
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    last_login = Column(DateTime(timezone=True))

    __table_args__ = (
        Index("uq_users_email_lower", func.lower(email), unique=True),
    )
