from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from database.db import Base

class Class(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)      # 학급 고유 ID (PK)
    name = Column(String(50), nullable=False)               # 학급 이름 (예: JSS 1A)
    formmaster_id = Column(Integer)                         # 담임 교사 ID (교사 테이블은 외부 관리)

    # ✅ 학급 ↔ 학생 (1:N)
    students = relationship("Student", back_populates="school_class")
