from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                      # 고유 학생 ID (Primary Key)
    admission_number = Column(String(30), unique=True)                      # 학번
    firstname = Column(String(100), nullable=False)                         # 이름
    surname = Column(String(100), nullable=False)                           # 성
    othername = Column(String(100))                                         # 기타 이름
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)  # 현재 소속 반

    school_class = relationship("Class", back_populates="students")

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.firstname, self.othername, self.surname) if p)
