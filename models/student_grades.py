from sqlalchemy import Column, Float, ForeignKey, Integer
from database.db import Base

class StudentGrade(Base):
    __tablename__ = "student_grades"  # 과목별 성적 (과목 채점 단계에서 기록, 여기서는 읽기 전용)

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False)    # 채점 당시 반 (현재 반과 다를 수 있음)
    grading_id = Column(Integer, ForeignKey("gradings.id"), nullable=False, index=True)
    score = Column(Float)                                                    # 과목 점수
