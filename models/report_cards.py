from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base

class ReportCard(Base):
    __tablename__ = "report_cards"  # 성적표 (성적 기간 × 반 × 학생 당 1건)
    __table_args__ = (
        UniqueConstraint("student_id", "class_id", "grading_id", name="uq_report_card_scope"),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False)
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)
    grading_id = Column(Integer, ForeignKey("gradings.id"), nullable=False, index=True)

    total_score = Column(Float, nullable=False, default=0)      # 과목 점수 합계
    average_score = Column(Float, nullable=False, default=0)    # 과목 평균
    class_position = Column(String(10))                         # 반 석차 서수 (예: 1st, 2nd)
    position = Column(Integer)                                  # 정렬용 석차 숫자
    remark = Column(String(500))                                # 자동 생성 코멘트
    formmaster_remark = Column(String(500))                     # 담임 코멘트 (생성 시 항상 비어 있음)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))

    student = relationship("Student")
    school_class = relationship("Class")
    grading = relationship("Grading")
