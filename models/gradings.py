from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from database.db import Base

class GradingPolicy(Base):
    __tablename__ = "grading_policies"  # 채점 정책 (통과 기준 점수 등)

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    description = Column(String(500))
    pass_mark = Column(Float)                                  # 통과 기준 평균 (없으면 미달 안내 생략)
    max_score = Column(Float, nullable=False, default=100)


class Grading(Base):
    __tablename__ = "gradings"  # 성적 기간 (예: 2025/2026 1학기 중간)

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    session = Column(String(20), nullable=False)              # 학년도 (예: 2025/2026)
    term = Column(String(20), nullable=False)                 # 학기 (First / Second / Third)
    published = Column(Boolean, nullable=False, default=False)
    grading_policy_id = Column(Integer, ForeignKey("grading_policies.id"))

    policy = relationship("GradingPolicy")
