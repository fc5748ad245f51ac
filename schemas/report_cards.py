import math
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


def coerce_number(value: Any) -> float:
    """숫자로 변환할 수 없는 값(None, 문자열, NaN, inf)은 0으로 취급"""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


# ==========================================================
# [엔진 입력용 스키마]
# ==========================================================
class ScoreRecord(BaseModel):
    student_id: int                          # 학생 ID
    subject_id: int                          # 과목 ID
    class_id: int                            # 채점 당시 반 ID
    grading_id: int                          # 성적 기간 ID
    score: float = 0.0                       # 과목 점수 (잘못된 값은 0)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("score", mode="before")
    @classmethod
    def _coerce_score(cls, v):
        return coerce_number(v)


class RosterEntry(BaseModel):
    student_id: int                          # 학생 ID
    class_id: int                            # 현재 소속 반 ID


# ==========================================================
# [요청용 스키마]
# ==========================================================
class GenerateReportCards(BaseModel):
    grading_id: Optional[int] = None         # 필수 (누락 시 서비스에서 ValidationError)
    class_id: Optional[int] = None           # 생략 시 학생이 있는 모든 반


# ==========================================================
# [출력용 스키마]
# ==========================================================
class ReportCard(BaseModel):
    id: int
    student_id: int
    class_id: int
    grading_id: int
    total_score: float
    average_score: float
    class_position: Optional[str] = None
    position: Optional[int] = None
    remark: Optional[str] = None
    formmaster_remark: Optional[str] = None
    created_at: Optional[datetime] = None

    student_name: Optional[str] = None
    admission_number: Optional[str] = None
    class_name: Optional[str] = None
    grading_title: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_orm_row(cls, row) -> "ReportCard":
        """관계 필드(학생/반/성적 기간)를 평탄화해서 응답으로 변환"""
        card = cls.model_validate(row)
        if row.student is not None:
            card.student_name = row.student.full_name
            card.admission_number = row.student.admission_number
        if row.school_class is not None:
            card.class_name = row.school_class.name
        if row.grading is not None:
            card.grading_title = row.grading.title
        return card


class DeleteResult(BaseModel):
    deleted: int                             # 삭제된 성적표 수
