"""
services/report_engine.py

- 성적표 계산 엔진 (DB/HTTP 의존 없음, 순수 함수)
  1) aggregate_scores   : 과목별 점수 → 학생별 총점/평균
  2) competition_positions / rank_students : 반 내 석차 (동점자 동일 석차, 1-2-2-4 방식)
  3) ordinal            : 1 → "1st", 11 → "11th", 21 → "21st"
  4) build_class_reports: 한 반의 성적표 레코드 조립
"""

from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from pydantic import BaseModel

from schemas.report_cards import coerce_number
from services.remarks import generate_remark


class StudentAggregate(BaseModel):
    student_id: int
    total_score: float = 0.0
    count: int = 0

    @property
    def average_score(self) -> float:
        return self.total_score / self.count if self.count > 0 else 0.0


# ==========================================================
# [1] 집계
# ==========================================================
def aggregate_scores(scores: Iterable, student_ids: Iterable[int]) -> Dict[int, StudentAggregate]:
    """
    학생 ID 기준으로만 점수를 합산합니다.
    점수 레코드의 class_id 는 보지 않으므로, 반 이동 전 성적도 총점에 포함됩니다.
    명단에 없는 학생의 점수는 무시하고, 점수가 없는 학생은 0점으로 포함합니다.
    """
    totals = {sid: StudentAggregate(student_id=sid) for sid in student_ids}

    for record in scores:
        agg = totals.get(record.student_id)
        if agg is None:
            continue
        agg.total_score += coerce_number(record.score)
        agg.count += 1

    return totals


# ==========================================================
# [2] 석차
# ==========================================================
def competition_positions(averages: Sequence[Tuple[Hashable, float]]) -> Dict[Hashable, int]:
    """
    (키, 평균) 목록 → {키: 석차}
    - 평균 내림차순, 동점이면 입력 순서 유지 (sorted 는 stable)
    - 동점자는 같은 석차, 다음 점수는 (앞선 인원 수 + 1) 등
    """
    ranked = sorted(averages, key=lambda item: item[1], reverse=True)

    positions = {}
    current_position = 0
    last_score: Optional[float] = None
    for i, (key, score) in enumerate(ranked):
        if i == 0 or score != last_score:
            current_position = i + 1
        positions[key] = current_position
        last_score = score

    return positions


def ordinal(n: int) -> str:
    """정수 석차 → 영문 서수 문자열 (n % 100 이 11~13 이면 항상 th)"""
    if n < 1:
        raise ValueError(f"position must be >= 1, got {n}")
    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def rank_students(averages: Sequence[Tuple[int, float]]) -> Dict[int, str]:
    """한 반의 (학생 ID, 평균) 목록 → {학생 ID: "1st"...}. 반 단위로만 호출할 것"""
    return {sid: ordinal(pos) for sid, pos in competition_positions(averages).items()}


# ==========================================================
# [3] 반 단위 성적표 조립
# ==========================================================
def build_class_reports(
    class_id: int,
    grading_id: int,
    student_ids: Sequence[int],
    aggregates: Dict[int, StudentAggregate],
    pass_mark: Optional[float] = None,
) -> List[dict]:
    """
    한 반의 학생 명단 순서대로 성적표 레코드(dict)를 만듭니다.
    반환 dict 의 키는 models.report_cards.ReportCard 컬럼과 동일합니다.
    """
    averages = []
    for sid in student_ids:
        agg = aggregates.get(sid) or StudentAggregate(student_id=sid)
        averages.append((sid, agg.average_score))

    positions = competition_positions(averages)

    records = []
    for sid, average in averages:
        agg = aggregates.get(sid) or StudentAggregate(student_id=sid)
        records.append({
            "student_id": sid,
            "class_id": class_id,
            "grading_id": grading_id,
            "total_score": agg.total_score,
            "average_score": average,
            "class_position": ordinal(positions[sid]),
            "position": positions[sid],
            "remark": generate_remark(average, pass_mark),
            "formmaster_remark": None,
        })

    return records
