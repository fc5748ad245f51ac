from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from database.db import get_db
from schemas.common import SuccessEnvelope
from schemas.report_cards import DeleteResult, GenerateReportCards, ReportCard as ReportCardSchema
from services.report_card_service import delete_report_cards, generate_report_cards, list_report_cards
from services.report_store import ReportCardStore

router = APIRouter(prefix="/results", tags=["성적표"])


def get_store(db: Session = Depends(get_db)) -> ReportCardStore:
    return ReportCardStore(db)


def _serialize(rows) -> List[ReportCardSchema]:
    return [ReportCardSchema.from_orm_row(r) for r in rows]


# ==========================================================
# [생성] 성적표 일괄 생성 (기존 범위는 교체)
# ==========================================================

# ✅ [GENERATE] class_id 생략 시 학생이 있는 모든 반을 각각 처리
@router.post("", response_model=SuccessEnvelope[List[ReportCardSchema]])
def generate_results(body: GenerateReportCards, store: ReportCardStore = Depends(get_store)):
    rows = generate_report_cards(store, body.grading_id, body.class_id)
    return SuccessEnvelope(
        data=_serialize(rows),
        message=f"{len(rows)} report cards generated for grading {body.grading_id}",
    )


# ==========================================================
# [조회/삭제]
# ==========================================================

# ✅ [READ] 성적 기간/반/학생 필터, 석차 오름차순
@router.get("", response_model=SuccessEnvelope[List[ReportCardSchema]])
def read_results(
    grading_id: Optional[int] = None,
    class_id: Optional[int] = None,
    student_id: Optional[int] = None,
    store: ReportCardStore = Depends(get_store),
):
    rows = list_report_cards(store, grading_id=grading_id, class_id=class_id, student_id=student_id)
    return SuccessEnvelope(data=_serialize(rows), message="성적표 조회 완료")


# ✅ [DELETE] ?ids=1&ids=2 일괄 삭제
@router.delete("", response_model=SuccessEnvelope[DeleteResult])
def delete_results(ids: List[int] = Query(default=[]), store: ReportCardStore = Depends(get_store)):
    deleted = delete_report_cards(store, ids)
    return SuccessEnvelope(data=DeleteResult(deleted=deleted), message=f"Deleted {deleted} report cards")
