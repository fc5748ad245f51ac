"""
services/report_card_service.py

- 성적표 생성/조회/삭제의 진입점 (라우터, 스크립트에서 호출)
- 생성 흐름
  1) 입력 검증 (성적 기간 존재, 반 존재)
  2) 범위 잠금 획득 후 명단 조회 (명단 없으면 NotFound)
  3) 통과 기준 / 과목 점수 조회 → 집계 → 반별 석차 → 코멘트
  4) 범위 단위 삭제 + 일괄 생성 (단일 트랜잭션, 커밋 직전까지 제한 시간 확인)
- 상태는 호출 스택에만 존재 (전역 누적 변수 없음)
"""

import logging
import time
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional

from config.settings import settings
from services.generation_lock import scope_lock
from services.report_engine import aggregate_scores, build_class_reports
from services.report_store import ReportCardStore
from utils.exceptions import NotFound, ValidationError

logger = logging.getLogger(__name__)


def _group_roster(roster) -> Dict[int, List[int]]:
    """명단 → {반 ID: [학생 ID...]} (반 ID 오름차순)"""
    grouped: Dict[int, List[int]] = OrderedDict()
    for entry in sorted(roster, key=lambda e: (e.class_id, e.student_id)):
        grouped.setdefault(entry.class_id, []).append(entry.student_id)
    return grouped


def generate_report_cards(
    store: ReportCardStore,
    grading_id: Optional[int],
    class_id: Optional[int] = None,
    *,
    timeout: Optional[float] = None,
    lock_wait: Optional[float] = None,
):
    """
    성적 기간(grading_id)의 성적표를 생성해서 기존 것을 교체합니다.

    Args:
        store: DB 접근 계층
        grading_id: 성적 기간 ID (필수)
        class_id: 반 ID (생략 시 학생이 한 명 이상 있는 모든 반을 각각 처리)
        timeout: 제한 시간(초). 기본값 settings.REPORT_GENERATION_TIMEOUT
        lock_wait: 같은 범위 생성이 진행 중일 때 대기 시간(초). 기본값 settings.REPORT_LOCK_WAIT

    Returns:
        저장된 ReportCard ORM 객체 목록 (반 ID, 석차 순)
    """
    if grading_id is None:
        raise ValidationError("grading_id is required")

    timeout = settings.REPORT_GENERATION_TIMEOUT if timeout is None else timeout
    lock_wait = settings.REPORT_LOCK_WAIT if lock_wait is None else lock_wait
    deadline = time.monotonic() + timeout

    # 1. 성적 기간 / 반 확인
    grading = store.get_grading(grading_id)
    if grading is None:
        raise NotFound(f"Grading {grading_id} not found", details={"grading_id": grading_id})

    if class_id is not None:
        if not store.class_exists(class_id):
            raise NotFound(f"Class {class_id} not found", details={"class_id": class_id})
        lock_class_ids = [class_id]
    else:
        lock_class_ids = store.fetch_class_ids()

    # 2. 잠금 후 명단 조회 (명단 조회와 교체 사이에 같은 범위 생성이 끼어들지 않도록)
    with scope_lock(grading_id, lock_class_ids, wait=lock_wait):
        classes = _group_roster(store.fetch_roster(class_id))
        if not classes:
            raise NotFound(
                "No students found in the selected class(es); nothing to generate",
                details={"grading_id": grading_id, "class_id": class_id},
            )

        class_ids = list(classes.keys())
        logger.info(f"성적표 생성 시작: grading={grading_id}, classes={class_ids}")

        # 3. 통과 기준 (없으면 미달 안내 생략)
        pass_mark = store.pass_mark_of(grading)

        # 4. 성적 기간 전체 점수 → 학생별 집계
        scores = store.fetch_scores(grading_id)
        all_students = [sid for students in classes.values() for sid in students]
        aggregates = aggregate_scores(scores, all_students)

        # 5. 반별 석차 + 코멘트
        records = []
        for cid, student_ids in classes.items():
            records.extend(build_class_reports(cid, grading_id, student_ids, aggregates, pass_mark))

        logger.info(f"성적표 계산 완료: scores={len(scores)}, students={len(all_students)}, pass_mark={pass_mark}")

        # 6. 교체 (쓰기 트랜잭션 안에서도 제한 시간 확인)
        return store.replace_reports(grading_id, class_ids, records, deadline=deadline)


def list_report_cards(
    store: ReportCardStore,
    grading_id: Optional[int] = None,
    class_id: Optional[int] = None,
    student_id: Optional[int] = None,
):
    """성적표 조회 (석차 오름차순). 역할별 열람 제한은 호출하는 쪽에서 적용"""
    return store.query_reports(grading_id=grading_id, class_id=class_id, student_id=student_id)


def delete_report_cards(store: ReportCardStore, ids: Iterable[int]) -> int:
    ids = list(ids or [])
    if not ids:
        raise ValidationError("No IDs provided")
    deleted = store.delete_reports(ids)
    logger.info(f"성적표 삭제: requested={len(ids)}, deleted={deleted}")
    return deleted
