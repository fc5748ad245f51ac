"""
services/report_store.py

- 성적표 엔진이 사용하는 DB 접근 계층 (SQLAlchemy Session 하나를 감싸서 사용)
  · 조회: 성적 기간, 반, 학생 명단, 과목 점수, 통과 기준
  · 저장: 범위(성적 기간 × 반 목록) 단위 삭제 후 일괄 생성 (하나의 트랜잭션)
  · 조회/삭제: 성적표 목록, ID 일괄 삭제
"""

import logging
import math
import time
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from models.classes import Class as ClassModel
from models.gradings import Grading as GradingModel
from models.report_cards import ReportCard as ReportCardModel
from models.student_grades import StudentGrade as StudentGradeModel
from models.students import Student as StudentModel
from schemas.report_cards import RosterEntry, ScoreRecord
from utils.exceptions import GenerationTimeout, PersistenceError

logger = logging.getLogger(__name__)


def check_deadline(deadline: Optional[float], grading_id: int):
    """deadline(time.monotonic 기준)이 지났으면 GenerationTimeout"""
    if deadline is not None and time.monotonic() > deadline:
        raise GenerationTimeout(
            f"Report card generation for grading {grading_id} exceeded the time limit",
            details={"grading_id": grading_id},
        )


class ReportCardStore:
    def __init__(self, db: Session):
        self.db = db

    # ==========================================================
    # [읽기] 생성 입력값
    # ==========================================================
    def get_grading(self, grading_id: int) -> Optional[GradingModel]:
        return (
            self.db.query(GradingModel)
            .options(joinedload(GradingModel.policy))
            .filter(GradingModel.id == grading_id)
            .first()
        )

    def class_exists(self, class_id: int) -> bool:
        return self.db.query(ClassModel.id).filter(ClassModel.id == class_id).first() is not None

    def fetch_class_ids(self) -> List[int]:
        return [r.id for r in self.db.query(ClassModel.id).order_by(ClassModel.id).all()]

    @staticmethod
    def pass_mark_of(grading: Optional[GradingModel]) -> Optional[float]:
        """이미 조회한 성적 기간(policy joinedload)에서 통과 기준 추출"""
        if grading is None or grading.policy is None:
            return None
        return grading.policy.pass_mark

    def fetch_pass_mark(self, grading_id: int) -> Optional[float]:
        # 성적 기간을 아직 조회하지 않은 호출자용 (생성 흐름은 pass_mark_of 사용)
        return self.pass_mark_of(self.get_grading(grading_id))

    def fetch_roster(self, class_id: Optional[int] = None) -> List[RosterEntry]:
        """현재 재학 명단. class_id 가 없으면 전체 학생"""
        query = self.db.query(StudentModel.id, StudentModel.class_id)
        if class_id is not None:
            query = query.filter(StudentModel.class_id == class_id)
        rows = query.order_by(StudentModel.class_id, StudentModel.id).all()
        return [RosterEntry(student_id=r.id, class_id=r.class_id) for r in rows]

    def fetch_scores(self, grading_id: int) -> List[ScoreRecord]:
        """성적 기간의 모든 과목 점수 (반 필터 없음)"""
        rows = (
            self.db.query(StudentGradeModel)
            .filter(StudentGradeModel.grading_id == grading_id)
            .all()
        )
        return [ScoreRecord.model_validate(r) for r in rows]

    # ==========================================================
    # [쓰기] 삭제 후 재생성
    # ==========================================================
    def _lock_grading_row(self, grading_id: int, deadline: Optional[float] = None):
        # MySQL: 행 잠금 대기도 남은 제한 시간 안으로 제한
        if deadline is not None and self.db.get_bind().dialect.name == "mysql":
            remaining = max(1, math.ceil(deadline - time.monotonic()))
            self.db.execute(text(f"SET SESSION innodb_lock_wait_timeout = {int(remaining)}"))
        # 같은 성적 기간에 대한 다른 프로세스의 재생성과 직렬화 (sqlite 에서는 무시됨)
        self.db.query(GradingModel.id).filter(GradingModel.id == grading_id).with_for_update().first()

    def _delete_scope(self, grading_id: int, class_ids: Sequence[int]) -> int:
        return (
            self.db.query(ReportCardModel)
            .filter(
                ReportCardModel.grading_id == grading_id,
                ReportCardModel.class_id.in_(list(class_ids)),
            )
            .delete(synchronize_session="fetch")
        )

    def _insert(self, records: Sequence[dict]):
        self.db.add_all([ReportCardModel(**r) for r in records])
        self.db.flush()

    def replace_reports(
        self,
        grading_id: int,
        class_ids: Sequence[int],
        records: Sequence[dict],
        deadline: Optional[float] = None,
    ) -> List[ReportCardModel]:
        """
        (grading_id, class_ids) 범위의 기존 성적표를 지우고 records 로 교체
        - 전부 성공하거나 전부 롤백 (중간 상태는 외부에 보이지 않음)
        - deadline(time.monotonic 기준)을 넘기면 커밋하지 않고 롤백 후 GenerationTimeout
        """
        try:
            check_deadline(deadline, grading_id)
            self._lock_grading_row(grading_id, deadline)
            deleted = self._delete_scope(grading_id, class_ids)
            if records:
                self._insert(records)
            check_deadline(deadline, grading_id)
            self.db.commit()
        except GenerationTimeout:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError(
                f"Failed to save report cards for grading {grading_id}",
                details={"class_ids": list(class_ids), "reason": str(e)},
            ) from e

        logger.info(f"성적표 교체 완료: grading={grading_id}, classes={list(class_ids)}, deleted={deleted}, created={len(records)}")

        return (
            self._report_query()
            .filter(
                ReportCardModel.grading_id == grading_id,
                ReportCardModel.class_id.in_(list(class_ids)),
            )
            .order_by(ReportCardModel.class_id, ReportCardModel.position, ReportCardModel.student_id)
            .all()
        )

    # ==========================================================
    # [조회/삭제] 성적표
    # ==========================================================
    def _report_query(self):
        return self.db.query(ReportCardModel).options(
            joinedload(ReportCardModel.student),
            joinedload(ReportCardModel.school_class),
            joinedload(ReportCardModel.grading),
        )

    def query_reports(
        self,
        grading_id: Optional[int] = None,
        class_id: Optional[int] = None,
        student_id: Optional[int] = None,
    ) -> List[ReportCardModel]:
        """석차 오름차순 (상위 학생 먼저)"""
        query = self._report_query()
        if grading_id is not None:
            query = query.filter(ReportCardModel.grading_id == grading_id)
        if class_id is not None:
            query = query.filter(ReportCardModel.class_id == class_id)
        if student_id is not None:
            query = query.filter(ReportCardModel.student_id == student_id)
        return query.order_by(
            ReportCardModel.position,
            ReportCardModel.class_id,
            ReportCardModel.student_id,
        ).all()

    def delete_reports(self, ids: Iterable[int]) -> int:
        try:
            deleted = (
                self.db.query(ReportCardModel)
                .filter(ReportCardModel.id.in_(list(ids)))
                .delete(synchronize_session="fetch")
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise PersistenceError("Failed to delete report cards", details={"reason": str(e)}) from e
        return deleted
