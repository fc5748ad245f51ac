import csv
import sys
from sqlalchemy.orm import Session
from database.db import SessionLocal
from models.student_grades import StudentGrade as StudentGradeModel  # ✅ 모델 import
from schemas.report_cards import coerce_number

CSV_PATH = "data/student_grades.csv"  # ✅ 기본 파일 경로

def migrate_student_grades(csv_path: str = CSV_PATH) -> int:
    """
    과목별 성적 CSV → student_grades 테이블
    컬럼: student_id, subject_id, class_id, grading_id, score
    """
    db: Session = SessionLocal()
    count = 0
    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
            reader = csv.DictReader(csvfile)
            for row in reader:
                grade = StudentGradeModel(
                    student_id=int(row["student_id"]),    # 학생 ID
                    subject_id=int(row["subject_id"]),    # 과목 ID
                    class_id=int(row["class_id"]),        # 채점 당시 반 ID
                    grading_id=int(row["grading_id"]),    # 성적 기간 ID
                    score=coerce_number(row.get("score")) # 잘못된 점수는 0
                )
                db.add(grade)
                count += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    print(f"✅ 과목 성적 CSV → DB 마이그레이션 완료 ({count}건)")
    return count

if __name__ == "__main__":
    migrate_student_grades(sys.argv[1] if len(sys.argv) > 1 else CSV_PATH)
