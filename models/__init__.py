# ✅ 메타데이터/관계 해석을 위해 모든 테이블 모델을 한 번에 등록
from models.classes import Class
from models.students import Student
from models.subjects import Subject
from models.gradings import Grading, GradingPolicy
from models.student_grades import StudentGrade
from models.report_cards import ReportCard

__all__ = [
    "Class",
    "Student",
    "Subject",
    "Grading",
    "GradingPolicy",
    "StudentGrade",
    "ReportCard",
]
