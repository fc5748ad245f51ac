import os

# ✅ 앱/DB 모듈 import 전에 테스트용 DB 지정
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite://")

import pytest
from sqlalchemy.orm import sessionmaker

import models  # noqa: F401
from database.db import Base, make_engine
from models.classes import Class as ClassModel
from models.gradings import Grading as GradingModel, GradingPolicy as GradingPolicyModel
from models.student_grades import StudentGrade as StudentGradeModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from services.report_store import ReportCardStore


@pytest.fixture
def session_factory():
    engine = make_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return ReportCardStore(db)


# 반 1: 평균 90, 85, 85, 70  /  반 2: 평균 80, 80, 60, (점수 없음)  /  반 3: 학생 없음
CLASS_SCORES = {
    1: {1: [90, 90], 2: [80, 90], 3: [85, 85], 4: [70, 70]},
    2: {5: [80, 80], 6: [70, 90], 7: [60, 60], 8: []},
}


def add_score(db, student_id, class_id, grading_id, score, subject_id=1):
    db.add(StudentGradeModel(
        student_id=student_id, subject_id=subject_id, class_id=class_id,
        grading_id=grading_id, score=score,
    ))


@pytest.fixture
def seeded(db):
    db.add(GradingPolicyModel(id=1, title="Default", pass_mark=50, max_score=100))
    db.add(GradingModel(id=1, title="Mid-Term 2025", session="2025/2026", term="First", grading_policy_id=1))
    db.add(GradingModel(id=2, title="Open Day Quiz", session="2025/2026", term="First"))
    db.add_all([SubjectModel(id=1, name="Mathematics"), SubjectModel(id=2, name="English Language")])
    db.add_all([
        ClassModel(id=1, name="JSS 1A"),
        ClassModel(id=2, name="JSS 1B"),
        ClassModel(id=3, name="JSS 1C"),
    ])
    for class_id, students in CLASS_SCORES.items():
        for student_id, scores in students.items():
            db.add(StudentModel(
                id=student_id, admission_number=f"ADM{student_id:03d}",
                firstname=f"Student{student_id}", surname="Doe", class_id=class_id,
            ))
            for subject_id, score in enumerate(scores, start=1):
                add_score(db, student_id, class_id, 1, score, subject_id=subject_id)
    db.commit()
    return db
