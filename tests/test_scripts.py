from models.report_cards import ReportCard as ReportCardModel
from models.student_grades import StudentGrade as StudentGradeModel
from scripts import generate_report_cards as generate_script
from scripts import import_student_grades as import_script


def test_import_student_grades_from_csv(seeded, session_factory, monkeypatch, tmp_path):
    csv_path = tmp_path / "student_grades.csv"
    csv_path.write_text(
        "student_id,subject_id,class_id,grading_id,score\n"
        "1,1,1,2,77.5\n"
        "2,1,1,2,not-a-number\n",
        encoding="utf-8",
    )
    monkeypatch.setattr(import_script, "SessionLocal", session_factory)

    assert import_script.migrate_student_grades(str(csv_path)) == 2

    session = session_factory()
    try:
        rows = session.query(StudentGradeModel).filter(StudentGradeModel.grading_id == 2).order_by(StudentGradeModel.student_id).all()
        assert [(r.student_id, r.score) for r in rows] == [(1, 77.5), (2, 0.0)]
    finally:
        session.close()


def test_generate_report_cards_cli(seeded, session_factory, monkeypatch):
    monkeypatch.setattr(generate_script, "SessionLocal", session_factory)

    assert generate_script.main(["1", "--class", "2"]) == 0

    session = session_factory()
    try:
        assert session.query(ReportCardModel).filter(ReportCardModel.class_id == 2).count() == 4
    finally:
        session.close()


def test_generate_report_cards_cli_reports_errors(seeded, session_factory, monkeypatch, capsys):
    monkeypatch.setattr(generate_script, "SessionLocal", session_factory)

    assert generate_script.main(["999"]) == 1
    assert "NOT_FOUND" in capsys.readouterr().out
