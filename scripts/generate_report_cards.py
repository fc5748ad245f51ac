"""
성적표 일괄 생성 (운영자용 CLI)

사용 예:
    python -m scripts.generate_report_cards 3            # 성적 기간 3, 전체 반
    python -m scripts.generate_report_cards 3 --class 7  # 성적 기간 3, 7반만
"""
import argparse
import sys

from database.db import SessionLocal
from services.report_card_service import generate_report_cards
from services.report_store import ReportCardStore
from utils.exceptions import ReportCardError


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Generate report cards for a grading")
    parser.add_argument("grading_id", type=int)
    parser.add_argument("--class", dest="class_id", type=int, default=None)
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        rows = generate_report_cards(ReportCardStore(db), args.grading_id, args.class_id)
    except ReportCardError as e:
        print(f"❌ {e.code}: {e.message}")
        return 1
    finally:
        db.close()

    print(f"✅ 성적표 {len(rows)}건 생성 완료 (grading={args.grading_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
