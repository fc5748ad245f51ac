"""
services/remarks.py

- 평균 점수(및 선택적 통과 기준)로 학생에게 보여줄 격려형 코멘트 생성
- 구간 규칙은 (하한, 문구) 목록을 위에서부터 순서대로 검사
  → 구간 추가/수정 시 제어 흐름은 건드리지 않음
"""

from typing import List, Optional, Tuple

from schemas.report_cards import coerce_number

# (하한 이상, 문구) - 반드시 하한 내림차순
REMARK_TIERS: List[Tuple[float, str]] = [
    (70.0, "Excellent work, well done! Keep up the outstanding effort and continue challenging yourself."),
    (60.0, "Very good performance, you're doing really well. Keep practicing and aim for even higher achievements."),
    (50.0, "Good job, solid performance. With a bit more focus and practice you can reach the next level."),
    (45.0, "Pass: you've met the basic requirements. Continue practicing consistently to strengthen your understanding."),
    (40.0, "Fair: you're close. Focus on the areas you find difficult, ask questions, and keep trying."),
    (float("-inf"), "Needs improvement: don't be discouraged. With regular practice, a bit of support, and focused "
                    "effort you can improve. Reach out to your teacher or parent for help and set small goals."),
]

BELOW_PASS_MARK_NOTE = (
    " Note: this is below the pass mark ({pass_mark}). Please work with your teacher or guardian "
    "to identify specific areas to improve; small, steady steps will help."
)


def format_mark(value: float) -> str:
    """50.0 → "50", 47.5 → "47.5" """
    return f"{value:g}"


def tier_remark(average: float) -> str:
    for lower_bound, message in REMARK_TIERS:
        if average >= lower_bound:
            return message
    return REMARK_TIERS[-1][1]


def generate_remark(average, pass_mark: Optional[float] = None) -> str:
    """
    평균 점수 → 코멘트 문장

    - 구간 하한은 포함 (70.0 은 excellent, 45.0 은 pass)
    - 숫자가 아닌 평균은 0 으로 취급
    - pass_mark 가 있고 평균이 그보다 낮으면 구간과 무관하게 미달 안내 문장을 덧붙임
    """
    avg = coerce_number(average)
    remark = tier_remark(avg)

    if pass_mark is not None and avg < pass_mark:
        remark += BELOW_PASS_MARK_NOTE.format(pass_mark=format_mark(pass_mark))

    return remark
