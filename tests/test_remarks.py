import pytest

from services.remarks import REMARK_TIERS, format_mark, generate_remark

EXCELLENT, VERY_GOOD, GOOD, PASS, FAIR, NEEDS_IMPROVEMENT = [msg for _, msg in REMARK_TIERS]


def test_tiers_are_ordered_top_down():
    bounds = [bound for bound, _ in REMARK_TIERS]
    assert bounds == sorted(bounds, reverse=True)


@pytest.mark.parametrize("average, expected", [
    (100, EXCELLENT),
    (70, EXCELLENT),
    (69.99, VERY_GOOD),
    (60, VERY_GOOD),
    (59.9, GOOD),
    (50, GOOD),
    (49.99, PASS),
    (45, PASS),
    (44.99, FAIR),
    (40, FAIR),
    (39.99, NEEDS_IMPROVEMENT),
    (0, NEEDS_IMPROVEMENT),
])
def test_tier_boundaries_are_inclusive_lower_bounds(average, expected):
    assert generate_remark(average) == expected


def test_needs_improvement_suggests_help():
    assert "teacher or parent for help" in generate_remark(10)


def test_below_pass_mark_appends_note():
    remark = generate_remark(44, pass_mark=50)
    assert remark.startswith(FAIR)
    assert "below the pass mark (50)" in remark
    assert "teacher or guardian" in remark


def test_below_pass_mark_note_applies_to_any_tier():
    remark = generate_remark(72, pass_mark=75)
    assert remark.startswith(EXCELLENT)
    assert "below the pass mark (75)" in remark


def test_at_or_above_pass_mark_has_no_note():
    assert generate_remark(50, pass_mark=50) == GOOD
    assert generate_remark(44) == FAIR


@pytest.mark.parametrize("value", [None, "abc", float("nan")])
def test_non_numeric_average_is_zero(value):
    assert generate_remark(value) == NEEDS_IMPROVEMENT


def test_numeric_string_average_is_coerced():
    assert generate_remark("65") == VERY_GOOD


def test_format_mark():
    assert format_mark(50.0) == "50"
    assert format_mark(47.5) == "47.5"
