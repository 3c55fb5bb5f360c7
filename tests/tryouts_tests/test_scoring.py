from decimal import Decimal

import pytest

from apps.tryouts.exceptions import InvalidLevel
from apps.tryouts.scoring import (
    PassThresholds,
    evaluate_pass_fail,
    get_pass_thresholds,
    mondai_breakdown,
    normalize,
    reference_grade,
    score_section,
    score_total,
)


def _answers(correct, wrong):
    """(answers, key) with ``correct`` right and ``wrong`` wrong answers."""
    answers, key = {}, {}
    for i in range(correct + wrong):
        qid = f"q{i}"
        key[qid] = 1
        answers[qid] = 1 if i < correct else 2
    return answers, key


def _section(section, correct, wrong, thresholds=None):
    answers, key = _answers(correct, wrong)
    return score_section("N4", section, answers, key, thresholds)


def test_fifteen_of_twenty_scores_45_grade_b():
    result = _section("vocabulary", 15, 5)

    assert result.raw_score == 15
    assert result.raw_max_score == 20
    assert result.normalized_score == 45
    assert result.accuracy == Decimal("0.75")
    assert result.reference_grade == "B"
    assert result.pass_threshold == 19
    assert result.is_passed is True


def test_zero_answers_is_safe():
    result = score_section("N4", "listening", {}, {"q1": 1})

    assert result.normalized_score == 0
    assert result.raw_max_score == 0
    assert result.is_passed is False
    assert result.reference_grade == "C"


def test_cleared_answers_do_not_count():
    result = score_section("N4", "vocabulary", {"q1": 1, "q2": None}, {"q1": 1, "q2": 2})

    assert result.raw_score == 1
    assert result.raw_max_score == 1
    assert result.normalized_score == 60


def test_halves_round_up():
    # 3/8 * 60 = 22.5
    assert normalize(3, 8) == 23
    # 1/8 * 60 = 7.5
    assert normalize(1, 8) == 8


def test_normalized_score_bounds():
    for raw_max in range(1, 40):
        for raw in range(raw_max + 1):
            assert 0 <= normalize(raw, raw_max) <= 60
    assert normalize(0, 0) == 0


def test_reference_grade_lower_bounds_are_inclusive():
    assert reference_grade(Decimal("0.8")) == "A"
    assert reference_grade(Decimal("0.7999")) == "B"
    assert reference_grade(Decimal("0.6")) == "B"
    assert reference_grade(Decimal("0.5999")) == "C"


def test_all_sections_clear_thresholds_passes():
    scores = [
        _section("vocabulary", 15, 5),        # 45
        _section("grammar_reading", 5, 1),    # 50
        _section("listening", 4, 2),          # 40
    ]
    total = score_total(scores)
    result = evaluate_pass_fail("N4", scores, total)

    assert total == 135
    assert result.is_passed is True
    assert result.total_passed is True
    assert result.failure_reasons == []


def test_high_total_with_one_failed_section_fails():
    thresholds = PassThresholds(
        total=90,
        sections={"vocabulary": 19, "grammar_reading": 19, "listening": 40},
    )
    scores = [
        _section("vocabulary", 10, 0, thresholds),       # 60
        _section("grammar_reading", 11, 1, thresholds),  # 55
        _section("listening", 7, 5, thresholds),         # 35
    ]
    total = score_total(scores)
    result = evaluate_pass_fail("N4", scores, total, thresholds)

    assert total == 150
    assert result.total_passed is True
    assert result.sections_passed["listening"] is False
    assert result.is_passed is False
    assert len(result.failure_reasons) == 1
    assert "Listening" in result.failure_reasons[0]


def test_low_total_fails_even_when_sections_pass():
    scores = [
        _section("vocabulary", 1, 2),        # 20
        _section("grammar_reading", 1, 2),   # 20
        _section("listening", 1, 2),         # 20
    ]
    result = evaluate_pass_fail("N4", scores, score_total(scores))

    assert all(result.sections_passed.values())
    assert result.total_passed is False
    assert result.is_passed is False


def test_thresholds_differ_per_level():
    assert get_pass_thresholds("N1").total == 100
    assert get_pass_thresholds("N3").total == 95
    assert get_pass_thresholds("N5").total == 80


def test_thresholds_can_be_overridden(settings):
    settings.JLPT_TRYOUT = {
        "PASS_THRESHOLDS": {"N3": {"total": 120, "sections": {"listening": 25}}},
    }
    thresholds = get_pass_thresholds("N3")

    assert thresholds.total == 120
    assert thresholds.for_section("listening") == 25
    assert thresholds.for_section("vocabulary") == 19
    assert get_pass_thresholds("N4").total == 90


def test_unknown_level_has_no_thresholds():
    with pytest.raises(InvalidLevel):
        get_pass_thresholds("N0")


def test_mondai_breakdown_counts_unanswered_in_total():
    marks = [(1, True), (1, False), (1, None), (2, True), (2, True), (None, True)]

    assert mondai_breakdown(marks) == [
        {"mondai_number": 1, "correct": 1, "total": 3},
        {"mondai_number": 2, "correct": 2, "total": 2},
    ]
