# apps/tryouts/scoring.py
"""
JLPT tryout scoring. Pure functions, no database access.

Every section is rescaled onto the 0-60 JLPT scale from the share of answered
questions that are correct. A tryout passes only when the total reaches the
level's pass mark AND every section reaches its own minimum.
All arithmetic uses Decimal; halves round up (45.5 -> 46), unlike ``round``.
"""
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from apps.questions.constants import LEVELS, SECTIONS, SECTION_DISPLAY_NAMES

from .conf import tryout_setting
from .exceptions import InvalidLevel, InvalidSection

SECTION_MAX_SCORE = 60
TOTAL_MAX_SCORE = SECTION_MAX_SCORE * len(SECTIONS)

GRADE_A_MIN_ACCURACY = Decimal("0.8")
GRADE_B_MIN_ACCURACY = Decimal("0.6")

# Official JLPT pass marks (out of 180) and sectional minimums (out of 60)
DEFAULT_PASS_THRESHOLDS = {
    'N1': {'total': 100, 'sections': {s: 19 for s in SECTIONS}},
    'N2': {'total': 90, 'sections': {s: 19 for s in SECTIONS}},
    'N3': {'total': 95, 'sections': {s: 19 for s in SECTIONS}},
    'N4': {'total': 90, 'sections': {s: 19 for s in SECTIONS}},
    'N5': {'total': 80, 'sections': {s: 19 for s in SECTIONS}},
}


@dataclass(frozen=True)
class PassThresholds:
    total: int
    sections: Dict[str, int]

    def for_section(self, section: str) -> int:
        return self.sections[section]


def get_pass_thresholds(level: str) -> PassThresholds:
    """Thresholds for ``level``: built-in table with JLPT_TRYOUT["PASS_THRESHOLDS"] on top."""
    if level not in LEVELS:
        raise InvalidLevel(level)
    base = DEFAULT_PASS_THRESHOLDS[level]
    override = tryout_setting("PASS_THRESHOLDS").get(level, {})
    sections = {**base['sections'], **override.get('sections', {})}
    return PassThresholds(total=override.get('total', base['total']), sections=sections)


@dataclass(frozen=True)
class SectionScoreResult:
    section_type: str
    raw_score: int
    raw_max_score: int
    normalized_score: int
    accuracy: Decimal
    reference_grade: str
    is_passed: bool
    pass_threshold: int

    def to_dict(self) -> dict:
        return {
            "section_type": self.section_type,
            "raw_score": self.raw_score,
            "raw_max_score": self.raw_max_score,
            "normalized_score": self.normalized_score,
            "accuracy": float(self.accuracy),
            "reference_grade": self.reference_grade,
            "is_passed": self.is_passed,
            "pass_threshold": self.pass_threshold,
        }


@dataclass(frozen=True)
class PassFailResult:
    is_passed: bool
    total_score: int
    total_threshold: int
    total_passed: bool
    sections_passed: Dict[str, bool]
    failure_reasons: List[str] = field(default_factory=list)


def reference_grade(accuracy: Decimal) -> str:
    if accuracy >= GRADE_A_MIN_ACCURACY:
        return 'A'
    if accuracy >= GRADE_B_MIN_ACCURACY:
        return 'B'
    return 'C'


def normalize(raw_score: int, raw_max_score: int) -> int:
    """raw / max rescaled to 0-60, half-up rounding, clamped."""
    if raw_max_score <= 0:
        return 0
    scaled = (Decimal(raw_score) / Decimal(raw_max_score) * SECTION_MAX_SCORE).quantize(
        Decimal("1"), rounding=ROUND_HALF_UP
    )
    return int(min(max(scaled, Decimal(0)), Decimal(SECTION_MAX_SCORE)))


def score_section(
    level: str,
    section: str,
    answers: Mapping[str, Optional[int]],
    answer_key: Mapping[str, int],
    thresholds: Optional[PassThresholds] = None,
) -> SectionScoreResult:
    """
    Score one section.

    Args:
        answers: question id -> selected choice. Cleared answers (None) do not count.
        answer_key: question id -> correct choice.
        thresholds: defaults to get_pass_thresholds(level).
    """
    if section not in SECTIONS:
        raise InvalidSection(section)
    thresholds = thresholds or get_pass_thresholds(level)
    threshold = thresholds.for_section(section)

    answered = {qid: choice for qid, choice in answers.items() if choice is not None}
    raw_max_score = len(answered)
    raw_score = sum(1 for qid, choice in answered.items() if answer_key.get(qid) == choice)

    if raw_max_score == 0:
        return SectionScoreResult(
            section_type=section,
            raw_score=0,
            raw_max_score=0,
            normalized_score=0,
            accuracy=Decimal("0"),
            reference_grade='C',
            is_passed=False,
            pass_threshold=threshold,
        )

    accuracy = (Decimal(raw_score) / Decimal(raw_max_score)).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP)
    normalized_score = normalize(raw_score, raw_max_score)
    return SectionScoreResult(
        section_type=section,
        raw_score=raw_score,
        raw_max_score=raw_max_score,
        normalized_score=normalized_score,
        accuracy=accuracy,
        reference_grade=reference_grade(accuracy),
        is_passed=normalized_score >= threshold,
        pass_threshold=threshold,
    )


def score_total(section_scores) -> int:
    return sum(score.normalized_score for score in section_scores)


def evaluate_pass_fail(
    level: str,
    section_scores,
    total_score: int,
    thresholds: Optional[PassThresholds] = None,
) -> PassFailResult:
    """Conjunctive rule: total pass mark AND every sectional minimum."""
    thresholds = thresholds or get_pass_thresholds(level)
    failure_reasons = []

    total_passed = total_score >= thresholds.total
    if not total_passed:
        failure_reasons.append(
            f"Total score {total_score}/{TOTAL_MAX_SCORE} is below passing threshold "
            f"{thresholds.total}/{TOTAL_MAX_SCORE}"
        )

    scores_by_section = {score.section_type: score for score in section_scores}
    sections_passed = {}
    for section in SECTIONS:
        score = scores_by_section.get(section)
        passed = bool(score and score.is_passed)
        sections_passed[section] = passed
        if not passed:
            normalized = score.normalized_score if score else 0
            failure_reasons.append(
                f"{SECTION_DISPLAY_NAMES[section]} score {normalized}/{SECTION_MAX_SCORE} is below "
                f"minimum {thresholds.for_section(section)}/{SECTION_MAX_SCORE}"
            )

    return PassFailResult(
        is_passed=total_passed and all(sections_passed.values()),
        total_score=total_score,
        total_threshold=thresholds.total,
        total_passed=total_passed,
        sections_passed=sections_passed,
        failure_reasons=failure_reasons,
    )


def mondai_breakdown(marks: Iterable[Tuple[Optional[int], Optional[bool]]]) -> List[dict]:
    """
    Correct / total per mondai from (mondai_number, is_correct) pairs, in
    first-seen mondai order. Unanswered questions count towards the total.
    Pairs without a mondai number (question gone from the bank) are skipped.
    """
    breakdown: Dict[int, dict] = {}
    for mondai, is_correct in marks:
        if mondai is None:
            continue
        entry = breakdown.setdefault(mondai, {"mondai_number": mondai, "correct": 0, "total": 0})
        entry["total"] += 1
        if is_correct:
            entry["correct"] += 1
    return list(breakdown.values())
