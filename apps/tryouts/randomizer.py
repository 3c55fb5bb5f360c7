# apps/tryouts/randomizer.py
"""
Deterministic question ordering for tryouts.

A tryout stores one seed string. Every ordering shown to the candidate
(questions per mondai block, answer choices per question) is derived from
that seed, so reloading or resuming an attempt reproduces exactly the same paper.
The only non-deterministic call in this module is `generate_seed`.
"""
import hashlib
import secrets
import time
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from apps.questions.constants import CHOICE_NUMBERS, LEVELS, SECTIONS

from .exceptions import InsufficientContentPool, InvalidLevel

_MASK_64 = (1 << 64) - 1
# Knuth MMIX constants
_LCG_MULTIPLIER = 6364136223846793005
_LCG_INCREMENT = 1442695040888963407


class SeededRandom:
    """
    64-bit linear congruential generator seeded from a string.

    The seed is hashed with SHA-256 (not the built-in ``hash``, which is
    salted per process) so the sequence is identical on every machine.
    """

    def __init__(self, seed: str):
        digest = hashlib.sha256(seed.encode("utf-8")).digest()
        self._state = int.from_bytes(digest[:8], "big")

    def next(self) -> float:
        """Next value in [0, 1)."""
        self._state = (self._state * _LCG_MULTIPLIER + _LCG_INCREMENT) & _MASK_64
        # top 53 bits -> exact double
        return (self._state >> 11) / float(1 << 53)

    def shuffle(self, items: Sequence) -> list:
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            result[i], result[j] = result[j], result[i]
        return result


def shuffle(items: Sequence, seed: str) -> list:
    """Deterministic permutation of ``items``; the input is left untouched."""
    return SeededRandom(seed).shuffle(items)


def section_seed(seed: str, section: str) -> str:
    return f"{seed}:{section}"


def shuffle_choices(question_id, seed: str) -> List[int]:
    """Display order of the four choice numbers for one question of an attempt."""
    return SeededRandom(f"{seed}:{question_id}").shuffle(CHOICE_NUMBERS)


def generate_seed() -> str:
    """Fresh seed: millisecond timestamp plus a random token."""
    return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}"


@dataclass(frozen=True)
class QuestionSnapshot:
    """
    Frozen paper of one attempt: level, seed and the ordered question ids of
    each section. Stored as JSON on the attempt row.
    """
    level: str
    shuffle_seed: str
    sections: Dict[str, List[str]] = field(default_factory=dict)

    def question_ids(self, section: str) -> List[str]:
        return list(self.sections.get(section, []))

    def section_of(self, question_id) -> str:
        """Section containing ``question_id``, or None."""
        question_id = str(question_id)
        for section, ids in self.sections.items():
            if question_id in ids:
                return section
        return None

    def all_question_ids(self) -> List[str]:
        return [qid for section in SECTIONS for qid in self.sections.get(section, [])]

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "shuffle_seed": self.shuffle_seed,
            "sections": {section: list(self.sections.get(section, [])) for section in SECTIONS},
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "QuestionSnapshot":
        sections = data.get("sections") or {}
        return cls(
            level=data["level"],
            shuffle_seed=data["shuffle_seed"],
            sections={section: [str(qid) for qid in sections.get(section, [])] for section in SECTIONS},
        )


def mondai_seed(seed: str, section: str, mondai) -> str:
    return f"{seed}:{section}:{mondai}"


def shuffle_within_mondai(pool: Sequence, mondai_of: Mapping[str, int], seed: str, section: str) -> List[str]:
    """
    Keep the mondai blocks of ``pool`` in their first-seen order and shuffle
    the questions inside each block, so a mondai's instructions apply to one
    contiguous run of questions.
    """
    blocks: Dict[object, List[str]] = {}
    for qid in pool:
        qid = str(qid)
        blocks.setdefault(mondai_of.get(qid), []).append(qid)
    ordered = []
    for mondai, ids in blocks.items():
        ordered.extend(shuffle(ids, mondai_seed(seed, section, mondai)))
    return ordered


def build_snapshot(
    level: str,
    seed: str,
    pools_by_section: Mapping[str, Sequence],
    mondai_of: Optional[Mapping[str, int]] = None,
) -> QuestionSnapshot:
    """
    Shuffle each section pool independently and freeze the result.

    Pools are used as given (no trimming); every section must be present and
    non-empty. With ``mondai_of`` (question id -> mondai number) the shuffle
    stays inside each mondai block; without it the whole section is shuffled.
    """
    if level not in LEVELS:
        raise InvalidLevel(level)

    sections = {}
    for section in SECTIONS:
        pool = pools_by_section.get(section)
        if not pool:
            raise InsufficientContentPool(section, available=0)
        if mondai_of is None:
            sections[section] = [str(qid) for qid in shuffle(pool, section_seed(seed, section))]
        else:
            sections[section] = shuffle_within_mondai(pool, mondai_of, seed, section)

    return QuestionSnapshot(level=level, shuffle_seed=seed, sections=sections)
