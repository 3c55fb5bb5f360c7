import pytest

from apps.questions.constants import SECTIONS
from apps.tryouts.exceptions import InsufficientContentPool, InvalidLevel
from apps.tryouts.randomizer import (
    QuestionSnapshot,
    SeededRandom,
    build_snapshot,
    generate_seed,
    shuffle,
    shuffle_choices,
    shuffle_within_mondai,
)


IDS = [f"q-{i}" for i in range(40)]


def test_shuffle_is_deterministic():
    assert shuffle(IDS, "seed-1") == shuffle(IDS, "seed-1")


def test_shuffle_is_permutation():
    result = shuffle(IDS, "seed-1")

    assert sorted(result) == sorted(IDS)
    assert len(result) == len(IDS)


def test_shuffle_depends_on_seed():
    assert shuffle(IDS, "seed-1") != shuffle(IDS, "seed-2")


def test_shuffle_empty_and_single():
    assert shuffle([], "seed") == []
    assert shuffle(["only"], "seed") == ["only"]


def test_shuffle_does_not_mutate_input():
    ids = list(IDS)
    shuffle(ids, "seed-1")
    assert ids == IDS


def test_seeded_random_stays_in_unit_interval():
    rng = SeededRandom("bounds")
    values = [rng.next() for _ in range(1000)]

    assert all(0.0 <= v < 1.0 for v in values)
    assert len(set(values)) > 990


def test_shuffle_choices_is_stable_per_question():
    order = shuffle_choices("question-1", "seed-1")

    assert sorted(order) == [1, 2, 3, 4]
    assert shuffle_choices("question-1", "seed-1") == order


def test_generate_seed_is_fresh():
    seeds = {generate_seed() for _ in range(50)}
    assert len(seeds) == 50


def _pools():
    return {section: [f"{section}-{i}" for i in range(12)] for section in SECTIONS}


def test_build_snapshot_shuffles_each_section_from_its_own_pool():
    pools = _pools()
    snapshot = build_snapshot("N4", "seed-1", pools)

    assert snapshot.level == "N4"
    assert snapshot.shuffle_seed == "seed-1"
    for section in SECTIONS:
        assert sorted(snapshot.question_ids(section)) == sorted(pools[section])


def test_build_snapshot_is_reproducible_from_seed():
    assert build_snapshot("N4", "seed-1", _pools()) == build_snapshot("N4", "seed-1", _pools())


def test_build_snapshot_rejects_empty_pool():
    pools = _pools()
    pools["listening"] = []

    with pytest.raises(InsufficientContentPool) as exc_info:
        build_snapshot("N4", "seed-1", pools)

    assert exc_info.value.extra["section"] == "listening"


def test_build_snapshot_rejects_unknown_level():
    with pytest.raises(InvalidLevel):
        build_snapshot("N6", "seed-1", _pools())


def test_snapshot_section_lookup():
    snapshot = build_snapshot("N4", "seed-1", _pools())

    assert snapshot.section_of("listening-3") == "listening"
    assert snapshot.section_of("missing") is None
    assert QuestionSnapshot.from_dict(snapshot.to_dict()) == snapshot


def _mondai_pools():
    # 12 questions per section: mondai 1 has 5, mondai 2 has 4, mondai 3 has 3
    pools, mondai_of = {}, {}
    for section in SECTIONS:
        ids = [f"{section}-{i}" for i in range(12)]
        pools[section] = ids
        for i, qid in enumerate(ids):
            mondai_of[qid] = 1 if i < 5 else 2 if i < 9 else 3
    return pools, mondai_of


def test_build_snapshot_keeps_mondai_blocks_together():
    pools, mondai_of = _mondai_pools()
    snapshot = build_snapshot("N5", "seed-1", pools, mondai_of=mondai_of)

    for section in SECTIONS:
        ids = snapshot.question_ids(section)
        assert [mondai_of[qid] for qid in ids] == [1] * 5 + [2] * 4 + [3] * 3
        assert sorted(ids) == sorted(pools[section])


def test_mondai_blocks_are_shuffled_with_their_own_key():
    pools, mondai_of = _mondai_pools()
    pool = pools["vocabulary"]

    ordered = shuffle_within_mondai(pool, mondai_of, "seed-1", "vocabulary")

    assert ordered[:5] == shuffle(pool[:5], "seed-1:vocabulary:1")
    assert ordered[9:] == shuffle(pool[9:], "seed-1:vocabulary:3")
    assert shuffle_within_mondai(pool, mondai_of, "seed-1", "vocabulary") == ordered
