import sys
import os
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import mjudge.evaluate
from mjudge.candidate import Candidate
from mjudge.evaluate import MajorityJudgment, VotingSystemError
from mjudge.grade import Grade

G = Grade
A, B, C, D = (Candidate(name) for name in 'ABCD')


@pytest.mark.parametrize('grades', [
    {A: [G.EXCELLENT, G.EXCELLENT, G.BAD], B: [G.BAD, G.BAD, G.EXCELLENT]},
    {B: [G.EXCELLENT, G.BAD, G.BAD], A: [G.BAD, G.EXCELLENT, G.EXCELLENT]},
    {A: {G.EXCELLENT: 2, G.BAD: 1}, B: {G.BAD: 2, G.EXCELLENT: 1}},
])
def test_clear_winner(grades):
    assert MajorityJudgment().resolve(grades) == A


def test_tiebreak_one_round():
    grades = {
        A: [G.GOOD, G.GOOD, G.BAD],
        B: [G.GOOD, G.GOOD, G.EXCELLENT],
    }
    mj = MajorityJudgment()
    rounds = list(mj.rounds(grades))
    assert len(rounds) == 2
    assert rounds[0].medians == {A: G.GOOD, B: G.GOOD}
    assert rounds[0].leaders == [A, B]
    assert rounds[1].contenders == {
        A: {G.GOOD: 1, G.BAD: 1},
        B: {G.GOOD: 1, G.EXCELLENT: 1},
    }
    assert rounds[1].medians == {A: G.GOOD, B: G.EXCELLENT}
    assert rounds[1].is_decisive
    assert mj.resolve(grades) == B


def test_tiebreak_removes_single_occurrence():
    # removing all GOODs at once would leave A with EXCELLENT only
    grades = {
        A: [G.GOOD, G.GOOD, G.GOOD, G.GOOD, G.EXCELLENT],
        B: [G.MEDIOCRE, G.GOOD, G.GOOD, G.VERY_GOOD, G.VERY_GOOD],
    }
    rounds = list(MajorityJudgment().rounds(grades))
    assert rounds[1].contenders[A] == {G.GOOD: 3, G.EXCELLENT: 1}
    assert rounds[1].contenders[B] == {G.MEDIOCRE: 1, G.GOOD: 1, G.VERY_GOOD: 2}
    assert MajorityJudgment().resolve(grades) == B


def test_non_tied_eliminated():
    grades = {
        A: [G.GOOD, G.GOOD, G.BAD],
        B: [G.GOOD, G.GOOD, G.EXCELLENT],
        C: [G.PASSABLE, G.PASSABLE, G.EXCELLENT],
    }
    rounds = list(MajorityJudgment().rounds(grades))
    assert C not in rounds[1].contenders
    assert MajorityJudgment().resolve(grades) == B


def test_empty_collection_excluded():
    grades = {A: [], B: [G.BAD]}
    assert MajorityJudgment.medians(grades) == {B: G.BAD}
    assert MajorityJudgment().resolve(grades) == B


def test_candidate_exhausted_during_tiebreak_loses():
    grades = {
        A: [G.GOOD],
        B: [G.GOOD, G.GOOD, G.BAD],
    }
    # round 2: A has no grades, B has [GOOD, BAD] with median GOOD
    assert MajorityJudgment().resolve(grades) == B


def test_exhaustion_returns_a_tied_candidate():
    grades = {A: [G.BAD], B: [G.BAD]}
    rounds = list(MajorityJudgment().rounds(grades))
    assert len(rounds) == 2
    assert rounds[-1].is_exhausted
    assert rounds[-1].best_grade is None
    for seed in range(20):
        assert MajorityJudgment(seed=seed).resolve(grades) in (A, B)


def test_exhaustion_seeded_reproducible():
    grades = {A: [G.GOOD, G.BAD], B: [G.GOOD, G.BAD], C: [G.BAD, G.BAD]}
    first = [MajorityJudgment(seed=seed).resolve(grades) for seed in range(10)]
    second = [MajorityJudgment(seed=seed).resolve(dict(reversed(list(grades.items()))))
              for seed in range(10)]
    assert first == second
    assert C not in first


def test_exhaustion_distributes():
    grades = {A: [G.BAD], B: [G.BAD]}
    mj = MajorityJudgment(rng=random.Random(1711))
    winners = {mj.resolve(grades) for i in range(50)}
    assert winners == {A, B}


def test_injected_rng_used():
    grades = {A: [G.BAD], B: [G.BAD], C: [G.BAD]}
    expected = random.Random(42).choice([A, B, C])
    assert MajorityJudgment(rng=random.Random(42)).resolve(grades) == expected


def test_no_candidates():
    with pytest.raises(VotingSystemError):
        MajorityJudgment().resolve({})


def test_single_candidate():
    assert MajorityJudgment().resolve({A: [G.BAD]}) == A


def test_input_not_mutated():
    grades = {A: {G.GOOD: 2, G.BAD: 1}, B: {G.GOOD: 2, G.EXCELLENT: 1}}
    MajorityJudgment().resolve(grades)
    assert grades == {A: {G.GOOD: 2, G.BAD: 1}, B: {G.GOOD: 2, G.EXCELLENT: 1}}


def test_evaluate_order():
    grades = {
        A: [G.GOOD, G.GOOD, G.BAD],
        B: [G.GOOD, G.GOOD, G.EXCELLENT],
        C: [G.EXCELLENT, G.EXCELLENT, G.BAD],
        D: [G.BAD, G.BAD, G.BAD],
    }
    mj = MajorityJudgment()
    assert mj.evaluate(grades) == [C]
    assert mj.evaluate(grades, 4) == [C, B, A, D]


@pytest.mark.parametrize('n_seats', [0, -1, 3])
def test_evaluate_invalid_seats(n_seats):
    with pytest.raises(ValueError):
        MajorityJudgment().evaluate({A: [G.BAD], B: [G.GOOD]}, n_seats)


def test_to_dict():
    assert MajorityJudgment(seed=5).to_dict() == {
        'class': 'mjudge.evaluate.MajorityJudgment',
        'seed': 5,
    }
