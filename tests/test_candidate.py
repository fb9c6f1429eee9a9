import sys
import os
import copy
import pickle

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
from mjudge.candidate import Candidate, CandidateError, as_candidate, candidate_set


def test_equality_by_name():
    assert Candidate('Barack Obama') == Candidate('Barack Obama')
    assert Candidate('Barack Obama') != Candidate('Angela Merkel')
    assert hash(Candidate('A')) == hash(Candidate('A'))
    assert len({Candidate('A'), Candidate('A'), Candidate('B')}) == 2


def test_not_equal_to_name():
    assert Candidate('A') != 'A'


def test_ordering():
    assert sorted([Candidate('C'), Candidate('A'), Candidate('B')]) == [
        Candidate('A'), Candidate('B'), Candidate('C')
    ]


def test_immutable():
    cand = Candidate('A')
    with pytest.raises(AttributeError):
        cand.name = 'B'


@pytest.mark.parametrize('name', ['', None, 42])
def test_invalid_name(name):
    with pytest.raises(CandidateError):
        Candidate(name)


def test_repr():
    assert repr(Candidate('A')) == '<Candidate(A)>'
    assert str(Candidate('A')) == 'A'


def test_as_candidate():
    cand = Candidate('A')
    assert as_candidate(cand) is cand
    assert as_candidate('A') == cand
    with pytest.raises(CandidateError):
        as_candidate(frozenset('A'))


def test_candidate_set():
    assert candidate_set(['A', Candidate('A'), 'B']) == frozenset([
        Candidate('A'), Candidate('B')
    ])


def test_copy_and_pickle():
    cand = Candidate('Barack Obama')
    for restored in (
        copy.copy(cand),
        copy.deepcopy(cand),
        pickle.loads(pickle.dumps(cand)),
    ):
        assert restored == cand
        assert restored.name == 'Barack Obama'
        with pytest.raises(AttributeError):
            restored.name = 'Mitt Romney'


def test_deepcopy_candidate_containers():
    cands = {Candidate('A'): [Candidate('B')]}
    assert copy.deepcopy(cands) == cands
