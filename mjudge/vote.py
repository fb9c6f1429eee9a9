'''Ballots and ballot validators.

A Majority Judgment ballot assigns a grade to every candidate of the
election; it is represented by an immutable :class:`Ballot` mapping.

Ballot validators check individual ballots (or the whole sequence of ballots
of an election) against the election rules. If a ballot is invalid, they raise
a subclass of :class:`VoteError`.
'''

import abc
import collections.abc
from numbers import Number
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, \
    Optional, Sequence, Tuple, Union

from mjudge.candidate import Candidate, as_candidate, candidate_set
from mjudge.grade import Grade
from mjudge.persist import simple_serialization


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A vote is invalid given the election rules.'''
    pass


class VoteTypeError(VoteError):
    '''A vote is of an invalid type.

    :param vtype: Vote type detected as invalid.
    :param expected: Vote type that was expected.
    '''
    def __init__(self, vtype: type, expected: type = None):
        self.vtype = vtype
        self.expected = expected
        message = f'invalid vote type: {vtype}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class VoteMagnitudeError(VoteError):
    '''A vote quantity is too small or too large.

    :param value: Size that was found to be invalid.
    :param min_value: Minimum value permissible in the context.
    :param max_value: Maximum value permissible in the context.
    :param value_name: Role of the size (e.g. number of ballots).
    '''
    def __init__(self,
                 value: Number,
                 min_value: Optional[Number] = None,
                 max_value: Optional[Number] = None,
                 value_name: str = 'count',
                 ):
        self.value = value
        self.min_value = min_value
        self.max_value = max_value
        message = f'invalid vote {value_name}: {value}'
        parts = []
        if min_value is not None:
            parts.append(f'>={min_value}')
        if max_value is not None:
            parts.append(f'<={max_value}')
        if parts:
            message += ', must be ' + ' and '.join(parts)
        super().__init__(message)


class VoteValueError(VoteError):
    '''An explicitly given vote value is invalid.

    :param value: Value of the vote that is invalid.
    :param candidate: A candidate that the vote was given for. If None, a
        specific candidate could not be pinpointed.
    :param allowed: A spectrum of values that is allowed at the given point.
    '''
    def __init__(self,
                 value: Any,
                 candidate: Optional[Candidate] = None,
                 allowed: Any = None,
                 ):
        self.value = value
        self.candidate = candidate
        self.allowed = allowed
        message = f'invalid vote: {value!r}'
        if candidate is not None:
            message += f' for candidate {candidate}'
        if allowed is not None:
            message += f', allowed: {allowed}'
        super().__init__(message)


class BallotCandidatesError(VoteError):
    '''A ballot does not grade exactly the candidates of the election.

    :param missing: Election candidates the ballot does not grade.
    :param extra: Graded candidates that do not stand in the election.
    '''
    def __init__(self,
                 missing: Iterable[Candidate] = (),
                 extra: Iterable[Candidate] = (),
                 ):
        self.missing = frozenset(missing)
        self.extra = frozenset(extra)
        message = 'ballot candidates differ from election candidates'
        if self.missing:
            message += ', missing: ' + _names(self.missing)
        if self.extra:
            message += ', extra: ' + _names(self.extra)
        super().__init__(message)


class DuplicateGradeError(VoteError):
    '''A ballot grades the same candidate more than once.

    :param candidate: The candidate graded repeatedly.
    :param grades: All the grades given to the candidate.
    '''
    def __init__(self, candidate: Candidate, *grades: Any):
        self.candidate = candidate
        self.grades = grades
        super().__init__(
            f'candidate {candidate} graded more than once: '
            + ', '.join(str(grade) for grade in grades)
        )


def _names(candidates: Iterable[Candidate]) -> str:
    return ', '.join(str(cand) for cand in sorted(candidates))


class Ballot(collections.abc.Mapping):
    '''A ballot, which assigns a grade to each candidate of an election.

    Behaves as a read-only mapping of candidates to grades. Candidate names
    are accepted in place of :class:`Candidate` objects and grade labels
    (see :meth:`Grade.from_label`) in place of grades.

    :param grades: The grades assigned to each candidate.
    :raises VoteValueError: If a grade is neither a :class:`Grade` nor a
        known grade label.
    :raises DuplicateGradeError: If a candidate is graded twice, under its
        name and as a :class:`Candidate` object.
    '''
    __slots__ = ('_grades', '_hash')

    def __init__(self, grades: Mapping[Union[Candidate, str], Union[Grade, str]]):
        self._grades: Dict[Candidate, Grade] = {}
        for cand, grade in grades.items():
            candidate = as_candidate(cand)
            if candidate in self._grades:
                raise DuplicateGradeError(
                    candidate, self._grades[candidate], grade
                )
            self._grades[candidate] = _as_grade(grade, cand)
        self._hash = None

    def __getitem__(self, candidate: Union[Candidate, str]) -> Grade:
        if isinstance(candidate, str):
            candidate = Candidate(candidate)
        return self._grades[candidate]

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._grades)

    def __len__(self) -> int:
        return len(self._grades)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(frozenset(self._grades.items()))
        return self._hash

    @property
    def candidates(self) -> FrozenSet[Candidate]:
        '''The set of candidates graded by this ballot.'''
        return frozenset(self._grades)

    def __repr__(self) -> str:
        inner = ', '.join(
            f'{cand}: {grade.name}' for cand, grade in self._grades.items()
        )
        return f'<Ballot({inner})>'


def _as_grade(value: Union[Grade, str], candidate: Any) -> Grade:
    if isinstance(value, Grade):
        return value
    elif isinstance(value, str):
        try:
            return Grade.from_label(value)
        except ValueError as e:
            raise VoteValueError(
                value, candidate, [g.label for g in Grade]
            ) from e
    else:
        raise VoteValueError(value, candidate, [g.label for g in Grade])


@simple_serialization
class BallotValidator:
    '''Validate that a single ballot grades exactly the given candidates.

    :param candidates: The candidate universe of the election.
    '''
    def __init__(self, candidates: Iterable[Union[Candidate, str]]):
        self.candidates = candidate_set(candidates)

    def is_valid(self, ballot: Any) -> bool:
        '''Return True if the ballot passes validation.'''
        try:
            self.validate(ballot)
        except VoteError:
            return False
        return True

    def validate(self, ballot: Ballot) -> None:
        '''Check that the ballot grades every candidate and nobody else.

        :raises VoteTypeError: If the ballot is not a :class:`Ballot`.
        :raises BallotCandidatesError: If the graded candidates differ from
            the candidates of the election.
        '''
        if not isinstance(ballot, Ballot):
            raise VoteTypeError(type(ballot), Ballot)
        graded = ballot.candidates
        if graded != self.candidates:
            raise BallotCandidatesError(
                missing=self.candidates - graded,
                extra=graded - self.candidates,
            )


@simple_serialization
class BallotCollectionValidator:
    '''Validate all ballots of an election.

    :param candidates: The candidate universe of the election.
    :param min_ballots: Minimum number of ballots for the election to be
        evaluated; Majority Judgment needs at least one.
    '''
    serialize_params = ['candidates', 'min_ballots']

    def __init__(self,
                 candidates: Iterable[Union[Candidate, str]],
                 min_ballots: int = 1,
                 ):
        self._ballot_validator = BallotValidator(candidates)
        self.min_ballots = min_ballots

    @property
    def candidates(self) -> FrozenSet[Candidate]:
        return self._ballot_validator.candidates

    def validate(self, ballots: Sequence[Ballot]) -> None:
        '''Check the number of ballots and every ballot in turn.

        :raises VoteMagnitudeError: If there are too few ballots.
        :raises VoteError: If any ballot is invalid.
        '''
        n_ballots = len(ballots)
        if n_ballots < self.min_ballots:
            raise VoteMagnitudeError(
                n_ballots, self.min_ballots, None, 'ballot count'
            )
        for ballot in ballots:
            self._ballot_validator.validate(ballot)


def grade_pairs(ballots: Iterable[Ballot]
                ) -> Iterator[Tuple[Candidate, Grade]]:
    '''Flatten ballots to a stream of all (candidate, grade) pairs.'''
    for ballot in ballots:
        yield from ballot.items()
