'''Election candidates.

A candidate is identified solely by its name: two :class:`Candidate` objects
with the same name are the same candidate. Most functions in mjudge also
accept plain strings where a candidate is expected and convert them with
:func:`as_candidate`.
'''

from __future__ import annotations

import functools
from typing import Any, Iterable, FrozenSet, Union

from mjudge.persist import simple_serialization


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    E.g. a candidate with an empty name, or an election with no candidates.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate!r}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


@simple_serialization
@functools.total_ordering
class Candidate:
    '''A candidate in an election.

    Immutable; equality, hashing and ordering are by name.

    :param name: Unique name of the candidate (e.g. "Barack Obama").
    '''
    __slots__ = ('_name', )

    def __init__(self, name: str):
        if not isinstance(name, str) or not name:
            raise CandidateError(name, 'a non-empty string name')
        object.__setattr__(self, '_name', name)

    @property
    def name(self) -> str:
        return self._name

    def __setattr__(self, key, value):
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __reduce__(self):
        # rebuild through __init__, the slot cannot be set from outside
        return (type(self), (self._name, ))

    def __eq__(self, other):
        if isinstance(other, Candidate):
            return self._name == other._name
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, Candidate):
            return self._name < other._name
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Candidate, self._name))

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f'<Candidate({self._name})>'


def as_candidate(value: Union[Candidate, str]) -> Candidate:
    '''Return the value as a candidate, wrapping names into Candidate.

    :raises CandidateError: If the value is neither a candidate nor a name.
    '''
    if isinstance(value, Candidate):
        return value
    elif isinstance(value, str):
        return Candidate(value)
    else:
        raise CandidateError(value, 'a Candidate or a name string')


def candidate_set(values: Iterable[Union[Candidate, str]]
                  ) -> FrozenSet[Candidate]:
    '''Convert a collection of candidates or names to a frozen set.'''
    return frozenset(as_candidate(value) for value in values)
