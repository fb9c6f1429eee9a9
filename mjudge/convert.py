'''Aggregation of ballots into per-candidate grade collections.

The resolution of a Majority Judgment election does not look at individual
ballots, only at the multiset of grades each candidate received. This module
restructures the ballots into such multisets, represented as count tables
mapping each grade to the number of its occurrences (grades that were never
given are absent from the table).
'''

import collections
import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Union

from mjudge.candidate import Candidate
from mjudge.grade import Grade, sort_grades
from mjudge.vote import Ballot, grade_pairs


GradeCollection = Dict[Grade, int]


class BallotsToGrades:
    '''Convert ballots to grade collections of the individual candidates.

    Every occurrence of every grade is retained, so for N ballots, each
    candidate's collection holds exactly N grades. The ballots are not
    validated here; use the validators from :mod:`mjudge.vote` beforehand.
    '''
    def convert(self,
                ballots: Iterable[Ballot],
                ) -> Dict[Candidate, GradeCollection]:
        '''Group the grades from all ballots by candidate.

        :param ballots: Ballots of the election.
        :returns: A mapping from candidates to their grade count tables.
        '''
        ballots = list(ballots)
        grades = collections.defaultdict(lambda: collections.defaultdict(int))
        for cand, grade in grade_pairs(ballots):
            grades[cand][grade] += 1
        logging.debug('aggregated %d ballots for %d candidates',
                      len(ballots), len(grades))
        return {cand: dict(cgrades) for cand, cgrades in grades.items()}


def aggregate(ballots: Iterable[Ballot]) -> Dict[Candidate, GradeCollection]:
    '''Group the grades from all ballots by candidate.

    A shortcut for :meth:`BallotsToGrades.convert`.
    '''
    return BallotsToGrades().convert(ballots)


def to_collection(grades: Union[Sequence[Grade], Mapping[Grade, int]]
                  ) -> GradeCollection:
    '''Return a grade count table for a sequence of grades.

    Count tables are returned as a copy with non-positive counts dropped.
    '''
    if hasattr(grades, 'items'):
        return {grade: n for grade, n in grades.items() if n > 0}
    else:
        return dict(collections.Counter(grades))


def expand(collection: GradeCollection) -> List[Grade]:
    '''List all grades of a count table, sorted from the worst to the best.'''
    return [
        grade
        for grade in sort_grades(collection.keys())
        for i in range(collection[grade])
    ]


def size(collection: GradeCollection) -> int:
    return sum(n for n in collection.values() if n > 0)


def remove_one(collection: GradeCollection, grade: Grade) -> GradeCollection:
    '''Return a copy of the count table with one occurrence of grade removed.

    :raises KeyError: If the grade does not occur in the table.
    '''
    if collection.get(grade, 0) <= 0:
        raise KeyError(grade)
    reduced = collection.copy()
    reduced[grade] -= 1
    if not reduced[grade]:
        del reduced[grade]
    return reduced
