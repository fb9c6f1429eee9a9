'''The ordinal grading scale of Majority Judgment and medians over it.

Voters do not rank candidates or give them numeric scores; they assign each
candidate one of seven verbal grades. The grades are only ever compared by
their position on the scale (declaration order), never by their labels:

>>> Grade.MEDIOCRE < Grade.GOOD
True
>>> Grade.GOOD.rank
4

The median grade of a candidate is the grade in the middle of all the grades
it received, sorted from the worst to the best. If there is an even number of
grades, both grades adjacent to the middle are acceptable medians; this
module always takes the one at index ``size // 2``, i.e. the upper one.
'''

import enum
import functools
from typing import Dict, Iterable, List, Sequence


@functools.total_ordering
class Grade(enum.Enum):
    '''A grade to assign to a candidate, from the worst to the best.'''

    BAD = 0
    MEDIOCRE = 1
    INADEQUATE = 2
    PASSABLE = 3
    GOOD = 4
    VERY_GOOD = 5
    EXCELLENT = 6

    @property
    def rank(self) -> int:
        '''Position on the scale; 0 is the worst grade, 6 the best.'''
        return self.value

    @property
    def label(self) -> str:
        return self.name.replace('_', ' ').title()

    def __lt__(self, other):
        if isinstance(other, Grade):
            return self.rank < other.rank
        return NotImplemented

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_label(cls, label: str) -> 'Grade':
        '''Find the grade with the given name.

        Case, spaces, hyphens and underscores are disregarded, so
        ``'VeryGood'``, ``'very_good'`` and ``'Very Good'`` all give
        :attr:`VERY_GOOD`.

        :raises ValueError: If no grade has the given name.
        '''
        key = _normalize_label(label)
        for grade in cls:
            if _normalize_label(grade.name) == key:
                return grade
        raise ValueError(
            f'unknown grade: {label!r}, allowed: '
            + ', '.join(grade.label for grade in cls)
        )


def _normalize_label(label: str) -> str:
    return ''.join(ch for ch in label.lower() if ch.isalnum())


def sort_grades(grades: Iterable[Grade]) -> List[Grade]:
    '''Sort grades from the worst to the best.'''
    return sorted(grades, key=lambda grade: grade.rank)


def median(grades: Sequence[Grade]) -> Grade:
    '''Return the median grade of a sequence of grades.

    The grades are sorted by rank and the element at index ``len // 2``
    is returned; for an even count, this is the upper of the two middle
    grades.

    :param grades: A non-empty sequence of grades, in any order.
    :raises ValueError: If the sequence is empty.
    '''
    if not grades:
        raise ValueError('cannot find median of empty grades')
    return sort_grades(grades)[len(grades) // 2]


def count_median(counts: Dict[Grade, int]) -> Grade:
    '''Return the median grade of a table of grade occurrence counts.

    Gives the same result as :func:`median` on the sequence of grades that
    the table represents, without expanding it.

    :param counts: A mapping of grades to the numbers of their occurrences.
        Grades with zero counts are disregarded.
    :raises ValueError: If there are no grades with a positive count.
    '''
    total = sum(n for n in counts.values() if n > 0)
    if not total:
        raise ValueError('cannot find median of empty grades')
    median_index = total // 2
    seen = 0
    for grade in sort_grades(counts.keys()):
        if counts[grade] <= 0:
            continue
        seen += counts[grade]
        if seen > median_index:
            return grade
    raise ValueError('median index beyond grade counts')
