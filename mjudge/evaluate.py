'''Majority Judgment winner resolution.

The winner is the candidate with the highest median grade. If several
candidates share the highest median, the tie is broken by removing one
occurrence of the shared median grade from each of the tied candidates and
comparing the medians of the remaining grades again, with all the other
candidates out of contention. This is repeated until only one of the tied
candidates has the highest median, or until the tied candidates run out of
grades altogether, in which case the winner is drawn by lot.

Each removal shrinks every tied collection by one grade, so the number of
tiebreaking rounds is bounded by the number of ballots.
'''

import dataclasses
import logging
import random
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Union

from mjudge.candidate import Candidate
from mjudge.convert import GradeCollection, remove_one, size, to_collection
from mjudge.grade import Grade, count_median
from mjudge.persist import simple_serialization


GradesPerCandidate = Mapping[
    Candidate, Union[GradeCollection, Sequence[Grade]]
]


class VotingSystemError(Exception):
    '''A voting system with a valid setup ended up in an unresolvable state.'''
    pass


@dataclasses.dataclass(frozen=True)
class ResolutionRound:
    '''One round of winner resolution.

    :param contenders: Grade collections of the candidates still in
        contention.
    :param medians: Median grades of the candidates with any grades left.
    '''
    contenders: Dict[Candidate, GradeCollection]
    medians: Dict[Candidate, Grade]

    @property
    def best_grade(self) -> Optional[Grade]:
        '''The highest median grade, None if all grades are exhausted.'''
        if not self.medians:
            return None
        return max(self.medians.values(), key=lambda grade: grade.rank)

    @property
    def leaders(self) -> List[Candidate]:
        '''Candidates with the highest median grade, sorted by name.'''
        best_grade = self.best_grade
        return sorted(
            cand for cand, median in self.medians.items()
            if median == best_grade
        )

    @property
    def is_decisive(self) -> bool:
        return len(self.leaders) == 1

    @property
    def is_exhausted(self) -> bool:
        return not self.medians


@simple_serialization
class MajorityJudgment:
    '''Majority Judgment, a median-grade voting system.

    Selects the candidate with the highest median grade, breaking ties by
    the removal of the shared median grades (the original Balinski-Laraki
    procedure).

    :param seed: Seed for the random generator that draws the winner when
        the tied candidates exhaust all their grades. None draws from system
        entropy.
    :param rng: A random generator to use instead of a newly seeded one.
        Not serialized.
    '''
    serialize_params = ['seed']

    def __init__(self,
                 seed: Optional[int] = None,
                 rng: Optional[random.Random] = None,
                 ):
        self.seed = seed
        self.rng = rng if rng is not None else random.Random(seed)

    @staticmethod
    def medians(grades_per_candidate: GradesPerCandidate
                ) -> Dict[Candidate, Grade]:
        '''Compute the median grade of every candidate with any grades.

        Candidates with no grades are left out.

        :param grades_per_candidate: Grades (sequences or count tables)
            assigned to each candidate.
        '''
        medians = {}
        for cand, grades in grades_per_candidate.items():
            collection = to_collection(grades)
            if size(collection):
                medians[cand] = count_median(collection)
        return medians

    def rounds(self,
               grades_per_candidate: GradesPerCandidate,
               ) -> Iterator[ResolutionRound]:
        '''Iterate over the rounds of winner resolution.

        The first round considers all candidates; every following one
        only the candidates tied in the previous round, with one occurrence
        of their shared median grade removed. The last round yielded is
        either decisive (a single leader) or exhausted (no grades left).

        :param grades_per_candidate: Grades (sequences or count tables)
            assigned to each candidate.
        :raises VotingSystemError: If there are no candidates.
        '''
        if not grades_per_candidate:
            raise VotingSystemError('no candidates to resolve the winner of')
        contenders = {
            cand: to_collection(grades)
            for cand, grades in grades_per_candidate.items()
        }
        round_i = 0
        while True:
            current = ResolutionRound(contenders, self.medians(contenders))
            yield current
            if current.is_exhausted or current.is_decisive:
                return
            best_grade = current.best_grade
            leaders = current.leaders
            round_i += 1
            logging.debug('tiebreak round %d: %s tied at %s, removing one',
                          round_i, ', '.join(str(c) for c in leaders),
                          best_grade)
            contenders = {
                cand: remove_one(contenders[cand], best_grade)
                for cand in leaders
            }

    def resolve(self, grades_per_candidate: GradesPerCandidate) -> Candidate:
        '''Return the winner according to Majority Judgment.

        :param grades_per_candidate: Grades (sequences or count tables)
            assigned to each candidate. Every candidate should have at least
            one grade.
        :raises VotingSystemError: If there are no candidates.
        '''
        for last_round in self.rounds(grades_per_candidate):
            pass
        if last_round.is_exhausted:
            return self._draw(list(last_round.contenders.keys()))
        winner = last_round.leaders[0]
        logging.info('%s elected with median grade %s',
                     winner, last_round.best_grade)
        return winner

    def _draw(self, candidates: List[Candidate]) -> Candidate:
        # sorted so that a seeded draw does not depend on dict order
        candidates = sorted(candidates)
        winner = self.rng.choice(candidates)
        logging.warning('grades exhausted for %s, drew %s by lot',
                        ', '.join(str(c) for c in candidates), winner)
        return winner

    def evaluate(self,
                 grades_per_candidate: GradesPerCandidate,
                 n_seats: int = 1,
                 ) -> List[Candidate]:
        '''Select candidates by Majority Judgment in order of precedence.

        The first candidate is the winner; every following one is the winner
        of the election with all the preceding candidates removed.

        :param grades_per_candidate: Grades (sequences or count tables)
            assigned to each candidate.
        :param n_seats: Number of candidates to select.
        :raises ValueError: If the number of seats is not positive or exceeds
            the number of candidates.
        '''
        if not 1 <= n_seats <= len(grades_per_candidate):
            raise ValueError(
                f'invalid number of seats: {n_seats}, must be between 1 and'
                f' {len(grades_per_candidate)}'
            )
        remaining = dict(grades_per_candidate)
        elected = []
        while len(elected) < n_seats:
            winner = self.resolve(remaining)
            elected.append(winner)
            del remaining[winner]
        return elected
