'''Majority Judgment elections.

An :class:`Election` ties together a description, the set of candidates
standing in it and the evaluator that resolves its winner. It is the entry
point for evaluating the ballots:

>>> election = Election('Mayor', ['Alice', 'Bob'])
>>> election.elect([
...     Ballot({'Alice': 'Good', 'Bob': 'Passable'}),
...     Ballot({'Alice': 'Excellent', 'Bob': 'Bad'}),
... ])
<Candidate(Alice)>
'''

from typing import Dict, Iterable, List, Optional, Sequence, Union

from mjudge.candidate import Candidate, CandidateError, candidate_set
from mjudge.convert import BallotsToGrades, GradeCollection
from mjudge.evaluate import MajorityJudgment
from mjudge.persist import simple_serialization
from mjudge.vote import Ballot, BallotCollectionValidator


@simple_serialization
class Election:
    '''An election defined by a description and a set of candidates.

    :param description: Description of the election (e.g. "Presidential
        Election").
    :param candidates: Possible candidates; names are converted to
        :class:`Candidate` objects.
    :param evaluator: Evaluator resolving the winner from the grades of the
        candidates. Defaults to an unseeded :class:`MajorityJudgment`.
    :raises CandidateError: If there are no candidates.
    '''
    def __init__(self,
                 description: str,
                 candidates: Iterable[Union[Candidate, str]],
                 evaluator: Optional[MajorityJudgment] = None,
                 ):
        self.description = description
        self.candidates = candidate_set(candidates)
        if not self.candidates:
            raise CandidateError(None, 'at least one candidate')
        self.evaluator = (
            evaluator if evaluator is not None else MajorityJudgment()
        )
        self._validator = BallotCollectionValidator(self.candidates)
        self._converter = BallotsToGrades()

    def grades(self,
               ballots: Sequence[Ballot],
               ) -> Dict[Candidate, GradeCollection]:
        '''Return the grades assigned to each candidate by all the voters.

        :param ballots: The ballots for this election; they must assign a
            grade to each of the candidates and there must be at least one.
        :raises mjudge.vote.VoteError: If the ballots are invalid.
        '''
        ballots = list(ballots)
        self._validator.validate(ballots)
        return self._converter.convert(ballots)

    def elect(self, ballots: Sequence[Ballot]) -> Candidate:
        '''Return the candidate that wins this election.

        :param ballots: The ballots for this election; they must assign a
            grade to each of the candidates and there must be at least one.
        :raises mjudge.vote.VoteError: If the ballots are invalid.
        '''
        return self.evaluator.resolve(self.grades(ballots))

    def ranking(self,
                ballots: Sequence[Ballot],
                n_seats: Optional[int] = None,
                ) -> List[Candidate]:
        '''Return the candidates in the order of precedence.

        :param ballots: The ballots for this election.
        :param n_seats: How many candidates to rank; all by default.
        :raises mjudge.vote.VoteError: If the ballots are invalid.
        '''
        if n_seats is None:
            n_seats = len(self.candidates)
        return self.evaluator.evaluate(self.grades(ballots), n_seats)

    def __repr__(self) -> str:
        return (
            f'<Election({self.description!r}, '
            + ', '.join(str(cand) for cand in sorted(self.candidates))
            + ')>'
        )
