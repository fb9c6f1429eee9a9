"""mjudge - a library for evaluating Majority Judgment elections.

In a Majority Judgment election, every voter grades every candidate on a
common ordinal scale (from Bad to Excellent) and the candidate with the
highest median grade wins. Ties are broken by repeatedly removing one
shared median grade from each tied candidate.

The library is organized as follows:

-   The ``grade`` module defines the :class:`Grade` scale and the median
    computation over it.
-   The ``candidate`` and ``vote`` modules define candidates and ballots,
    together with the validators that check ballots against the election
    rules.
-   The ``convert`` module aggregates ballots into grade collections of the
    individual candidates.
-   The ``evaluate`` module resolves the winner from those collections.
-   The :class:`Election` object from the ``election`` module ties all of
    the above together; it can be serialized to and from a JSON-ready dict
    with the ``persist`` module.
"""
