"""Learner that builds frequency tables from raw values."""

from typing import Hashable, Iterable

from ..learners.base import BatchAndOnlineLearner
from .histogram import FrequencyTable, ProbabilityMassFunction


class FrequencyTableLearner(BatchAndOnlineLearner):
    """Counts each example value once.

    Usage:
        learner = FrequencyTableLearner()
        table = learner.create_initial()
        for value in stream:
            learner.update(table, value)
    """

    def create_initial(self) -> FrequencyTable:
        return FrequencyTable()

    def update(self, model: FrequencyTable, example: Hashable) -> None:
        model.add(example, 1)

    def update_batch(self, model: FrequencyTable, examples: Iterable[Hashable]) -> None:
        model.add_all(examples)

    def estimate(self, examples: Iterable[Hashable]) -> ProbabilityMassFunction:
        """Estimate the empirical distribution of ``examples``."""
        result = ProbabilityMassFunction()
        self.update_batch(result, examples)
        return result

    def __repr__(self) -> str:
        return "FrequencyTableLearner()"
