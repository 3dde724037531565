"""Empirical distributions over discrete domains."""

from .histogram import FrequencyTable, ProbabilityMassFunction
from .learner import FrequencyTableLearner

__all__ = ["FrequencyTable", "FrequencyTableLearner", "ProbabilityMassFunction"]
