"""StreamLearn: incremental statistical learning.

Models that can be learned from a full batch of examples or updated one
example at a time, with identical results either way. Includes an exact
frequency table over discrete values and an online perceptron.
"""

__version__ = "0.1.0"

from .distributions import FrequencyTable, FrequencyTableLearner, ProbabilityMassFunction
from .exceptions import (
    ConvergenceWarning,
    DimensionMismatchError,
    InvalidArgumentError,
    StreamLearnError,
    UnsupportedOperationError,
)
from .learners import (
    IncrementalLearner,
    LinearBinaryCategorizer,
    OnlinePerceptron,
    learn_batch,
)

__all__ = [
    "ConvergenceWarning",
    "DimensionMismatchError",
    "FrequencyTable",
    "FrequencyTableLearner",
    "IncrementalLearner",
    "InvalidArgumentError",
    "LinearBinaryCategorizer",
    "OnlinePerceptron",
    "ProbabilityMassFunction",
    "StreamLearnError",
    "UnsupportedOperationError",
    "learn_batch",
]
