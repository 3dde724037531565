"""Online learners and the incremental learning contract."""

from .base import BatchAndOnlineLearner, IncrementalLearner, learn_batch, update_batch
from .perceptron import (
    Initialized,
    LinearBinaryCategorizer,
    OnlinePerceptron,
    Uninitialized,
)

__all__ = [
    "BatchAndOnlineLearner",
    "IncrementalLearner",
    "Initialized",
    "LinearBinaryCategorizer",
    "OnlinePerceptron",
    "Uninitialized",
    "learn_batch",
    "update_batch",
]
