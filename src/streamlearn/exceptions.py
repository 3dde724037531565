"""Error types raised by StreamLearn models and learners."""

from typing import Optional


class StreamLearnError(Exception):
    """Base class for all StreamLearn errors."""


class InvalidArgumentError(StreamLearnError, ValueError):
    """An argument is outside the range an operation accepts.

    Raised before any state is touched, so the model is left exactly as it
    was before the call.
    """


class DimensionMismatchError(StreamLearnError, ValueError):
    """An input vector does not match the dimensionality of a model.

    Parameters
    ----------
    expected : int
        Dimensionality the model was initialized with.
    actual : int
        Dimensionality of the offending input.
    """

    def __init__(self, expected: int, actual: int, message: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        if message is None:
            message = f"Expected input of dimensionality {expected}, got {actual}"
        super().__init__(message)


class UnsupportedOperationError(StreamLearnError, NotImplementedError):
    """The operation is not defined for this kind of model."""


class ConvergenceWarning(UserWarning):
    """An iterative learner stopped before reaching a mistake-free pass."""
