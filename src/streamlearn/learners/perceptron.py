"""Online perceptron for linear binary categorization.

The categorizer starts without weights and allocates a zero vector sized to
the first input it sees. Each update applies the classic mistake-driven
perceptron rule, treating a zero score as a mistake for either label.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple, Union

import numpy as np

from ..exceptions import ConvergenceWarning, DimensionMismatchError, InvalidArgumentError
from .base import BatchAndOnlineLearner

logger = logging.getLogger(__name__)

LabeledExample = Tuple[Any, bool]


def as_vector(x: Any) -> np.ndarray:
    """Convert an input to a 1-D float array.

    Objects exposing ``convert_to_vector()`` are converted through it;
    anything else goes through ``np.asarray``.

    Parameters
    ----------
    x : array_like or vector-convertible
        Input to convert.

    Returns
    -------
    np.ndarray
        1-D float array.
    """
    if hasattr(x, "convert_to_vector"):
        x = x.convert_to_vector()
    x = np.asarray(x, dtype=float)
    if x.ndim != 1:
        raise InvalidArgumentError(f"Expected a 1D input vector, got {x.ndim}D")
    return x


@dataclass(frozen=True)
class Uninitialized:
    """Categorizer phase before any example has been seen."""

    bias: float = 0.0


@dataclass
class Initialized:
    """Categorizer phase with a weight vector of fixed dimensionality."""

    weights: np.ndarray
    bias: float = 0.0

    @property
    def dimensionality(self) -> int:
        return int(self.weights.shape[0])


CategorizerState = Union[Uninitialized, Initialized]


class LinearBinaryCategorizer:
    """Linear binary categorizer ``sign(w . x + b)``.

    Parameters
    ----------
    weights : np.ndarray, optional
        Initial weight vector. If None, the categorizer starts uninitialized
        and its weights are allocated by the first learner update.
    bias : float
        Initial bias.

    Attributes
    ----------
    state : Uninitialized or Initialized
        Current phase and parameters.
    """

    def __init__(self, weights: Optional[np.ndarray] = None, bias: float = 0.0):
        if weights is None:
            self.state: CategorizerState = Uninitialized(float(bias))
        else:
            dtype = float
            if isinstance(weights, np.ndarray) and np.issubdtype(weights.dtype, np.floating):
                dtype = weights.dtype
            self.state = Initialized(as_vector(weights).astype(dtype), float(bias))

    @property
    def is_initialized(self) -> bool:
        return isinstance(self.state, Initialized)

    @property
    def weights(self) -> Optional[np.ndarray]:
        """Weight vector, or None before the first update."""
        if isinstance(self.state, Initialized):
            return self.state.weights
        return None

    @property
    def bias(self) -> float:
        return self.state.bias

    @property
    def dimensionality(self) -> Optional[int]:
        if isinstance(self.state, Initialized):
            return self.state.dimensionality
        return None

    def check_dimensionality(self, x: np.ndarray) -> None:
        """Raise ``DimensionMismatchError`` if ``x`` does not fit the weights."""
        if isinstance(self.state, Initialized):
            expected = self.state.dimensionality
            if x.shape[0] != expected:
                raise DimensionMismatchError(expected, int(x.shape[0]))

    def evaluate_as_double(self, x: Any) -> float:
        """Raw score ``w . x + b``.

        An uninitialized categorizer scores every input as its bias (0.0).
        """
        x = as_vector(x)
        if isinstance(self.state, Uninitialized):
            return self.state.bias
        self.check_dimensionality(x)
        return float(np.dot(self.state.weights, x) + self.state.bias)

    def evaluate(self, x: Any) -> bool:
        """Predicted category; a zero score predicts the negative class."""
        return self.evaluate_as_double(x) > 0.0

    predict = evaluate

    def copy(self) -> "LinearBinaryCategorizer":
        result = LinearBinaryCategorizer(bias=self.state.bias)
        if isinstance(self.state, Initialized):
            result.state = Initialized(self.state.weights.copy(), self.state.bias)
        return result

    def __repr__(self) -> str:
        if isinstance(self.state, Initialized):
            return (f"LinearBinaryCategorizer(dim={self.state.dimensionality}, "
                    f"bias={self.state.bias})")
        return "LinearBinaryCategorizer(uninitialized)"


class OnlinePerceptron(BatchAndOnlineLearner):
    """Online version of the classic perceptron algorithm.

    Examples are ``(input, label)`` pairs where ``label`` is a bool. An
    update happens when the label is True and the score is <= 0, or when the
    label is False and the score is >= 0.

    Usage:
        learner = OnlinePerceptron()
        model = learner.create_initial()
        for x, y in stream:
            learner.update(model, (x, y))

    Parameters
    ----------
    dtype : numpy dtype
        Data type of the weight vector allocated on the first update.
    """

    def __init__(self, dtype=np.float64):
        self.dtype = np.dtype(dtype)
        if not np.issubdtype(self.dtype, np.floating):
            raise InvalidArgumentError(
                f"Weight dtype must be a floating type, got {self.dtype}")

    def create_initial(self) -> LinearBinaryCategorizer:
        return LinearBinaryCategorizer()

    def update(self, model: LinearBinaryCategorizer, example: LabeledExample) -> None:
        """Apply the perceptron rule for a single labeled example.

        Parameters
        ----------
        model : LinearBinaryCategorizer
            Categorizer to update in place.
        example : tuple
            ``(input, label)`` pair.

        Raises
        ------
        DimensionMismatchError
            If the model is initialized with a different dimensionality.
        """
        self._apply(model, example)

    def _apply(self, model: LinearBinaryCategorizer, example: LabeledExample) -> bool:
        """Update ``model`` and report whether the example was a mistake."""
        x, label = example
        x = as_vector(x)
        model.check_dimensionality(x)

        state = model.state
        if isinstance(state, Uninitialized):
            state = Initialized(np.zeros(x.shape[0], dtype=self.dtype), state.bias)

        score = float(np.dot(state.weights, x) + state.bias)

        mistake = True
        if label and score <= 0.0:
            state.weights += x
            state.bias += 1.0
        elif not label and score >= 0.0:
            state.weights -= x
            state.bias -= 1.0
        else:
            mistake = False

        if state is not model.state:
            model.state = state
            logger.debug("Initialized weights with dimensionality %d", x.shape[0])
        return mistake

    def is_mistake(self, model: LinearBinaryCategorizer, example: LabeledExample) -> bool:
        """Whether ``update`` would change ``model`` for this example."""
        x, label = example
        score = model.evaluate_as_double(x)
        return score <= 0.0 if label else score >= 0.0

    def count_mistakes(
        self,
        model: LinearBinaryCategorizer,
        examples: Iterable[LabeledExample],
    ) -> int:
        """Count examples that would trigger an update, without mutating."""
        return sum(1 for example in examples if self.is_mistake(model, example))

    def learn_until_converged(
        self,
        examples: Iterable[LabeledExample],
        max_passes: int = 100,
        model: Optional[LinearBinaryCategorizer] = None,
    ) -> LinearBinaryCategorizer:
        """Make repeated passes until one pass produces no mistakes.

        Parameters
        ----------
        examples : iterable of (input, label)
            Training examples. Materialized once so it can be re-iterated.
        max_passes : int
            Maximum number of passes over the data.
        model : LinearBinaryCategorizer, optional
            Model to continue training. A fresh one is created if None.

        Returns
        -------
        LinearBinaryCategorizer
            The trained model.
        """
        if max_passes < 1:
            raise InvalidArgumentError("max_passes must be >= 1")

        examples = list(examples)
        if model is None:
            model = self.create_initial()

        for n_pass in range(1, max_passes + 1):
            mistakes = 0
            for example in examples:
                if self._apply(model, example):
                    mistakes += 1
            logger.debug("Pass %d: %d mistakes", n_pass, mistakes)
            if mistakes == 0:
                return model

        warnings.warn(
            f"Perceptron did not converge after {max_passes} passes",
            ConvergenceWarning,
        )
        return model

    def __repr__(self) -> str:
        return f"OnlinePerceptron(dtype={self.dtype})"
