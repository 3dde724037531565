"""Tests for online perceptron module."""

import warnings

import numpy as np
import pytest
from streamlearn.exceptions import ConvergenceWarning, DimensionMismatchError, InvalidArgumentError
from streamlearn.learners.base import learn_batch
from streamlearn.learners.perceptron import (
    Initialized,
    LinearBinaryCategorizer,
    OnlinePerceptron,
    Uninitialized,
)


def separable_data(n=200, dim=3, seed=0):
    """Linearly separable data with a margin around a random hyperplane."""
    rng = np.random.default_rng(seed)
    w_true = rng.normal(size=dim)
    b_true = 0.5
    X = rng.normal(size=(n, dim))
    scores = X @ w_true + b_true
    keep = np.abs(scores) > 0.2
    return [(x, bool(s > 0)) for x, s in zip(X[keep], scores[keep])]


class TestLinearBinaryCategorizer:
    """Test cases for LinearBinaryCategorizer class."""

    def test_uninitialized(self):
        """A new categorizer has no weights and zero bias."""
        model = LinearBinaryCategorizer()

        assert isinstance(model.state, Uninitialized)
        assert model.weights is None
        assert model.bias == 0.0
        assert model.dimensionality is None
        assert not model.is_initialized
        assert model.evaluate_as_double([1.0, 2.0]) == 0.0
        assert model.evaluate([1.0, 2.0]) is False

    def test_evaluate(self):
        """Score is w . x + b and zero predicts negative."""
        model = LinearBinaryCategorizer(weights=np.array([1.0, -1.0]), bias=0.5)

        assert model.evaluate_as_double([2.0, 1.0]) == 1.5
        assert model.evaluate([2.0, 1.0]) is True
        assert model.evaluate([0.0, 1.0]) is False
        # Exact tie
        assert model.evaluate_as_double([0.0, 0.5]) == 0.0
        assert model.predict([0.0, 0.5]) is False

    def test_evaluate_dimension_mismatch(self):
        """Evaluating with the wrong dimensionality raises."""
        model = LinearBinaryCategorizer(weights=np.zeros(3))

        with pytest.raises(DimensionMismatchError) as excinfo:
            model.evaluate([1.0, 2.0])
        assert excinfo.value.expected == 3
        assert excinfo.value.actual == 2

    def test_vector_convertible_input(self):
        """Inputs exposing convert_to_vector are converted through it."""

        class Point:
            def __init__(self, x, y):
                self.x, self.y = x, y

            def convert_to_vector(self):
                return np.array([self.x, self.y])

        model = LinearBinaryCategorizer(weights=np.array([1.0, 2.0]))

        assert model.evaluate_as_double(Point(3.0, 1.0)) == 5.0

    def test_rejects_non_vector(self):
        """Inputs must be one-dimensional."""
        model = LinearBinaryCategorizer(weights=np.zeros(2))

        with pytest.raises(InvalidArgumentError):
            model.evaluate(np.zeros((2, 2)))

    def test_copy(self):
        """Copies do not share weights."""
        model = LinearBinaryCategorizer(weights=np.array([1.0, 2.0]), bias=1.0)
        clone = model.copy()
        clone.weights[0] = 5.0

        assert model.weights[0] == 1.0
        assert clone.bias == 1.0
        assert LinearBinaryCategorizer().copy().weights is None

    def test_keeps_float_weight_dtype(self):
        """Floating weight arrays keep their dtype; other inputs become float64."""
        model = LinearBinaryCategorizer(weights=np.array([1.0, 2.0], dtype=np.float32))
        assert model.weights.dtype == np.float32

        model = LinearBinaryCategorizer(weights=np.array([1, 2]))
        assert model.weights.dtype == np.float64


class TestOnlinePerceptron:
    """Test cases for OnlinePerceptron class."""

    def test_create_initial(self):
        """Initial model is uninitialized with zero bias."""
        learner = OnlinePerceptron()
        model = learner.create_initial()

        assert isinstance(model, LinearBinaryCategorizer)
        assert isinstance(model.state, Uninitialized)
        assert model.bias == 0.0

    def test_zero_vector_tie_updates_bias(self):
        """Scenario: zero input with a positive label and zero score."""
        learner = OnlinePerceptron()
        model = learner.create_initial()

        learner.update(model, (np.array([0.0, 0.0]), True))

        assert isinstance(model.state, Initialized)
        assert model.bias == 1.0
        np.testing.assert_array_equal(model.weights, [0.0, 0.0])

    def test_tie_updates_for_negative_label(self):
        """A zero score is also a mistake for a negative label."""
        learner = OnlinePerceptron()
        model = learner.create_initial()

        learner.update(model, ([1.0, 2.0], False))

        np.testing.assert_array_equal(model.weights, [-1.0, -2.0])
        assert model.bias == -1.0

    def test_positive_mistake(self):
        """A positive example scored <= 0 is added."""
        learner = OnlinePerceptron()
        model = LinearBinaryCategorizer(weights=np.array([-1.0, 0.0]))

        learner.update(model, ([1.0, 1.0], True))

        np.testing.assert_array_equal(model.weights, [0.0, 1.0])
        assert model.bias == 1.0

    def test_correct_examples_leave_model(self):
        """Strictly separated examples cause no change."""
        learner = OnlinePerceptron()
        model = LinearBinaryCategorizer(weights=np.array([1.0, 0.0]), bias=0.0)

        learner.update(model, ([2.0, 5.0], True))
        learner.update(model, ([-2.0, 5.0], False))

        np.testing.assert_array_equal(model.weights, [1.0, 0.0])
        assert model.bias == 0.0

    def test_weights_allocated_from_first_input(self):
        """Weights take the first input's dimensionality and the dtype."""
        learner = OnlinePerceptron(dtype=np.float32)
        model = learner.create_initial()

        learner.update(model, ([1.0, 2.0, 3.0, 4.0], True))

        assert model.dimensionality == 4
        assert model.weights.dtype == np.float32

    def test_dimension_mismatch_leaves_model_usable(self):
        """A mismatched input raises and does not mutate the model."""
        learner = OnlinePerceptron()
        model = learner.create_initial()
        learner.update(model, ([1.0, 2.0], True))
        weights_before = model.weights.copy()
        bias_before = model.bias

        with pytest.raises(DimensionMismatchError):
            learner.update(model, ([1.0, 2.0, 3.0], False))

        np.testing.assert_array_equal(model.weights, weights_before)
        assert model.bias == bias_before

        learner.update(model, ([-1.0, -2.0], False))
        assert model.dimensionality == 2

    def test_integer_dtype_rejected(self):
        """Weight vectors must use a floating dtype."""
        with pytest.raises(InvalidArgumentError):
            OnlinePerceptron(dtype=np.int64)
        with pytest.raises(InvalidArgumentError):
            OnlinePerceptron(dtype=bool)

    def test_failed_first_update_leaves_model_uninitialized(self):
        """A first update that raises does not allocate weights."""
        learner = OnlinePerceptron()
        model = learner.create_initial()

        with pytest.raises(InvalidArgumentError):
            learner.update(model, (np.zeros((2, 2)), True))
        with pytest.raises(ValueError):
            learner.update(model, ([1.0, 2.0], np.array([True, False])))

        assert not model.is_initialized
        assert model.bias == 0.0

        learner.update(model, ([1.0, 2.0, 3.0], True))
        assert model.dimensionality == 3

    def test_batch_equals_streaming(self):
        """Batch learning equals sequential updates."""
        data = separable_data(n=100)
        learner = OnlinePerceptron()

        streamed = learner.create_initial()
        for example in data:
            learner.update(streamed, example)

        batched = learner.learn(data)
        functional = learn_batch(learner, data)

        np.testing.assert_array_equal(batched.weights, streamed.weights)
        np.testing.assert_array_equal(functional.weights, streamed.weights)
        assert batched.bias == streamed.bias == functional.bias

    def test_is_mistake_does_not_mutate(self):
        """is_mistake and count_mistakes only read the model."""
        learner = OnlinePerceptron()
        model = LinearBinaryCategorizer(weights=np.array([1.0]))

        assert learner.is_mistake(model, ([0.0], True))
        assert learner.is_mistake(model, ([0.0], False))
        assert not learner.is_mistake(model, ([1.0], True))
        assert learner.count_mistakes(model, [([1.0], True), ([1.0], False)]) == 1
        np.testing.assert_array_equal(model.weights, [1.0])

    def test_converges_on_separable_data(self):
        """The perceptron reaches a mistake-free pass on separable data."""
        data = separable_data(n=300, dim=4, seed=3)
        learner = OnlinePerceptron()

        with warnings.catch_warnings():
            warnings.simplefilter("error", ConvergenceWarning)
            model = learner.learn_until_converged(data, max_passes=5000)

        assert learner.count_mistakes(model, data) == 0
        for x, label in data:
            assert model.evaluate(x) == label

    def test_convergence_warning(self):
        """Non-separable data exhausts the pass budget with a warning."""
        data = [([1.0], True), ([1.0], False)]
        learner = OnlinePerceptron()

        with pytest.warns(ConvergenceWarning):
            model = learner.learn_until_converged(data, max_passes=5)

        assert model.is_initialized

    def test_invalid_max_passes(self):
        """At least one pass is required."""
        with pytest.raises(InvalidArgumentError):
            OnlinePerceptron().learn_until_converged([], max_passes=0)

    def test_repr(self):
        """Test string representation."""
        assert "OnlinePerceptron" in repr(OnlinePerceptron())
        assert "uninitialized" in repr(LinearBinaryCategorizer())
