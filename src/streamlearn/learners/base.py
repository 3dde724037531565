"""Incremental learner contract.

A learner produces an empty model with ``create_initial()`` and folds one
example at a time into it with ``update(model, example)``. Batch learning is
nothing more than streaming over a finite, ordered collection, so both paths
end in the same state for the same input.
"""

from typing import Iterable, Protocol, TypeVar, runtime_checkable

ExampleT = TypeVar("ExampleT", contravariant=True)
ModelT = TypeVar("ModelT")


@runtime_checkable
class IncrementalLearner(Protocol[ExampleT, ModelT]):
    """Structural interface shared by every online learner."""

    def create_initial(self) -> ModelT:
        """Return a fresh model with no observations applied."""
        ...

    def update(self, model: ModelT, example: ExampleT) -> None:
        """Apply exactly one example to ``model`` in place."""
        ...


def update_batch(
    learner: IncrementalLearner[ExampleT, ModelT],
    model: ModelT,
    examples: Iterable[ExampleT],
) -> ModelT:
    """Apply ``learner.update`` once per example, in iteration order.

    Parameters
    ----------
    learner : IncrementalLearner
        Learner defining the update rule.
    model : object
        Model to mutate.
    examples : iterable
        Examples to apply.

    Returns
    -------
    object
        The same ``model``, for chaining.
    """
    for example in examples:
        learner.update(model, example)
    return model


def learn_batch(
    learner: IncrementalLearner[ExampleT, ModelT],
    examples: Iterable[ExampleT],
) -> ModelT:
    """Learn a new model from a finite collection of examples.

    Equivalent to ``create_initial()`` followed by one ``update`` per example.
    """
    return update_batch(learner, learner.create_initial(), examples)


class BatchAndOnlineLearner:
    """Mixin giving a learner ``update_batch`` and ``learn`` for free.

    Subclasses implement ``create_initial`` and ``update``.
    """

    def create_initial(self):
        raise NotImplementedError

    def update(self, model, example) -> None:
        raise NotImplementedError

    def update_batch(self, model, examples: Iterable) -> None:
        """Update ``model`` with each example in order."""
        update_batch(self, model, examples)

    def learn(self, examples: Iterable):
        """Create an initial model and stream ``examples`` into it."""
        return learn_batch(self, examples)
