"""Hugging Face Datasets integration for StreamLearn learners.

Streams dataset rows into an incremental learner, either through a
``dataset.map`` function or with the ``DatasetLearner`` wrapper. Rows are
applied in dataset order, so learning from a dataset gives the same model
as calling ``learner.update`` on each row by hand.
"""

from typing import Any, Callable, Dict, Iterator, Optional

try:
    from datasets import Features, Sequence, Value
    HAS_DATASETS = True
except ImportError:
    HAS_DATASETS = False

from ..learners.base import IncrementalLearner


def values_feature(name: str = "values", dtype: str = "string") -> "Features":
    """Create HF Features schema for a column of raw values.

    Parameters
    ----------
    name : str
        Name of the values column.
    dtype : str
        HF value type of the column (e.g. "string", "int64").

    Returns
    -------
    Features
        HuggingFace Features object.
    """
    if not HAS_DATASETS:
        raise ImportError("datasets package required for HF integration")

    return Features({name: Value(dtype)})


def labeled_vectors_feature(
    input_name: str = "features",
    label_name: str = "label"
) -> "Features":
    """Create Features schema for float vectors with a boolean label."""
    if not HAS_DATASETS:
        raise ImportError("datasets package required for HF integration")

    return Features({
        input_name: Sequence(Value("float64")),
        label_name: Value("bool")
    })


def _iter_examples(
    batch: Dict[str, Any],
    input_column: str,
    label_column: Optional[str]
) -> Iterator[Any]:
    if label_column is None:
        yield from batch[input_column]
    else:
        for x, label in zip(batch[input_column], batch[label_column]):
            yield (x, bool(label))


def create_update_map_fn(
    learner: IncrementalLearner,
    model: Any,
    input_column: str = "values",
    label_column: Optional[str] = None
) -> Callable:
    """Create a batched map function that updates ``model`` with each row.

    The batch is passed through unchanged. Use with ``num_proc=1``: worker
    processes would update their own copies of the model.

    Parameters
    ----------
    learner : IncrementalLearner
        Learner providing the update rule.
    model : object
        Model to update in place.
    input_column : str
        Column holding the example (or the input part of a labeled example).
    label_column : str, optional
        Column holding labels. If given, examples are ``(input, label)``.

    Returns
    -------
    Callable
        Map function suitable for ``dataset.map(batched=True)``.
    """
    def update_fn(batch: Dict[str, Any]) -> Dict[str, Any]:
        for example in _iter_examples(batch, input_column, label_column):
            learner.update(model, example)
        return batch

    return update_fn


class DatasetLearner:
    """High-level wrapper for learning from HF datasets.

    Parameters
    ----------
    learner : IncrementalLearner
        Learner instance.
    input_column : str
        Input column name.
    label_column : str, optional
        Label column name, for supervised learners.
    """

    def __init__(
        self,
        learner: IncrementalLearner,
        input_column: str = "values",
        label_column: Optional[str] = None
    ):
        if not HAS_DATASETS:
            raise ImportError("datasets package required for DatasetLearner")

        self.learner = learner
        self.input_column = input_column
        self.label_column = label_column

    def update(self, model: Any, dataset, batch_size: int = 1000) -> Any:
        """Stream every row of ``dataset`` into ``model``.

        Parameters
        ----------
        model : object
            Model to update in place.
        dataset : Dataset or IterableDataset
            HuggingFace dataset, map-style or streaming.
        batch_size : int
            Number of rows read per batch.

        Returns
        -------
        object
            The updated model.
        """
        update_fn = create_update_map_fn(
            self.learner,
            model,
            self.input_column,
            self.label_column
        )

        for batch in dataset.iter(batch_size=batch_size):
            update_fn(batch)
        return model

    def learn(self, dataset, batch_size: int = 1000) -> Any:
        """Learn a new model from ``dataset``."""
        return self.update(self.learner.create_initial(), dataset, batch_size)
