"""HDF5 I/O utilities for model state persistence.

Frequency tables are stored as parallel ``values``/``counts`` datasets in
domain order, so a reloaded table keeps its tie-breaking order. Categorizers
store their bias as an attribute and their weights as a dataset.
"""

import logging
from typing import Union

import numpy as np

from ..distributions.histogram import FrequencyTable, ProbabilityMassFunction
from ..learners.perceptron import LinearBinaryCategorizer

logger = logging.getLogger(__name__)

Model = Union[FrequencyTable, LinearBinaryCategorizer]

_TABLE_TYPES = {
    "FrequencyTable": FrequencyTable,
    "ProbabilityMassFunction": ProbabilityMassFunction,
}


def _is_number(value) -> bool:
    return isinstance(value, (int, float, np.integer, np.floating))


def _table_arrays(table: FrequencyTable):
    """Build the ``values``/``counts`` arrays for a table.

    Returns
    -------
    tuple
        ``(values, counts, value_kind)`` ready to be written.

    Raises
    ------
    TypeError
        If the values have no native HDF5 representation.
    """
    values = table.domain()
    counts = np.array([count for _, count in table.items()], dtype=np.int64)

    if values and all(isinstance(v, str) for v in values):
        return values, counts, "str"

    if not all(_is_number(v) for v in values):
        raise TypeError("HDF5 storage supports tables of all-str or all-numeric values")

    try:
        array = np.asarray(values) if values else np.zeros(0)
    except OverflowError:
        raise TypeError("Numeric values do not fit a native HDF5 number type")
    if array.dtype == object:
        raise TypeError("Numeric values do not fit a native HDF5 number type")
    return array, counts, "number"


def _write_table(group, values, counts, value_kind: str, total_count: int) -> None:
    import h5py

    if value_kind == "str":
        group.create_dataset("values", data=values, dtype=h5py.string_dtype())
    else:
        group.create_dataset("values", data=values)
    group.attrs["value_kind"] = value_kind

    group.create_dataset("counts", data=counts)
    group.attrs["total_count"] = total_count


def _load_table(group, table_type: type) -> FrequencyTable:
    if group.attrs["value_kind"] == "str":
        values = group["values"].asstr()[...].tolist()
    else:
        values = group["values"][...].tolist()
    counts = group["counts"][...].tolist()

    table = table_type()
    for value, count in zip(values, counts):
        table.add(value, int(count))

    if table.total_count != int(group.attrs["total_count"]):
        raise ValueError(
            f"Stored total_count {int(group.attrs['total_count'])} does not "
            f"match the sum of counts {table.total_count}"
        )
    return table


def save_model_to_hdf5(
    model: Model,
    filepath: str,
    group_name: str = "model"
) -> None:
    """Save model state to an HDF5 file.

    The model is written to a scratch group and moved into place once
    complete, so a failed save leaves any previous group untouched.

    Parameters
    ----------
    model : FrequencyTable, ProbabilityMassFunction or LinearBinaryCategorizer
        Model to save.
    filepath : str
        Path to HDF5 file. Opened in append mode; an existing group with the
        same name is replaced.
    group_name : str
        Group name within HDF5 file.
    """
    try:
        import h5py
    except ImportError:
        raise ImportError("h5py package required for HDF5 I/O")

    if isinstance(model, FrequencyTable):
        values, counts, value_kind = _table_arrays(model)
    elif not isinstance(model, LinearBinaryCategorizer):
        raise ValueError(f"Unsupported model type: {type(model).__name__}")

    scratch_name = f"{group_name}.__partial__"

    with h5py.File(filepath, 'a') as f:
        if scratch_name in f:
            del f[scratch_name]
        group = f.create_group(scratch_name)

        try:
            if isinstance(model, FrequencyTable):
                if isinstance(model, ProbabilityMassFunction):
                    group.attrs['model_type'] = 'ProbabilityMassFunction'
                else:
                    group.attrs['model_type'] = 'FrequencyTable'
                _write_table(group, values, counts, value_kind, model.total_count)

            else:
                group.attrs['model_type'] = 'LinearBinaryCategorizer'
                group.attrs['bias'] = model.bias
                if model.is_initialized:
                    group.create_dataset('weights', data=model.weights)
        except Exception:
            del f[scratch_name]
            raise

        if group_name in f:
            del f[group_name]
        f.move(scratch_name, group_name)

    logger.debug("Saved %r to %s:%s", model, filepath, group_name)


def load_model_from_hdf5(
    filepath: str,
    group_name: str = "model"
) -> Model:
    """Load model state from an HDF5 file.

    Parameters
    ----------
    filepath : str
        Path to HDF5 file.
    group_name : str
        Group name within HDF5 file.

    Returns
    -------
    FrequencyTable, ProbabilityMassFunction or LinearBinaryCategorizer
        Loaded model.
    """
    try:
        import h5py
    except ImportError:
        raise ImportError("h5py package required for HDF5 I/O")

    with h5py.File(filepath, 'r') as f:
        if group_name not in f:
            raise KeyError(f"Group '{group_name}' not found in HDF5 file")

        group = f[group_name]
        model_type = group.attrs['model_type']

        if model_type in _TABLE_TYPES:
            model = _load_table(group, _TABLE_TYPES[model_type])

        elif model_type == 'LinearBinaryCategorizer':
            bias = float(group.attrs['bias'])
            weights = group['weights'][...] if 'weights' in group else None
            model = LinearBinaryCategorizer(weights=weights, bias=bias)

        else:
            raise ValueError(f"Unknown model type: {model_type}")

    logger.debug("Loaded %r from %s:%s", model, filepath, group_name)
    return model


__all__ = ["save_model_to_hdf5", "load_model_from_hdf5"]
