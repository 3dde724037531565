"""Model persistence."""

from .hdf5 import load_model_from_hdf5, save_model_to_hdf5

__all__ = ["load_model_from_hdf5", "save_model_to_hdf5"]
