"""mictk public API."""

from . import config, errors  # noqa: F401
from .core import Batch, Matrix, RandomContext, Sample
from .data import Importer, ImporterConfig, ImportResult, get_importer
from .data.loaders import ArrayImporter, MNISTPatchImporter
from .encoders import MatrixEncoder, SDREncoder
from .errors import EmptyDataset, ImportFailure, IndexOutOfRange, ShapeMismatch
from .layers import Layer, LayerChain, ReLU

__version__ = "0.1.0"

__all__ = [
    "ArrayImporter",
    "Batch",
    "EmptyDataset",
    "ImportFailure",
    "ImportResult",
    "Importer",
    "ImporterConfig",
    "IndexOutOfRange",
    "Layer",
    "LayerChain",
    "MNISTPatchImporter",
    "Matrix",
    "MatrixEncoder",
    "RandomContext",
    "ReLU",
    "SDREncoder",
    "Sample",
    "ShapeMismatch",
    "config",
    "errors",
    "get_importer",
]
