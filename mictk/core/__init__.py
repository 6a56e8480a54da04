"""Core numerical primitives for mictk."""

from . import activations, matrix, rand, types
from .matrix import Matrix
from .rand import GaussianGenerator, RandomContext
from .types import Batch, Sample

__all__ = [
    "Batch",
    "GaussianGenerator",
    "Matrix",
    "RandomContext",
    "Sample",
    "activations",
    "matrix",
    "rand",
    "types",
]
