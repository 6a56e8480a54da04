"""Exception hierarchy shared by the toolkit."""

from __future__ import annotations


class MictkError(RuntimeError):
    """Base class for all toolkit errors."""


class ShapeMismatch(MictkError, ValueError):
    """Raised when operands of an elementwise or broadcast operation disagree in shape."""


class EmptyDataset(MictkError):
    """Raised when samples are requested from an importer holding no data."""


class IndexOutOfRange(MictkError, IndexError):
    """Raised when a sample index falls outside ``[0, dataset_size)``."""


class ImportFailure(MictkError):
    """Raised by importers when their source cannot be read or parsed."""


__all__ = [
    "EmptyDataset",
    "ImportFailure",
    "IndexOutOfRange",
    "MictkError",
    "ShapeMismatch",
]
