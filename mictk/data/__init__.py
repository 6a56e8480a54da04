"""Importers, the IDX codec and the importer registry."""

# Ensure built-in importers register themselves when the package is imported.
from . import loaders as _loaders  # noqa: F401
from .importer import Importer, ImporterConfig, ImportResult, SampleStore
from .registry import available_importers, get_importer, register_importer

__all__ = [
    "ImportResult",
    "Importer",
    "ImporterConfig",
    "SampleStore",
    "available_importers",
    "get_importer",
    "register_importer",
]
