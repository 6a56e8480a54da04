"""Built-in importers.

Importing this package registers them with :mod:`mictk.data.registry`.
"""

from . import memory, mnist_patch  # noqa: F401
from .memory import ArrayImporter
from .mnist_patch import MNISTPatchImporter, build_fixture

__all__ = ["ArrayImporter", "MNISTPatchImporter", "build_fixture", "memory", "mnist_patch"]
