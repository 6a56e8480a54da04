"""Importer registry."""

from __future__ import annotations

from typing import Any, Callable, Iterable, MutableMapping

from .importer import Importer

ImporterFactory = Callable[..., Importer]


_REGISTRY: MutableMapping[str, ImporterFactory] = {}


def register_importer(
    name: str | None = None,
    factory: ImporterFactory | None = None,
) -> Callable[[ImporterFactory], ImporterFactory] | ImporterFactory:
    """Register an importer factory.

    Works both as a decorator::

        @register_importer("mnist_patch")
        class MNISTPatchImporter(Importer):
            ...

    or directly::

        register_importer("array", ArrayImporter)
    """

    def _decorator(func: ImporterFactory) -> ImporterFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_importer requires a name when used without a decorator")
    return _decorator


def get_importer(name: str, /, **options: Any) -> Importer:
    """Instantiate the importer registered under ``name``."""

    if name not in _REGISTRY:
        raise KeyError(f"Unknown importer: {name}")
    return _REGISTRY[name](**options)


def available_importers() -> Iterable[str]:
    """Return the sorted list of registered importer names."""

    return sorted(_REGISTRY)


__all__ = ["available_importers", "get_importer", "register_importer"]
