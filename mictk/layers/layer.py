"""Layer contract: named activation/gradient slots plus forward and backward."""

from __future__ import annotations

import abc
import logging
from typing import Any, Callable, Dict, Iterable, MutableMapping, Protocol

from ..core.matrix import Matrix

logger = logging.getLogger(__name__)

StateMap = Dict[str, Matrix]


class LayerProtocol(Protocol):
    """Anything a :class:`~mictk.layers.chain.LayerChain` can drive."""

    s: StateMap
    g: StateMap

    def forward(self, apply_dropout: bool = False) -> None:
        """Compute ``s['y']`` from ``s['x']``."""

    def backward(self) -> None:
        """Compute ``g['x']`` from ``g['y']`` and the stored state."""


class Layer(abc.ABC):
    """Base class holding the ``s`` (activations) and ``g`` (gradients) maps.

    ``s['x']``/``g['x']`` have shape ``inputs x batch_size`` and
    ``s['y']``/``g['y']`` have shape ``outputs x batch_size``. Samples are
    stored column-wise.
    """

    def __init__(
        self,
        inputs: int,
        outputs: int,
        batch_size: int,
        layer_type: str,
        name: str | None = None,
    ) -> None:
        self.inputs = int(inputs)
        self.outputs = int(outputs)
        self.batch_size = int(batch_size)
        self.layer_type = layer_type
        self.name = name or layer_type
        self.s: StateMap = {}
        self.g: StateMap = {}
        self._allocate()

    def _allocate(self) -> None:
        self.s["x"] = Matrix(self.inputs, self.batch_size)
        self.s["y"] = Matrix(self.outputs, self.batch_size)
        self.g["x"] = Matrix(self.inputs, self.batch_size)
        self.g["y"] = Matrix(self.outputs, self.batch_size)

    def resize_batch(self, batch_size: int) -> None:
        """Reallocate every slot for a new batch size (contents are zeroed).

        Slots shared with neighbours are replaced too; layers inside a
        :class:`~mictk.layers.chain.LayerChain` are resized through the chain.
        """

        self.batch_size = int(batch_size)
        self._allocate()

    @abc.abstractmethod
    def forward(self, apply_dropout: bool = False) -> None:
        """Compute ``s['y']`` from ``s['x']``; never touches gradients."""

    @abc.abstractmethod
    def backward(self) -> None:
        """Compute ``g['x']`` from ``g['y']`` and the forward state."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, inputs={self.inputs}, "
            f"outputs={self.outputs}, batch_size={self.batch_size})"
        )


LayerFactory = Callable[..., Layer]


_REGISTRY: MutableMapping[str, LayerFactory] = {}


def register_layer(name: str) -> Callable[[LayerFactory], LayerFactory]:
    def _decorator(factory: LayerFactory) -> LayerFactory:
        _REGISTRY[name] = factory
        return factory

    return _decorator


def create_layer(kind: str, /, *args: Any, **kwargs: Any) -> Layer:
    """Instantiate the layer registered under ``kind``."""

    try:
        factory = _REGISTRY[kind]
    except KeyError as exc:
        raise KeyError(f"Unknown layer: {kind}") from exc
    layer = factory(*args, **kwargs)
    logger.debug("Created %r", layer)
    return layer


def available_layers() -> Iterable[str]:
    return sorted(_REGISTRY)


__all__ = [
    "Layer",
    "LayerProtocol",
    "StateMap",
    "available_layers",
    "create_layer",
    "register_layer",
]
