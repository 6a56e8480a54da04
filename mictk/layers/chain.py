"""Wiring of consecutive layers into a forward/backward chain."""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence

from ..core.matrix import Matrix
from ..errors import ShapeMismatch
from .layer import LayerProtocol

logger = logging.getLogger(__name__)


class LayerChain:
    """Run heterogeneous layers in sequence.

    Construction aliases each layer's ``s['y']``/``g['y']`` to the next
    layer's ``s['x']``/``g['x']``, so the matrices are shared objects and no
    copying happens between layers.
    """

    def __init__(self, layers: Sequence[LayerProtocol]) -> None:
        self.layers: List[LayerProtocol] = list(layers)
        self.connect()

    def connect(self) -> None:
        for prev, nxt in zip(self.layers[:-1], self.layers[1:]):
            if prev.s["y"].shape != nxt.s["x"].shape:
                raise ShapeMismatch(
                    f"Cannot connect {prev!r} (output {prev.s['y'].shape}) "
                    f"to {nxt!r} (input {nxt.s['x'].shape})"
                )
            nxt.s["x"] = prev.s["y"]
            nxt.g["x"] = prev.g["y"]
        logger.debug("Connected %d layers", len(self.layers))

    def resize_batch(self, batch_size: int) -> None:
        """Resize every layer and restore the shared slots between neighbours."""

        for layer in self.layers:
            layer.resize_batch(batch_size)
        self.connect()

    @property
    def input(self) -> Matrix:
        return self.layers[0].s["x"]

    @property
    def output(self) -> Matrix:
        return self.layers[-1].s["y"]

    @property
    def output_gradient(self) -> Matrix:
        return self.layers[-1].g["y"]

    @property
    def input_gradient(self) -> Matrix:
        return self.layers[0].g["x"]

    def forward(self, inputs=None, apply_dropout: bool = False) -> Matrix:
        if inputs is not None:
            self.input.copy_from(inputs)
        for layer in self.layers:
            layer.forward(apply_dropout)
        return self.output

    def backward(self, gradient=None) -> Matrix:
        if gradient is not None:
            self.output_gradient.copy_from(gradient)
        for layer in reversed(self.layers):
            layer.backward()
        return self.input_gradient

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self) -> Iterator[LayerProtocol]:
        return iter(self.layers)
