"""Elementwise activation layers."""

from __future__ import annotations

import numpy as np

from ..core.activations import (
    relu,
    relu_deriv_from_output,
    sigmoid,
    sigmoid_deriv_from_output,
)
from ..errors import ShapeMismatch
from .layer import Layer, register_layer


class _ElementwiseLayer(Layer):
    def __init__(self, inputs: int, outputs: int, batch_size: int, layer_type: str, name=None):
        if inputs != outputs:
            raise ShapeMismatch(
                f"{layer_type} layer needs inputs == outputs, got {inputs} and {outputs}"
            )
        super().__init__(inputs, outputs, batch_size, layer_type, name)


@register_layer("relu")
class ReLU(_ElementwiseLayer):
    """Rectified linear unit: ``y = max(x, 0)``."""

    def __init__(self, inputs: int, outputs: int, batch_size: int, name: str | None = None):
        super().__init__(inputs, outputs, batch_size, "relu", name)

    def forward(self, apply_dropout: bool = False) -> None:
        # y = rectify(x)
        self.s["y"].values[...] = relu(self.s["x"].values)

    def backward(self) -> None:
        # dx = (y > 0) * dy
        y = self.s["y"].values
        np.multiply(relu_deriv_from_output(y), self.g["y"].values, out=self.g["x"].values)


@register_layer("sigmoid")
class Sigmoid(_ElementwiseLayer):
    def __init__(self, inputs: int, outputs: int, batch_size: int, name: str | None = None):
        super().__init__(inputs, outputs, batch_size, "sigmoid", name)

    def forward(self, apply_dropout: bool = False) -> None:
        self.s["y"].values[...] = sigmoid(self.s["x"].values)

    def backward(self) -> None:
        y = self.s["y"].values
        self.g["x"].values[...] = sigmoid_deriv_from_output(y) * self.g["y"].values


@register_layer("dropout")
class Dropout(_ElementwiseLayer):
    """Inverted dropout.

    With ``apply_dropout`` each element survives with probability
    ``keep_ratio`` and is scaled by ``1 / keep_ratio``; otherwise the layer is
    the identity. ``backward`` reuses the mask of the last forward pass.
    """

    def __init__(
        self,
        inputs: int,
        outputs: int,
        batch_size: int,
        keep_ratio: float = 0.5,
        seed: int | None = None,
        name: str | None = None,
    ):
        if not 0.0 < keep_ratio <= 1.0:
            raise ValueError("keep_ratio must be in (0, 1]")
        super().__init__(inputs, outputs, batch_size, "dropout", name)
        self.keep_ratio = float(keep_ratio)
        self.rng = np.random.default_rng(seed)
        self.mask: np.ndarray | None = None

    def forward(self, apply_dropout: bool = False) -> None:
        x = self.s["x"].values
        if apply_dropout:
            keep = self.rng.random(x.shape) < self.keep_ratio
            self.mask = keep.astype(x.dtype) / self.keep_ratio
        else:
            self.mask = np.ones_like(x)
        np.multiply(x, self.mask, out=self.s["y"].values)

    def resize_batch(self, batch_size: int) -> None:
        super().resize_batch(batch_size)
        self.mask = None

    def backward(self) -> None:
        gy = self.g["y"].values
        mask = self.mask if self.mask is not None else np.ones_like(gy)
        np.multiply(gy, mask, out=self.g["x"].values)


__all__ = ["Dropout", "ReLU", "Sigmoid"]
