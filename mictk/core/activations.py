"""Activation functions and their derivatives."""

from __future__ import annotations

import numpy as np

from .types import Array


def relu(x: Array) -> Array:
    """Return the ReLU activation."""

    return np.maximum(x, 0.0)


def relu_deriv_from_output(y: Array) -> Array:
    """ReLU derivative expressed through the forward output (strict ``y > 0``)."""

    return (y > 0).astype(y.dtype if np.issubdtype(y.dtype, np.floating) else np.float32)


def sigmoid(x: Array) -> Array:
    return 1.0 / (1.0 + np.exp(-x))


def sigmoid_deriv_from_output(y: Array) -> Array:
    return y * (1.0 - y)
