"""Layers chained through shared ``s``/``g`` slots."""

from __future__ import annotations

import numpy as np
import pytest

from mictk.errors import ShapeMismatch
from mictk.layers import Dropout, LayerChain, ReLU, Sigmoid, available_layers, create_layer


@pytest.mark.parametrize("kind", sorted(available_layers()))
def test_every_layer_exposes_slot_convention(kind):
    layer = create_layer(kind, 3, 3, 2)
    assert set(layer.s) == set(layer.g) == {"x", "y"}
    assert layer.s["x"].shape == layer.g["x"].shape == (3, 2)
    assert layer.s["y"].shape == layer.g["y"].shape == (3, 2)
    layer.s["x"].uni_rand_real(-1.0, 1.0)
    before = layer.g["x"].values.copy()
    layer.forward()
    np.testing.assert_array_equal(layer.g["x"].values, before)
    layer.backward()


def test_chain_aliases_neighbouring_slots():
    first, second = ReLU(4, 4, 2), Sigmoid(4, 4, 2)
    chain = LayerChain([first, second])
    assert second.s["x"] is first.s["y"]
    assert second.g["x"] is first.g["y"]
    assert chain.input is first.s["x"]
    assert chain.output is second.s["y"]


def test_chain_forward_backward_matches_manual_computation():
    relu, sig = ReLU(3, 3, 2), Sigmoid(3, 3, 2)
    chain = LayerChain([relu, sig])
    x = np.array([[-1.0, 2.0], [0.5, -3.0], [0.0, 1.0]], dtype=np.float32)
    out = chain.forward(x)
    h = np.maximum(x, 0)
    y = 1.0 / (1.0 + np.exp(-h))
    np.testing.assert_allclose(out.values, y, rtol=1e-6)

    dy = np.ones_like(x)
    dx = chain.backward(dy)
    expected = (h > 0) * (y * (1 - y)) * dy
    np.testing.assert_allclose(dx.values, expected, rtol=1e-6)


def test_chain_dropout_only_when_requested():
    chain = LayerChain([Dropout(5, 5, 3, keep_ratio=0.5, seed=3), ReLU(5, 5, 3)])
    x = np.ones((5, 3), dtype=np.float32)
    np.testing.assert_array_equal(chain.forward(x).values, x)
    dropped = chain.forward(x, apply_dropout=True).values
    assert set(np.unique(dropped)) <= {0.0, 2.0}


def test_chain_rejects_incompatible_neighbours():
    with pytest.raises(ShapeMismatch):
        LayerChain([ReLU(3, 3, 2), ReLU(4, 4, 2)])


def test_chain_input_shape_checked():
    chain = LayerChain([ReLU(2, 2, 2)])
    with pytest.raises(ShapeMismatch):
        chain.forward(np.zeros((3, 2)))


def test_chain_resize_keeps_neighbours_shared():
    relu, sig = ReLU(3, 3, 2), Sigmoid(3, 3, 2)
    chain = LayerChain([relu, sig])
    chain.resize_batch(4)
    assert sig.s["x"] is relu.s["y"]
    assert sig.g["x"] is relu.g["y"]
    assert chain.input.shape == chain.output.shape == (3, 4)
    x = np.full((3, 4), 2.0, dtype=np.float32)
    out = chain.forward(x)
    np.testing.assert_allclose(out.values, 1.0 / (1.0 + np.exp(-x)), rtol=1e-6)
