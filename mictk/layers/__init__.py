"""Layers with the ``s``/``g`` slot convention and the chain that drives them."""

from .activation import Dropout, ReLU, Sigmoid
from .chain import LayerChain
from .layer import Layer, LayerProtocol, available_layers, create_layer, register_layer

__all__ = [
    "Dropout",
    "Layer",
    "LayerChain",
    "LayerProtocol",
    "ReLU",
    "Sigmoid",
    "available_layers",
    "create_layer",
    "register_layer",
]
