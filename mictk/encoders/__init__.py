"""Sample <-> SDR encoders."""

from .base import SDREncoder
from .matrix import MatrixEncoder

__all__ = ["MatrixEncoder", "SDREncoder"]
