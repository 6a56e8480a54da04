"""Encoder flattening single channel matrices (e.g. grayscale patches) into SDRs."""

from __future__ import annotations

from typing import Any

import numpy as np

from ..core.matrix import Matrix
from ..errors import ShapeMismatch
from .base import SDREncoder


class MatrixEncoder(SDREncoder[Matrix, Matrix]):
    """Reshape a ``height x width`` matrix into a ``sdr_length x 1`` column.

    There is no learning involved: values are copied column by column, and
    decoding reverses the layout.
    """

    def __init__(self, sdr_length: int, matrix_height: int, matrix_width: int) -> None:
        super().__init__(sdr_length)
        self.matrix_height = int(matrix_height)
        self.matrix_width = int(matrix_width)
        if self.sdr_length != self.matrix_height * self.matrix_width:
            raise ShapeMismatch(
                f"SDR length {self.sdr_length} does not match "
                f"{self.matrix_height}x{self.matrix_width} matrices"
            )

    def encode_sample(self, sample: Any) -> Matrix:
        values = np.asarray(sample)
        if values.shape != (self.matrix_height, self.matrix_width):
            raise ShapeMismatch(
                f"Expected a {self.matrix_height}x{self.matrix_width} matrix, got {values.shape}"
            )
        return Matrix.from_array(values.reshape(self.sdr_length, 1, order="F").copy())

    def decode_sample(self, sdr: Any) -> Matrix:
        values = np.asarray(sdr)
        if values.size != self.sdr_length or (values.ndim == 2 and values.shape[1] != 1):
            raise ShapeMismatch(f"Expected a {self.sdr_length}x1 SDR, got {values.shape}")
        return Matrix.from_array(
            values.reshape(self.matrix_height, self.matrix_width, order="F").copy()
        )
