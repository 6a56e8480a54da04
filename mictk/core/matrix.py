"""Dense two dimensional matrix with in-place elementwise operators."""

from __future__ import annotations

from typing import Any, Callable, Tuple

import numpy as np

from ..errors import ShapeMismatch
from .types import Array


def _apply(func: Callable[..., Any], *operands: Array, dtype: np.dtype) -> Array:
    """Evaluate ``func`` over aligned operands, vectorising plain callables."""

    if isinstance(func, np.ufunc):
        return func(*operands)
    return np.vectorize(func, otypes=[dtype])(*operands)


def _as_vector(v: Any) -> Array:
    values = np.asarray(v)
    if values.ndim == 2 and 1 in values.shape:
        values = values.reshape(-1)
    if values.ndim != 1:
        raise ShapeMismatch(f"Expected a vector, got array of shape {values.shape}")
    return values


class Matrix:
    """Dense ``rows x cols`` container backed by a NumPy array.

    Every mutating operation works in place and keeps the current shape; only
    :meth:`assign` may change it. Randomisation draws from the matrix's own
    generator, seeded once, unless a generator is passed explicitly.
    """

    __slots__ = ("_values", "_rng", "_seed")

    def __init__(
        self,
        rows: int = 0,
        cols: int = 0,
        *,
        dtype: Any = np.float32,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        if rows < 0 or cols < 0:
            raise ValueError(f"Matrix dimensions must be non-negative, got {rows}x{cols}")
        self._values = np.zeros((int(rows), int(cols)), dtype=dtype)
        self._rng = rng
        self._seed = seed

    @classmethod
    def from_array(cls, array: Any, *, dtype: Any = None, **kwargs: Any) -> "Matrix":
        values = np.array(array, dtype=dtype)
        if values.ndim == 1:
            values = values.reshape(-1, 1)
        if values.ndim != 2:
            raise ShapeMismatch(f"Matrix requires a 2D array, got {values.ndim}D")
        out = cls(0, 0, dtype=values.dtype, **kwargs)
        out._values = values
        return out

    @classmethod
    def zeros(cls, rows: int, cols: int, **kwargs: Any) -> "Matrix":
        return cls(rows, cols, **kwargs)

    # -- shape ------------------------------------------------------------------

    @property
    def values(self) -> Array:
        return self._values

    @property
    def rows(self) -> int:
        return int(self._values.shape[0])

    @property
    def cols(self) -> int:
        return int(self._values.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    @property
    def size(self) -> int:
        return int(self._values.size)

    @property
    def dtype(self) -> np.dtype:
        return self._values.dtype

    @property
    def rng(self) -> np.random.Generator:
        if self._rng is None:
            self._rng = np.random.default_rng(self._seed)
        return self._rng

    def assign(self, array: Any) -> "Matrix":
        """Replace the backing storage, adopting the shape of ``array``."""

        values = np.array(array, dtype=self.dtype)
        if values.ndim == 1:
            values = values.reshape(-1, 1)
        if values.ndim != 2:
            raise ShapeMismatch(f"Matrix requires a 2D array, got {values.ndim}D")
        self._values = values
        return self

    def copy(self) -> "Matrix":
        return Matrix.from_array(self._values.copy())

    def set_zero(self) -> None:
        self._values.fill(0)

    def copy_from(self, other: Any) -> None:
        """Copy ``other`` into this matrix without changing its shape."""

        source = np.asarray(other)
        if source.shape != self.shape:
            raise ShapeMismatch(f"copy_from: {self.shape} does not match {source.shape}")
        self._values[...] = source

    # -- randomisation ----------------------------------------------------------

    def norm_rand_real(
        self, mean: float = 0.0, stddev: float = 1.0, rng: np.random.Generator | None = None
    ) -> None:
        """Overwrite every element with an independent normal draw."""

        gen = rng if rng is not None else self.rng
        self._values[...] = gen.normal(mean, stddev, size=self.shape)

    def uni_rand_real(
        self, min: float = 0.0, max: float = 1.0, rng: np.random.Generator | None = None
    ) -> None:
        """Overwrite every element with an independent uniform draw from ``[min, max)``."""

        gen = rng if rng is not None else self.rng
        self._values[...] = gen.uniform(min, max, size=self.shape)

    # -- elementwise maps -------------------------------------------------------

    def elementwise_function(self, func: Callable[[Any], Any]) -> None:
        if self.size == 0:
            return
        self._values[...] = _apply(func, self._values, dtype=self.dtype)

    def elementwise_function_scalar(self, func: Callable[[Any, Any], Any], scalar: Any) -> None:
        if self.size == 0:
            return
        operand = np.asarray(scalar, dtype=self.dtype)
        self._values[...] = _apply(func, self._values, operand, dtype=self.dtype)

    def elementwise_function_matrix(self, func: Callable[[Any, Any], Any], other: Any) -> None:
        other_values = np.asarray(other)
        if other_values.shape != self.shape:
            raise ShapeMismatch(
                f"elementwise_function_matrix: {self.shape} does not match {other_values.shape}"
            )
        if self.size == 0:
            return
        self._values[...] = _apply(func, self._values, other_values, dtype=self.dtype)

    def matrix_column_vector_function(self, func: Callable[[Any, Any], Any], v: Any) -> None:
        """Apply ``func(e_ij, v_i)``: the vector is broadcast along every column."""

        vector = _as_vector(v)
        if vector.size != self.rows:
            raise ShapeMismatch(
                f"matrix_column_vector_function: vector of length {vector.size} "
                f"for matrix with {self.rows} rows"
            )
        if self.size == 0:
            return
        self._values[...] = _apply(func, self._values, vector[:, None], dtype=self.dtype)

    def matrix_row_vector_function(self, func: Callable[[Any, Any], Any], v: Any) -> None:
        """Apply ``func(e_ij, v_j)``: the vector is broadcast along every row."""

        vector = _as_vector(v)
        if vector.size != self.cols:
            raise ShapeMismatch(
                f"matrix_row_vector_function: vector of length {vector.size} "
                f"for matrix with {self.cols} columns"
            )
        if self.size == 0:
            return
        self._values[...] = _apply(func, self._values, vector[None, :], dtype=self.dtype)

    def repeat_vector(self, v: Any) -> None:
        """Set every column equal to ``v``."""

        vector = _as_vector(v)
        if vector.size != self.rows:
            raise ShapeMismatch(
                f"repeat_vector: vector of length {vector.size} for matrix with {self.rows} rows"
            )
        self._values[...] = vector[:, None]

    # -- container protocol -----------------------------------------------------

    def __getitem__(self, key: Any) -> Any:
        return self._values[key]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._values[key] = value

    def __array__(self, dtype: Any = None, copy: Any = None) -> Array:
        if copy:
            return self._values.astype(self.dtype if dtype is None else dtype, copy=True)
        if dtype is None:
            return self._values
        return self._values.astype(dtype, copy=False)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Matrix):
            return self.shape == other.shape and bool(np.array_equal(self._values, other._values))
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Matrix(rows={self.rows}, cols={self.cols}, dtype={self.dtype})"


__all__ = ["Matrix"]
