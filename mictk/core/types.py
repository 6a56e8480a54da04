"""Core typing contracts for mictk."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterator, Sequence, Tuple, TypeVar

import numpy as np

Array = np.ndarray

DataT = TypeVar("DataT")
LabelT = TypeVar("LabelT")


@dataclass(frozen=True)
class Sample(Generic[DataT, LabelT]):
    """A single example: shared data, its label and its position in the dataset."""

    data: DataT
    label: LabelT
    index: int


@dataclass(frozen=True)
class Batch(Generic[DataT, LabelT]):
    """An ordered group of samples assembled in one retrieval call."""

    samples: Tuple[Sample[DataT, LabelT], ...] = ()

    @classmethod
    def from_parts(
        cls,
        data: Sequence[DataT],
        labels: Sequence[LabelT],
        indices: Sequence[int],
    ) -> "Batch[DataT, LabelT]":
        if not len(data) == len(labels) == len(indices):
            raise ValueError("data, labels and indices must have the same length")
        return cls(
            tuple(Sample(d, l, int(i)) for d, l, i in zip(data, labels, indices))
        )

    @property
    def data(self) -> list:
        return [sample.data for sample in self.samples]

    @property
    def labels(self) -> list:
        return [sample.label for sample in self.samples]

    @property
    def indices(self) -> list[int]:
        return [sample.index for sample in self.samples]

    def to_columns(self, dtype: Any = np.float32):
        """Stack every sample's data, flattened column-major, into one matrix.

        The result has shape ``features x len(batch)`` which is the layout of a
        layer's ``s['x']`` slot.
        """

        from .matrix import Matrix

        if not self.samples:
            return Matrix(0, 0, dtype=dtype)
        columns = [np.asarray(d, dtype=dtype).reshape(-1, order="F") for d in self.data]
        sizes = {col.size for col in columns}
        if len(sizes) != 1:
            raise ValueError(f"Samples in a batch must share a size, got {sorted(sizes)}")
        return Matrix.from_array(np.stack(columns, axis=1))

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[Sample[DataT, LabelT]]:
        return iter(self.samples)

    def __getitem__(self, item: int) -> Sample[DataT, LabelT]:
        return self.samples[item]


__all__ = ["Array", "Batch", "Sample"]
