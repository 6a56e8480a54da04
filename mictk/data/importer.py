"""Importer contract: random and sequential sample/batch retrieval."""

from __future__ import annotations

import abc
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, List, Mapping, Sequence

import numpy as np

from ..config import apply_properties, load_properties
from ..core.types import Batch, DataT, LabelT, Sample
from ..errors import EmptyDataset, ImportFailure, IndexOutOfRange

logger = logging.getLogger(__name__)


@dataclass
class ImporterConfig:
    """Properties shared by every importer.

    Attributes
    ----------
    next_sample_index:
        Cursor used by sequential retrieval only.
    batch_size:
        Number of samples returned by the batch getters.
    seed:
        Seed of the importer's generator; ``None`` draws fresh OS entropy.
    """

    next_sample_index: int = 0
    batch_size: int = 1
    seed: int | None = None


@dataclass(frozen=True)
class ImportResult:
    """Outcome of :meth:`Importer.import_data`; truthy on success."""

    ok: bool
    samples: int = 0
    error: str | None = None

    def __bool__(self) -> bool:
        return self.ok


class SampleStore(Generic[DataT, LabelT]):
    """Index-aligned data and labels with bounds-checked direct access."""

    def __init__(self) -> None:
        self.sample_data: List[DataT] = []
        self.sample_labels: List[LabelT] = []

    def __len__(self) -> int:
        return len(self.sample_data)

    def add(self, data: DataT, label: LabelT) -> int:
        self.sample_data.append(data)
        self.sample_labels.append(label)
        return len(self.sample_data) - 1

    def extend(self, data: Sequence[DataT], labels: Sequence[LabelT]) -> None:
        if len(data) != len(labels):
            raise ImportFailure(f"{len(data)} data items but {len(labels)} labels")
        self.sample_data.extend(data)
        self.sample_labels.extend(labels)

    def clear(self) -> None:
        self.sample_data.clear()
        self.sample_labels.clear()

    def is_aligned(self) -> bool:
        return len(self.sample_data) == len(self.sample_labels)

    def _check(self, index: int) -> int:
        n = len(self.sample_data)
        if not 0 <= index < n:
            raise IndexOutOfRange(f"Sample index {index} outside [0, {n})")
        return int(index)

    def get_sample_direct(self, index: int) -> Sample[DataT, LabelT]:
        index = self._check(index)
        return Sample(self.sample_data[index], self.sample_labels[index], index)

    def get_batch_direct(self, indices: Sequence[int]) -> Batch[DataT, LabelT]:
        checked = [self._check(i) for i in indices]
        return Batch(
            tuple(Sample(self.sample_data[i], self.sample_labels[i], i) for i in checked)
        )


class Importer(abc.ABC, Generic[DataT, LabelT]):
    """Owns a dataset and serves samples or batches from it.

    Subclasses implement :meth:`_load`, filling :attr:`store` and raising
    :class:`~mictk.errors.ImportFailure` when the source cannot be read.
    """

    config_class: type = ImporterConfig
    default_node_name: str = "importer"

    def __init__(
        self,
        node_name: str | None = None,
        *,
        config: Any | None = None,
        config_path: str | Path | None = None,
        **overrides: Any,
    ) -> None:
        self.node_name = node_name or self.default_node_name
        self.config = config if config is not None else self.config_class()
        if config_path is not None:
            apply_properties(self.config, load_properties(config_path, self.node_name))
        if overrides:
            apply_properties(self.config, overrides)
        self.store: SampleStore[DataT, LabelT] = SampleStore()
        self.rng = np.random.default_rng(self.config.seed)

    # -- import -----------------------------------------------------------------

    @abc.abstractmethod
    def _load(self) -> None:
        """Populate :attr:`store` from the importer's source."""

    def import_data(self) -> ImportResult:
        """Load the dataset, reporting failures as a falsy result."""

        self.store.clear()
        logger.info("%s: importing data", self.node_name)
        try:
            self._load()
            if not self.store.is_aligned():
                raise ImportFailure(
                    f"{len(self.store.sample_data)} data items but "
                    f"{len(self.store.sample_labels)} labels"
                )
        except (ImportFailure, OSError) as exc:
            self.store.clear()
            logger.error("%s: import failed: %s", self.node_name, exc)
            return ImportResult(ok=False, error=str(exc))
        logger.info("%s: imported %d samples", self.node_name, len(self.store))
        return ImportResult(ok=True, samples=len(self.store))

    # -- accessors --------------------------------------------------------------

    @property
    def sample_data(self) -> List[DataT]:
        return self.store.sample_data

    @property
    def sample_labels(self) -> List[LabelT]:
        return self.store.sample_labels

    @property
    def size(self) -> int:
        return len(self.store)

    def __len__(self) -> int:
        return len(self.store)

    @property
    def next_sample_index(self) -> int:
        return self.config.next_sample_index

    @property
    def batch_size(self) -> int:
        return self.config.batch_size

    def set_next_sample_index(self, index: int = 0) -> None:
        self.config.next_sample_index = int(index)

    def set_batch_size(self, batch_size: int = 1) -> None:
        self.config.batch_size = int(batch_size)

    def _require_data(self) -> int:
        n = len(self.store)
        if n == 0:
            raise EmptyDataset(f"{self.node_name}: no samples imported")
        return n

    # -- retrieval --------------------------------------------------------------

    def get_random_sample(self) -> Sample[DataT, LabelT]:
        """Return a uniformly drawn sample; the same one may come up repeatedly."""

        n = self._require_data()
        index = int(self.rng.integers(0, n))
        logger.debug(
            "data size = %d labels size = %d index = %d",
            len(self.store.sample_data),
            len(self.store.sample_labels),
            index,
        )
        return self.store.get_sample_direct(index)

    def get_next_sample(self) -> Sample[DataT, LabelT]:
        """Return samples one by one, restarting from zero after the last one."""

        n = self._require_data()
        if not 0 <= self.config.next_sample_index < n:
            self.config.next_sample_index = 0
        sample = self.store.get_sample_direct(self.config.next_sample_index)
        self.config.next_sample_index += 1
        return sample

    def get_random_batch(self) -> Batch[DataT, LabelT]:
        """Return ``batch_size`` samples drawn with replacement."""

        n = self._require_data()
        indices = self.rng.integers(0, n, size=self.config.batch_size)
        return self.store.get_batch_direct([int(i) for i in indices])

    def get_next_batch(self) -> Batch[DataT, LabelT]:
        """Return consecutive batches, restarting from zero when the next would not fit.

        Batches never wrap around the end of the dataset and are never short.
        """

        n = self._require_data()
        batch_size = self.config.batch_size
        cursor = self.config.next_sample_index
        if cursor < 0 or cursor + batch_size >= n:
            self.config.next_sample_index = 0
        start = self.config.next_sample_index
        batch = self.store.get_batch_direct(range(start, start + batch_size))
        self.config.next_sample_index = start + batch_size
        return batch

    def is_last_sample(self) -> bool:
        return self.config.next_sample_index >= len(self.store)

    def is_last_batch(self) -> bool:
        return self.config.next_sample_index + self.config.batch_size >= len(self.store)

    def describe(self) -> Mapping[str, Any]:
        return {
            "node_name": self.node_name,
            "type": type(self).__name__,
            "samples": len(self.store),
            "batch_size": self.config.batch_size,
            "next_sample_index": self.config.next_sample_index,
        }


__all__ = ["ImportResult", "Importer", "ImporterConfig", "SampleStore"]
