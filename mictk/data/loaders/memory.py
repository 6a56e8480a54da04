"""Importer serving samples held in memory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from ...core.matrix import Matrix
from ...errors import ImportFailure
from ..importer import Importer, ImporterConfig
from ..registry import register_importer


@dataclass
class ArrayImporterConfig(ImporterConfig):
    as_matrix: bool = True


class ArrayImporter(Importer[Any, Any]):
    """Import samples from an in-memory sequence of arrays and labels.

    With ``as_matrix`` every data item is wrapped in a :class:`Matrix`
    (1D items become column vectors); otherwise items are stored as given.
    """

    config_class = ArrayImporterConfig
    default_node_name = "array_importer"

    def __init__(
        self,
        data: Sequence[Any] = (),
        labels: Sequence[Any] = (),
        node_name: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(node_name, **kwargs)
        self._source_data = list(data)
        self._source_labels = list(labels)

    def _load(self) -> None:
        if self.config.as_matrix:
            try:
                items = [
                    Matrix.from_array(np.asarray(d, dtype=np.float32)) for d in self._source_data
                ]
            except (TypeError, ValueError) as exc:
                raise ImportFailure(f"Cannot convert sample data to a matrix: {exc}") from exc
        else:
            items = list(self._source_data)
        self.store.extend(items, list(self._source_labels))


register_importer("array", ArrayImporter)


__all__ = ["ArrayImporter", "ArrayImporterConfig"]
