"""Headless-safe rendering of sample batches."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable

import numpy as np

from ..core.types import Sample


def save_batch_grid(
    samples: Iterable[Sample],
    path: str | Path,
    *,
    columns: int = 8,
    title: str | None = None,
) -> Path | None:
    """Render each sample's data as a grayscale tile and save the figure.

    Returns ``None`` without touching matplotlib when there is nothing to draw.
    """

    items = list(samples)
    if not items:
        return None
    import matplotlib

    matplotlib.use("Agg", force=True)
    import matplotlib.pyplot as plt  # imported lazily for headless safety

    columns = max(1, min(columns, len(items)))
    rows = math.ceil(len(items) / columns)
    fig, axes = plt.subplots(rows, columns, figsize=(1.2 * columns, 1.2 * rows), squeeze=False)
    for ax in axes.flat:
        ax.axis("off")
    for ax, sample in zip(axes.flat, items):
        ax.imshow(np.asarray(sample.data), cmap="gray", vmin=0.0, vmax=1.0)
        ax.set_title(f"{sample.label} (#{sample.index})", fontsize=6)
    if title:
        fig.suptitle(title)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path)
    plt.close(fig)
    return path
