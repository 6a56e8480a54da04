"""MNIST importer cutting every digit image into square patches."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from ...core.matrix import Matrix
from ...errors import ImportFailure
from ..idx import MNIST_IMAGES_MAGIC, MNIST_LABELS_MAGIC, read_idx, write_idx
from ..importer import Importer, ImporterConfig
from ..registry import register_importer

logger = logging.getLogger(__name__)

FIXTURE_IMAGES = "fixture-images-idx3-ubyte"
FIXTURE_LABELS = "fixture-labels-idx1-ubyte"


@dataclass
class MNISTPatchConfig(ImporterConfig):
    """Properties of :class:`MNISTPatchImporter`.

    ``samples_limit`` caps the number of images read; values ``<= 0`` mean no
    limit. ``patch_stride`` of ``0`` means non-overlapping tiles (stride equal
    to ``patch_size``).
    """

    data_filename: str = "data/mnist/train-images-idx3-ubyte"
    labels_filename: str = "data/mnist/train-labels-idx1-ubyte"
    patch_size: int = 7
    patch_stride: int = 0
    samples_limit: int = -1


@register_importer("mnist_patch")
class MNISTPatchImporter(Importer[Matrix, int]):
    """Import MNIST images with labels as ``patch_size x patch_size`` patches.

    Pixels are scaled to ``[0, 1]``. Every patch becomes one sample labelled
    with the digit of the image it was cut from.
    """

    config_class = MNISTPatchConfig
    default_node_name = "mnist_patch_importer"

    def __init__(self, node_name: str | None = None, **kwargs: Any) -> None:
        super().__init__(node_name, **kwargs)
        self.image_height = 28
        self.image_width = 28

    def set_data_filename(self, data_filename: str | Path) -> None:
        self.config.data_filename = str(data_filename)

    def set_labels_filename(self, labels_filename: str | Path) -> None:
        self.config.labels_filename = str(labels_filename)

    @property
    def patch_size(self) -> int:
        return self.config.patch_size

    @property
    def patch_stride(self) -> int:
        return self.config.patch_stride or self.config.patch_size

    def patches_per_image(self) -> int:
        stride = self.patch_stride
        rows = (self.image_height - self.patch_size) // stride + 1
        cols = (self.image_width - self.patch_size) // stride + 1
        return rows * cols

    def _load(self) -> None:
        cfg = self.config
        images = read_idx(cfg.data_filename, expected_magic=MNIST_IMAGES_MAGIC)
        labels = read_idx(cfg.labels_filename, expected_magic=MNIST_LABELS_MAGIC)
        if images.ndim != 3:
            raise ImportFailure(f"Expected a 3D image array, got shape {images.shape}")
        if images.shape[0] != labels.shape[0]:
            raise ImportFailure(
                f"{images.shape[0]} images but {labels.shape[0]} labels in "
                f"{cfg.data_filename} / {cfg.labels_filename}"
            )
        _, self.image_height, self.image_width = (int(d) for d in images.shape)
        if cfg.patch_size <= 0 or self.patch_stride <= 0:
            raise ImportFailure("patch_size and patch_stride must be positive")
        if cfg.patch_size > min(self.image_height, self.image_width):
            raise ImportFailure(
                f"patch_size {cfg.patch_size} exceeds image size "
                f"{self.image_height}x{self.image_width}"
            )

        count = images.shape[0]
        if cfg.samples_limit > 0:
            count = min(count, cfg.samples_limit)
        logger.info(
            "Cutting %d images of %dx%d into %dx%d patches (stride %d)",
            count,
            self.image_height,
            self.image_width,
            cfg.patch_size,
            cfg.patch_size,
            self.patch_stride,
        )

        size, stride = cfg.patch_size, self.patch_stride
        for image, label in zip(images[:count], labels[:count]):
            pixels = image.astype(np.float32) / 255.0
            for top in range(0, self.image_height - size + 1, stride):
                for left in range(0, self.image_width - size + 1, stride):
                    patch = Matrix.from_array(pixels[top : top + size, left : left + size].copy())
                    self.store.add(patch, int(label))


def build_fixture(directory: str | Path, *, images: int = 16, height: int = 28, width: int = 28):
    """Write a deterministic MNIST-like IDX pair into ``directory``.

    Pixels and labels are derived from integer sequences only, so the files are
    identical across platforms and NumPy releases.
    """

    directory = Path(directory)
    pixels = np.arange(images * height * width, dtype=np.uint32).reshape(images, height, width)
    pixels = (pixels * 7) % 256
    labels = np.arange(images, dtype=np.uint8) % 10
    image_path = write_idx(directory / FIXTURE_IMAGES, pixels.astype(np.uint8))
    label_path = write_idx(directory / FIXTURE_LABELS, labels)
    return image_path, label_path


__all__ = ["MNISTPatchConfig", "MNISTPatchImporter", "build_fixture"]
