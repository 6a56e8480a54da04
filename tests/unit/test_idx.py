import gzip

import numpy as np
import pytest

from mictk.data.idx import MNIST_IMAGES_MAGIC, MNIST_LABELS_MAGIC, read_header, read_idx, write_idx
from mictk.errors import ImportFailure


def test_mnist_magic_numbers(tmp_path):
    images = write_idx(tmp_path / "images", np.zeros((2, 3, 3), dtype=np.uint8))
    labels = write_idx(tmp_path / "labels", np.zeros(2, dtype=np.uint8))
    assert read_header(images.read_bytes())[0] == MNIST_IMAGES_MAGIC
    assert read_header(labels.read_bytes())[0] == MNIST_LABELS_MAGIC


def test_big_endian_payload(tmp_path):
    values = np.array([[1, 256], [-2, 70000]], dtype=np.int32)
    path = write_idx(tmp_path / "ints.idx", values)
    raw = path.read_bytes()
    assert raw[:4] == bytes([0, 0, 0x0C, 2])
    assert raw[12:16] == (1).to_bytes(4, "big")
    np.testing.assert_array_equal(read_idx(path), values)


def test_gzip_files(tmp_path):
    values = np.arange(12, dtype=np.uint8).reshape(3, 4)
    path = write_idx(tmp_path / "data.idx.gz", values)
    with gzip.open(path, "rb") as handle:
        assert handle.read(3) == bytes([0, 0, 0x08])
    np.testing.assert_array_equal(read_idx(path), values)


def test_wrong_magic_rejected(tmp_path):
    path = write_idx(tmp_path / "labels", np.zeros(4, dtype=np.uint8))
    with pytest.raises(ImportFailure):
        read_idx(path, expected_magic=MNIST_IMAGES_MAGIC)


def test_corrupt_files_rejected(tmp_path):
    bad = tmp_path / "bad"
    bad.write_bytes(b"\x01\x02\x08\x01\x00\x00\x00\x02")
    with pytest.raises(ImportFailure):
        read_idx(bad)
    truncated = tmp_path / "truncated"
    truncated.write_bytes(bytes([0, 0, 0x08, 1]) + (10).to_bytes(4, "big") + b"\x00" * 3)
    with pytest.raises(ImportFailure):
        read_idx(truncated)


def test_unsupported_dtype():
    with pytest.raises(TypeError):
        write_idx("unused", np.zeros(2, dtype=np.int64))


def test_truncated_gzip_stream_rejected(tmp_path):
    path = write_idx(tmp_path / "images.gz", np.arange(600, dtype=np.uint8).reshape(6, 10, 10))
    raw = path.read_bytes()
    path.write_bytes(raw[: len(raw) // 2])
    with pytest.raises(ImportFailure):
        read_idx(path)
