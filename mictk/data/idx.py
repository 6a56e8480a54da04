"""Reader and writer for the IDX binary format used by MNIST."""

from __future__ import annotations

import gzip
import struct
import zlib
from pathlib import Path
from typing import IO

import numpy as np

from ..errors import ImportFailure

# IDX type code -> big-endian dtype.
_DTYPES = {
    0x08: np.dtype(">u1"),
    0x09: np.dtype(">i1"),
    0x0B: np.dtype(">i2"),
    0x0C: np.dtype(">i4"),
    0x0D: np.dtype(">f4"),
    0x0E: np.dtype(">f8"),
}
# Keyed by kind and item size, e.g. "u1" or "f4", independent of byte order.
_CODES = {dtype.str[1:]: code for code, dtype in _DTYPES.items()}

MNIST_IMAGES_MAGIC = 0x00000803
MNIST_LABELS_MAGIC = 0x00000801


def _open(path: Path, mode: str) -> IO[bytes]:
    if path.suffix == ".gz":
        return gzip.open(path, mode)  # type: ignore[return-value]
    return path.open(mode)


def read_header(raw: bytes) -> tuple[int, np.dtype, tuple[int, ...]]:
    """Return ``(magic, dtype, dims)`` decoded from the start of ``raw``."""

    if len(raw) < 4:
        raise ImportFailure("IDX payload too short for a header")
    zero, code, ndim = struct.unpack(">HBB", raw[:4])
    if zero != 0:
        raise ImportFailure(f"Invalid IDX magic number 0x{struct.unpack('>I', raw[:4])[0]:08x}")
    if code not in _DTYPES:
        raise ImportFailure(f"Unknown IDX type code 0x{code:02x}")
    end = 4 + 4 * ndim
    if len(raw) < end:
        raise ImportFailure("IDX header truncated")
    dims = struct.unpack(f">{ndim}I", raw[4:end])
    magic = struct.unpack(">I", raw[:4])[0]
    return magic, _DTYPES[code], tuple(int(d) for d in dims)


def read_idx(path: str | Path, *, expected_magic: int | None = None) -> np.ndarray:
    """Load an IDX file (optionally gzipped) into a native-endian array."""

    path = Path(path)
    try:
        with _open(path, "rb") as handle:
            raw = handle.read()
    except (EOFError, gzip.BadGzipFile, zlib.error) as exc:
        raise ImportFailure(f"{path.name}: corrupt compressed stream ({exc})") from exc
    magic, dtype, dims = read_header(raw)
    if expected_magic is not None and magic != expected_magic:
        raise ImportFailure(
            f"{path.name}: magic number 0x{magic:08x}, expected 0x{expected_magic:08x}"
        )
    offset = 4 + 4 * len(dims)
    count = int(np.prod(dims)) if dims else 1
    needed = offset + count * dtype.itemsize
    if len(raw) < needed:
        raise ImportFailure(f"{path.name}: payload truncated ({len(raw)} < {needed} bytes)")
    array = np.frombuffer(raw, dtype=dtype, count=count, offset=offset)
    return array.reshape(dims).astype(dtype.newbyteorder("="))


def write_idx(path: str | Path, array: np.ndarray) -> Path:
    """Write ``array`` as an IDX file (gzipped when ``path`` ends in ``.gz``)."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    values = np.asarray(array)
    key = values.dtype.str[1:]
    if key not in _CODES:
        raise TypeError(f"dtype {values.dtype} has no IDX type code")
    code = _CODES[key]
    header = struct.pack(">HBB", 0, code, values.ndim)
    header += struct.pack(f">{values.ndim}I", *values.shape)
    with _open(path, "wb") as handle:
        handle.write(header)
        handle.write(values.astype(_DTYPES[code]).tobytes())
    return path


__all__ = [
    "MNIST_IMAGES_MAGIC",
    "MNIST_LABELS_MAGIC",
    "read_header",
    "read_idx",
    "write_idx",
]
