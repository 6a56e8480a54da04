"""Reporting helpers: batch plots and run manifests."""

from .artifacts import write_manifest
from .plots import save_batch_grid

__all__ = ["save_batch_grid", "write_manifest"]
