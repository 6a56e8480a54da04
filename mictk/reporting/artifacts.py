"""Run manifest describing an imported dataset."""

from __future__ import annotations

import hashlib
import json
import time
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Mapping

from ..config import to_mapping


def _fingerprint(path: Path) -> Dict[str, Any]:
    digest = hashlib.sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1 << 16), b""):
            digest.update(chunk)
    return {"path": str(path), "bytes": path.stat().st_size, "sha256": digest.hexdigest()}


def source_files(config: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Fingerprint every existing file named by a ``*_filename`` property."""

    sources = {}
    for key, value in sorted(config.items()):
        if not key.endswith("_filename") or not value:
            continue
        path = Path(value)
        if path.is_file():
            sources[key] = _fingerprint(path)
    return sources


def write_manifest(path: str | Path, importer, **extra: Any) -> str:
    """Write a JSON manifest of ``importer``: its properties, sources and labels.

    ``extra`` entries (e.g. the retrieval mode) are stored under ``run``.
    """

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    config = to_mapping(importer.config)
    labels = Counter(str(label) for label in importer.sample_labels)
    manifest = {
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "importer": dict(importer.describe()),
        "config": config,
        "sources": source_files(config),
        "label_counts": dict(sorted(labels.items())),
        "run": extra,
    }
    path.write_text(json.dumps(manifest, indent=2, sort_keys=True, default=str))
    return str(path)


__all__ = ["source_files", "write_manifest"]
