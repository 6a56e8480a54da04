"""Property files: node-keyed JSON/YAML mappings applied onto config dataclasses."""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, Mapping, MutableMapping

logger = logging.getLogger(__name__)


def read_config_file(path: str | Path) -> Mapping[str, Any]:
    """Read a JSON or YAML file that must decode to a mapping."""

    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        try:
            import yaml  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("PyYAML is required to load YAML configs") from exc
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def load_properties(path: str | Path, node_name: str) -> Mapping[str, Any]:
    """Return the properties registered under ``node_name`` (empty when absent)."""

    data = read_config_file(path)
    node = data.get(node_name, {})
    if node is None:
        return {}
    if not isinstance(node, Mapping):
        raise TypeError(f"Node {node_name!r} in {Path(path).name} must be a mapping")
    logger.debug("Loaded %d properties for node %s from %s", len(node), node_name, path)
    return dict(node)


def _coerce(value: Any, annotation: Any) -> Any:
    if value is None:
        return None
    kind = str(annotation)
    if kind.startswith("int") and not isinstance(value, bool):
        return int(value)
    if kind.startswith("float"):
        return float(value)
    if kind.startswith("str"):
        return str(value)
    if kind.startswith("bool"):
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return bool(value)
    return value


def apply_properties(config: Any, properties: Mapping[str, Any]) -> Any:
    """Set ``properties`` on the dataclass ``config`` in place.

    Values are coerced to the declared field type; unknown keys raise
    :class:`KeyError` so typos in property files surface immediately.
    """

    fields = {f.name: f for f in dataclasses.fields(config)}
    for key, value in properties.items():
        if key not in fields:
            known = ", ".join(sorted(fields))
            raise KeyError(f"Unknown property {key!r} for {type(config).__name__}; known: {known}")
        setattr(config, key, _coerce(value, fields[key].type))
    return config


def to_mapping(config: Any) -> MutableMapping[str, Any]:
    return dataclasses.asdict(config)


__all__ = ["apply_properties", "load_properties", "read_config_file", "to_mapping"]
