"""Manifest rendering and output."""

from pathlib import Path
from typing import Callable, Dict, Mapping

from .json_exporter import to_json
from .yaml_exporter import to_yaml

FORMATS: Dict[str, Callable[[Mapping[str, str]], str]] = {
    "json": to_json,
    "yaml": to_yaml,
}


def render_manifest(mapping: Mapping[str, str], fmt: str = "json") -> str:
    """Render the manifest in the given format ("json" or "yaml")."""
    try:
        exporter = FORMATS[fmt]
    except KeyError:
        raise ValueError(f"Unknown manifest format: {fmt}") from None
    return exporter(mapping)


def write_manifest(path: Path, mapping: Mapping[str, str], fmt: str = "json") -> Path:
    """
    Write the manifest to ``path``, creating parent directories.

    Returns:
        The path that was written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_manifest(mapping, fmt), encoding="utf-8")
    return path
