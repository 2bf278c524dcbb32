"""Exporters for writing the fingerprint manifest in various formats."""

from .json_exporter import to_json
from .yaml_exporter import to_yaml
from .writer import FORMATS, render_manifest, write_manifest

__all__ = ["to_json", "to_yaml", "FORMATS", "render_manifest", "write_manifest"]
