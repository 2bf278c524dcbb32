"""Scanner module for file discovery and reference extraction."""

from .discovery import iter_files
from .css import scan_css, read_url
from .resolver import is_valid_reference, resolve_reference
from .builder import build_registry

__all__ = [
    "iter_files",
    "scan_css",
    "read_url",
    "is_valid_reference",
    "resolve_reference",
    "build_registry",
]
