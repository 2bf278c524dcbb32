"""Registry builder that orchestrates discovery and reference scanning."""

import posixpath
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from graph.model import Reference, Registry
from log import get_logger
from .css import scan_css
from .discovery import iter_files

logger = get_logger("scanner")

DEFAULT_SCAN_EXTENSIONS = {".css"}

Scanner = Callable[[bytes, str], List[Reference]]

# Reference scanners by file extension.
SCANNERS: Dict[str, Scanner] = {
    ".css": scan_css,
}


def get_scanner(path: str, scan_extensions: Iterable[str]) -> Optional[Scanner]:
    """Return the reference scanner for a file, or None if it is copied as-is."""
    suffix = posixpath.splitext(path)[1].lower()
    if suffix not in {ext.lower() for ext in scan_extensions}:
        return None
    return SCANNERS.get(suffix)


def scan_file(root: Path, path: str, scan_extensions: Iterable[str]) -> List[Reference]:
    """
    Read a source file and extract its references.

    Raises:
        OSError: If the file cannot be read.
    """
    scanner = get_scanner(path, scan_extensions)
    if scanner is None:
        return []
    content = (root / path).read_bytes()
    return scanner(content, path)


def build_registry(
    root: Path,
    scan_extensions: Optional[Iterable[str]] = None,
) -> Registry:
    """
    Scan a source tree and build the file registry.

    Every non-hidden file becomes one registry entry. References to files
    that do not exist in the tree are logged and dropped.

    Args:
        root: Source directory.
        scan_extensions: Extensions whose files are scanned for references
            (default: .css).

    Returns:
        Registry ready for scheduling.
    """
    if scan_extensions is None:
        scan_extensions = DEFAULT_SCAN_EXTENSIONS
    scan_extensions = set(scan_extensions)

    registry = Registry()
    root = root.resolve()

    for path in iter_files(root):
        references = scan_file(root, path, scan_extensions)
        registry.add(path, references)

    for path, reference in registry.prune_dangling():
        logger.warning("%s references nonexistent path %s", path, reference.target_path)

    return registry
