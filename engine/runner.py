"""End-to-end fingerprinting of a source tree."""

from pathlib import Path
from typing import Dict, Iterable, Optional

from graph.scheduler import schedule
from log import get_logger
from scanner.builder import build_registry
from .rewriter import Rewriter

logger = get_logger("engine")


def fingerprint_tree(
    source: Path,
    destination: Path,
    scan_extensions: Optional[Iterable[str]] = None,
) -> Dict[str, str]:
    """
    Copy every file of ``source`` into ``destination`` under a hashed name.

    Args:
        source: Source directory.
        destination: Destination directory, created if missing.
        scan_extensions: Extensions whose references are rewritten.

    Returns:
        Mapping of source-relative path to hashed path, sorted by key.
    """
    source = source.resolve()
    destination = destination.resolve()

    registry = build_registry(source, scan_extensions)
    logger.debug("Discovered %r", registry)

    destination.mkdir(parents=True, exist_ok=True)
    passes = schedule(registry, Rewriter(source, destination, registry))

    logger.info("Fingerprinted %d file(s) in %d pass(es)", len(registry), passes)
    return registry.mapping()
