"""File discovery for the source tree."""

from pathlib import Path
from typing import Iterator


def is_hidden(name: str) -> bool:
    """Check if a file or directory name is hidden (dot-prefixed)."""
    return name.startswith(".")


def iter_files(root: Path) -> Iterator[str]:
    """
    Iterate over the regular files below ``root``.

    Hidden files (dot-prefixed names) are skipped. Dot-prefixed
    directories are still walked, so ``.well-known/security.txt`` is listed.
    Entries are visited in sorted order so runs are reproducible.

    Args:
        root: Source directory to walk.

    Yields:
        Root-relative paths with forward slashes, e.g. ``css/main.css``.

    Raises:
        OSError: If a directory cannot be listed.
    """
    root = root.resolve()

    def _walk(current: Path, prefix: str) -> Iterator[str]:
        for entry in sorted(current.iterdir()):
            if entry.is_dir():
                yield from _walk(entry, f"{prefix}{entry.name}/")
            elif entry.is_file() and not is_hidden(entry.name):
                yield f"{prefix}{entry.name}"

    yield from _walk(root, "")
