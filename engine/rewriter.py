"""Streaming reference rewriting with content hashing."""

import contextlib
import hashlib
import os
import posixpath
import tempfile
from pathlib import Path
from typing import BinaryIO, Callable
from urllib.parse import quote

from errors import ReferenceSpanError
from graph.model import File, Registry
from log import get_logger
from .naming import hashed_filename

logger = get_logger("engine")

CHUNK_SIZE = 64 * 1024
STAGING_PREFIX = ".hashthing-"

# Left unescaped in rewritten references. Quotes, parentheses and whitespace
# would end an unquoted url() token, and "?"/"#" would start a query or fragment.
URL_SAFE_CHARS = "/!$&*+,;=:@~"

Resolver = Callable[[str], str]


class HashingWriter:
    """Writes to a stream and feeds the same bytes to a digest."""

    def __init__(self, stream: BinaryIO):
        self._stream = stream
        self._digest = hashlib.md5()

    def write(self, data: bytes) -> None:
        self._digest.update(data)
        self._stream.write(data)

    def hexdigest(self) -> str:
        return self._digest.hexdigest()


def _copy(reader: BinaryIO, writer, count: int) -> int:
    """Copy up to ``count`` bytes; return how many were copied."""
    remaining = count
    while remaining > 0:
        chunk = reader.read(min(CHUNK_SIZE, remaining))
        if not chunk:
            break
        writer.write(chunk)
        remaining -= len(chunk)
    return count - remaining


def _copy_rest(reader: BinaryIO, writer) -> None:
    while True:
        chunk = reader.read(CHUNK_SIZE)
        if not chunk:
            return
        writer.write(chunk)


def relative_reference(hashed_path: str, document_path: str) -> str:
    """Express a hashed path relative to the directory of the referencing document."""
    directory = posixpath.dirname(document_path) or "."
    return posixpath.relpath(hashed_path, directory)


def encode_reference(path: str) -> bytes:
    """Percent-encode a path for use inside url(), e.g. ``a#b.png`` -> ``a%23b.png``."""
    raw = path.encode("utf-8", "surrogateescape")
    return quote(raw, safe=URL_SAFE_CHARS).encode("ascii")


def rewrite(reader: BinaryIO, writer, file: File, resolve: Resolver) -> None:
    """
    Copy a document from ``reader`` to ``writer``, rewriting its references.

    Each reference span is replaced with the percent-encoded hashed path of its target,
    relative to the document's directory. Everything else is copied
    unchanged.

    Args:
        reader: Binary stream positioned at the start of the document.
        writer: Object with a ``write(bytes)`` method.
        file: The document's registry entry.
        resolve: Returns the hashed path of a target file.

    Raises:
        ReferenceSpanError: If a span overlaps the previous one or runs past
            the end of the document.
    """
    last_position = 0
    for ref in file.references:
        gap = ref.position - last_position
        if gap < 0 or _copy(reader, writer, gap) != gap:
            raise ReferenceSpanError(file.path, ref)
        if len(reader.read(ref.length)) != ref.length:
            raise ReferenceSpanError(file.path, ref)

        writer.write(encode_reference(relative_reference(resolve(ref.target_path), file.path)))
        last_position = ref.end

    _copy_rest(reader, writer)


class Rewriter:
    """
    Writes fingerprinted copies of registry files into a destination tree.

    Content is staged in a hidden temporary file in the destination root
    and moved into place once complete, so a hashed name never points at a
    partially written file.
    """

    def __init__(self, source: Path, destination: Path, registry: Registry):
        self.source = source
        self.destination = destination
        self.registry = registry

    def __call__(self, file: File) -> str:
        return self.process(file)

    def process(self, file: File) -> str:
        """
        Rewrite one file whose targets are all hashed already.

        Returns:
            The hashed destination-relative path.
        """
        fd, staging = tempfile.mkstemp(prefix=STAGING_PREFIX, dir=self.destination)
        try:
            with os.fdopen(fd, "wb") as out, open(self.source / file.path, "rb") as reader:
                writer = HashingWriter(out)
                rewrite(reader, writer, file, self.registry.hashed_path_of)
            os.chmod(staging, 0o644)

            hashed_path = hashed_filename(file.path, writer.hexdigest())
            target = self.destination / hashed_path
            target.parent.mkdir(parents=True, exist_ok=True)
            os.replace(staging, target)
        except Exception:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(staging)
            raise

        logger.debug("%s -> %s", file.path, hashed_path)
        return hashed_path
