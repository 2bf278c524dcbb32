"""Extraction of ``url(...)`` references from CSS documents."""

from typing import List, Tuple

from graph.model import Reference
from .resolver import is_valid_reference, resolve_reference

URL_OPEN = b"url("

# Characters skipped between ``url(`` and the path token.
LEADING_CHARS = frozenset(b" \t\r\n\f\"'")

# Characters that end the path token.
TERMINATOR_CHARS = frozenset(b" \t\r\n\f)\"'")

# Query strings and fragments are kept verbatim, outside the span.
SUFFIX_MARKERS = (b"?", b"#")


def read_url(content: bytes, start: int) -> Tuple[int, bytes]:
    """
    Read the path token of a ``url(`` construct starting at ``start``.

    Args:
        content: Whole document.
        start: Offset of the ``u`` in ``url(``.

    Returns:
        Tuple of (token offset, token bytes). The token stops at the first
        terminator or at end of input, whichever comes first.
    """
    if content[start:start + len(URL_OPEN)] != URL_OPEN:
        raise ValueError(f"No url( at offset {start}")
    size = len(content)
    pos = start + len(URL_OPEN)
    while pos < size and content[pos] in LEADING_CHARS:
        pos += 1
    token_start = pos
    while pos < size and content[pos] not in TERMINATOR_CHARS:
        pos += 1
    return token_start, content[token_start:pos]


def _path_portion(token: bytes) -> bytes:
    for marker in SUFFIX_MARKERS:
        index = token.find(marker)
        if index != -1:
            token = token[:index]
    return token


def scan_css(content: bytes, document_path: str) -> List[Reference]:
    """
    Find the relative file references in a CSS document.

    Args:
        content: Raw document bytes.
        document_path: Source-relative path of the document, used to resolve
            the references.

    Returns:
        References in ascending position order. Absolute paths, URLs and
        empty tokens are skipped.
    """
    references: List[Reference] = []
    size = len(content)
    pos = 0

    while pos + len(URL_OPEN) <= size:
        if content[pos:pos + len(URL_OPEN)] != URL_OPEN:
            pos += 1
            continue

        token_start, token = read_url(content, pos)
        pos = token_start + len(token)

        if not is_valid_reference(token.decode("utf-8", "surrogateescape")):
            continue

        path_bytes = _path_portion(token)
        target = resolve_reference(
            document_path, path_bytes.decode("utf-8", "surrogateescape")
        )
        if target is None:
            continue
        references.append(Reference(token_start, len(path_bytes), target))

    return references
