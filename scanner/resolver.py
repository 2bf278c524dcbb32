"""Resolution of raw reference tokens to registry paths."""

import posixpath
from typing import Optional
from urllib.parse import unquote


def is_valid_reference(token: str) -> bool:
    """
    Check if a raw token is a relative file reference.

    Absolute paths and anything carrying a URL scheme are left alone.
    """
    if not token:
        return False
    if token.startswith("/"):
        return False
    if "://" in token:
        return False
    return True


def resolve_reference(document_path: str, token: str) -> Optional[str]:
    """
    Resolve a raw path token against the referencing document.

    Args:
        document_path: Source-relative path of the document, e.g. ``css/main.css``.
        token: Path portion of the reference, e.g. ``../img/logo%20big.png``.

    Returns:
        The normalized source-relative path (``img/logo big.png``), or None if
        the token is empty.
    """
    if not token:
        return None
    directory = posixpath.dirname(document_path)
    joined = posixpath.join(directory, unquote(token))
    return posixpath.normpath(joined)
