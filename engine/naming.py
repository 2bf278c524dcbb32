"""Hashed file name derivation."""

import posixpath

HASH_LENGTH = 8


def hashed_filename(path: str, digest: str, length: int = HASH_LENGTH) -> str:
    """
    Insert a hash prefix before the extension of a file name.

    Only the base name changes, so ``css/main.css`` becomes
    ``css/main.8593fe6a.css`` and ``LICENSE`` becomes ``LICENSE.8593fe6a``.

    Args:
        path: Source-relative path with forward slashes.
        digest: Hex digest of the file's final content.
        length: Number of hex characters to keep.
    """
    directory, name = posixpath.split(path)
    stem, dot, extension = name.rpartition(".")
    fingerprint = digest[:length]
    if not dot or not stem:
        new_name = f"{name}.{fingerprint}"
    else:
        new_name = f"{stem}.{fingerprint}.{extension}"
    return posixpath.join(directory, new_name) if directory else new_name
