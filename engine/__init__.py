"""Rewrite-and-hash engine for fingerprinting files."""

from .naming import hashed_filename
from .rewriter import Rewriter, rewrite
from .runner import fingerprint_tree

__all__ = [
    "hashed_filename",
    "Rewriter",
    "rewrite",
    "fingerprint_tree",
]
