"""JSON exporter for the fingerprint manifest."""

import json
from typing import Mapping


def to_json(mapping: Mapping[str, str], indent: int = 2) -> str:
    """
    Convert a source -> hashed path mapping to JSON.

    Args:
        mapping: Source-relative path to hashed path.
        indent: JSON indentation level.

    Returns:
        JSON object with keys in sorted order, ending in a newline.
    """
    return json.dumps(dict(mapping), indent=indent, sort_keys=True) + "\n"
