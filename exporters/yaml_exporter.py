"""YAML exporter for the fingerprint manifest."""

from typing import Mapping

import yaml


def to_yaml(mapping: Mapping[str, str]) -> str:
    """Convert a source -> hashed path mapping to a YAML mapping with sorted keys."""
    return yaml.safe_dump(
        dict(mapping),
        sort_keys=True,
        default_flow_style=False,
        allow_unicode=True,
    )
