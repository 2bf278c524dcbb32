#!/usr/bin/env python3
"""
hashthing CLI

Recursively copies a directory of static assets, appending a content hash to
every file name, rewrites relative url() references in CSS documents to the
hashed names, and writes a manifest mapping original to hashed paths.
"""

import argparse
import sys
from pathlib import Path

from config import HashthingConfig, MANIFEST_FORMATS, load_config, normalize_extensions
from engine import fingerprint_tree
from errors import HashthingError
from exporters import write_manifest
from log import configure_logging


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="hashthing",
        description=(
            "Copy src to dst, adding a content hash to every file name and "
            "rewriting relative paths in CSS documents to include the hash."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hashthing static build                        # Writes manifest.json
  hashthing static build --manifest build/assets.json
  hashthing static build -f yaml --manifest assets.yaml
  hashthing static build --config hashthing.yml
        """,
    )

    # Positional arguments
    parser.add_argument("src", help="Source directory")
    parser.add_argument("dst", help="Destination directory (created if missing)")

    # Output options
    parser.add_argument(
        "-m", "--manifest",
        type=str,
        default=None,
        help="Manifest output file (default: manifest.json)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=MANIFEST_FORMATS,
        default=None,
        help="Manifest format (default: json)",
    )

    # Scanning options
    parser.add_argument(
        "--scan-ext",
        nargs="+",
        default=None,
        help="File extensions whose url() references are rewritten (default: .css)",
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="YAML or TOML configuration file",
    )

    # Logging options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every processed file",
    )

    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write log output to this file",
    )

    return parser.parse_args(args)


def resolve_config(parsed) -> HashthingConfig:
    """Merge the config file (if any) with command line overrides."""
    config = load_config(Path(parsed.config)) if parsed.config else HashthingConfig()

    if parsed.manifest:
        config.manifest = Path(parsed.manifest)
    if parsed.format:
        config.manifest_format = parsed.format
    if parsed.scan_ext:
        config.scan_extensions = normalize_extensions(parsed.scan_ext)
    if parsed.verbose:
        config.verbose = True
    if parsed.log_file:
        config.log_file = Path(parsed.log_file)

    return config


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    logger = configure_logging(verbose=parsed.verbose)
    try:
        config = resolve_config(parsed)
        logger = configure_logging(verbose=config.verbose, log_file=config.log_file)
    except (HashthingError, OSError) as e:
        logger.error("%s", e)
        return 1

    src = Path(parsed.src)
    if not src.is_dir():
        logger.error("'%s' is not a directory", parsed.src)
        return 1

    try:
        mapping = fingerprint_tree(src, Path(parsed.dst), config.scan_extensions)
        manifest = write_manifest(config.manifest, mapping, config.manifest_format)
    except (HashthingError, OSError) as e:
        logger.error("%s", e)
        return 1

    logger.info("Manifest written to: %s", manifest)
    return 0


if __name__ == "__main__":
    sys.exit(main())
