"""
Sector layout CLI entry point.

Print where each piece of a sector manifest lands once padded into its slot.

Usage::

    python -m sector_spec manifest.yaml
    python -m sector_spec manifest.yaml --key y
    python -m sector_spec manifest.yaml --converter identity

Options:
    --key        Print only the start offset of the first piece with this key
    --converter  Override the manifest's converter (fr32 or identity)
    --verbose    Enable debug logging
    --no-color   Disable colored logging output
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from sector_spec.subspecs.fr32 import CONVERTERS_BY_NAME, ByteDomainConverter
from sector_spec.subspecs.pieces import compute_piece_layouts, get_piece_start, sum_piece_lengths
from sector_spec.subspecs.sector import SectorManifest

CLI_LOGGER = "sector_spec"
"""Logger that `setup_logging` configures; every module logs beneath it."""

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"
"""Diagnostics are short lines on stderr. Stdout carries only the layout."""

logger = logging.getLogger(f"{CLI_LOGGER}.cli")


def render_layout(manifest: SectorManifest, converter: ByteDomainConverter) -> list[str]:
    """
    Format the layout of every piece as aligned text rows.

    One row per piece in sector order, followed by the total sector length.
    """
    rows = [f"{'key':<16} {'start':>12} {'size':>12} {'left':>12} {'right':>12}"]
    for layout in compute_piece_layouts(manifest.pieces, converter):
        rows.append(
            f"{layout.piece_key:<16} {int(layout.start):>12} {int(layout.num_bytes):>12} "
            f"{int(layout.left_padding):>12} {int(layout.right_padding):>12}"
        )
    total = sum_piece_lengths(manifest.pieces, converter)
    rows.append(f"{'total':<16} {int(total):>12}")
    return rows


def run(manifest_path: Path, piece_key: str | None = None, converter_name: str | None = None) -> int:
    """
    Load a manifest and print its layout.

    Args:
        manifest_path: Path to the sector manifest YAML file.
        piece_key: If given, print only the start offset of this piece.
        converter_name: If given, override the manifest's converter.

    Returns:
        Process exit status: 0 on success, 1 on a bad manifest or unknown key.
    """
    logger.debug("Loading manifest from %s", manifest_path)
    try:
        manifest = SectorManifest.from_yaml_file(manifest_path)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.error("Cannot load manifest %s: %s", manifest_path, e)
        return 1

    converter = (
        CONVERTERS_BY_NAME[converter_name] if converter_name is not None else manifest.converter
    )
    logger.debug("Laying out %d pieces with %r", len(manifest.pieces), converter)

    if piece_key is not None:
        start = get_piece_start(manifest.pieces, piece_key, converter)
        if start is None:
            logger.error("No piece with key '%s' in %s", piece_key, manifest_path)
            return 1
        print(int(start))
        return 0

    for row in render_layout(manifest, converter):
        print(row)
    return 0


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name by severity."""

    LEVEL_COLORS = {
        logging.DEBUG: "\x1b[38;5;244m",
        logging.INFO: "\x1b[38;5;40m",
        logging.WARNING: "\x1b[38;5;220m",
        logging.ERROR: "\x1b[38;5;196m",
        logging.CRITICAL: "\x1b[38;5;196;1m",
    }
    RESET = "\x1b[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, then wrap its level name in the level's color."""
        line = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color is None:
            return line
        return line.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


def setup_logging(verbose: bool = False, no_color: bool = False) -> logging.Handler:
    """
    Send the package's log records to stderr.

    Colors are used only when stderr is a terminal. Calling this again replaces
    the handler installed by the previous call.
    """
    handler = logging.StreamHandler(sys.stderr)
    use_color = not no_color and handler.stream.isatty()
    formatter_class = ColoredFormatter if use_color else logging.Formatter
    handler.setFormatter(formatter_class(LOG_FORMAT))

    package_logger = logging.getLogger(CLI_LOGGER)
    for previous in list(package_logger.handlers):
        package_logger.removeHandler(previous)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return handler


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Sector piece layout",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "manifest",
        type=Path,
        help="Path to the sector manifest YAML file",
    )
    parser.add_argument(
        "--key",
        type=str,
        default=None,
        help="Print only the start offset of the piece with this key",
    )
    parser.add_argument(
        "--converter",
        choices=sorted(CONVERTERS_BY_NAME),
        default=None,
        help="Byte-domain converter to use instead of the manifest's",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    args = parser.parse_args(argv)

    setup_logging(args.verbose, args.no_color)

    return run(args.manifest, args.key, args.converter)


if __name__ == "__main__":
    sys.exit(main())
