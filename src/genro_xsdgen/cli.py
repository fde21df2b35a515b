# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Generate typed definitions from an XSD file.

Usage:
    # Python dataclasses
    genro-xsdgen schema.xsd -o models.py

    # Rust serde structs
    genro-xsdgen schema.xsd -o models.rs --target rust

    # From URL, only some root elements
    genro-xsdgen --url https://example.com/schema.xsd -o models.py --roots Document,Header
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import DEFAULT_TARGET, GeneratorConfig
from .errors import EmissionError, XsdGenError
from .generator import generate_file
from .targets import TARGETS

logger = logging.getLogger(__name__)


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genro-xsdgen",
        description="Convert XSD schemas to typed definitions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "input",
        nargs="?",
        type=Path,
        help="Input XSD file path",
    )
    parser.add_argument(
        "--url",
        type=str,
        help="URL to download XSD from",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="Output source file",
    )
    parser.add_argument(
        "-t",
        "--target",
        choices=sorted(TARGETS),
        default=DEFAULT_TARGET,
        help=f"Output language (default: {DEFAULT_TARGET})",
    )
    parser.add_argument(
        "--roots",
        type=str,
        help="Comma-separated list of root elements to include (default: all)",
    )
    parser.add_argument(
        "--no-header",
        action="store_true",
        help="Do not write the import preamble",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print diagnostic info",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Command-line interface; returns the process exit code."""
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    if not args.input and not args.url:
        parser.error("Either input file or --url is required")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    source = args.url or args.input
    config = GeneratorConfig.from_args(args)
    logger.info("Generating %s definitions from %s", config.target, source)

    try:
        code = generate_file(source, config)
    except EmissionError as exc:
        logger.error("Generation aborted: %s", exc)
        if exc.partial is not None:
            logger.debug("Definitions emitted before the failure: %s", exc.partial.names())
        return 1
    except XsdGenError as exc:
        logger.error("%s", exc)
        return 1

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(code, encoding="utf-8")
    logger.info("Saved %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
