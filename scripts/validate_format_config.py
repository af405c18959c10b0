#!/usr/bin/env python3
"""
CLI script to validate a data format configuration.

Loads flat data format settings from a YAML file, runs a validation pass
and prints every diagnostic found.

Usage:
    # Validate a config against the default resources directory
    python scripts/validate_format_config.py --config format.yaml

    # Resolve Protobuf descriptors elsewhere and print JSON
    python scripts/validate_format_config.py --config format.yaml \\
        --resources-dir /etc/pipeline/resources --json

Exit codes:
    0  configuration is valid
    1  configuration is invalid
    2  configuration could not be read or names an unsupported format
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from dataformat_config import (
    FormatConfigError,
    ValidationResult,
    get_settings,
    load_format_settings,
    validate_data_format,
)

logger = logging.getLogger(__name__)

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_INPUT_ERROR = 2


def setup_logging(verbose: bool = False) -> None:
    """Configure root logging for the CLI."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Validate a data format parser configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a LOG configuration
  python scripts/validate_format_config.py --config log_format.yaml

  # Override the buffered read ceiling
  python scripts/validate_format_config.py --config format.yaml --overrun-limit 65536

  # Output as JSON
  python scripts/validate_format_config.py --config format.yaml --json
        """,
    )

    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="YAML file with the data format settings",
    )
    parser.add_argument(
        "--resources-dir",
        type=Path,
        help="Directory for resolving resource files (default: from settings)",
    )
    parser.add_argument(
        "--overrun-limit",
        type=int,
        help="Ceiling for buffered reads in bytes (default: from settings)",
    )
    parser.add_argument(
        "--settings",
        type=Path,
        help="YAML file with validator settings (default: dataformat.yaml)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def print_result(result: ValidationResult, config_path: Path) -> None:
    """Print a human readable validation report."""
    print()
    print("Data Format Validation")
    print("=" * 50)
    print(f"  Config: {config_path}")
    print(f"  Format: {result.data_format.value if result.data_format else 'unknown'}")
    if result.charset:
        print(f"  Charset: {result.charset}")
    print()

    if result.is_valid:
        factory = result.parser_factory
        print("✅ Configuration is valid")
        print(f"  Max data length: {factory.max_data_len}")
        for mode in factory.modes.values():
            print(f"  Mode: {mode.value}")
        return

    print(f"❌ Configuration is invalid ({len(result.diagnostics)} issue(s))")
    for diagnostic in result.diagnostics:
        print(f"  - {diagnostic}")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    settings = get_settings(str(args.settings) if args.settings else None)
    errors = settings.validate()
    if errors:
        for error in errors:
            logger.error(f"Invalid validator settings: {error}")
        return EXIT_INPUT_ERROR

    try:
        format_settings = load_format_settings(args.config)
    except (OSError, ValueError, FormatConfigError) as e:
        logger.error(f"Cannot load data format config: {e}")
        if args.json:
            print(json.dumps({"is_valid": False, "error": str(e)}, indent=2))
        return EXIT_INPUT_ERROR

    result = validate_data_format(
        format_settings,
        resources_dir=args.resources_dir or settings.resources_dir,
        overrun_limit=(
            args.overrun_limit if args.overrun_limit is not None else settings.overrun_limit
        ),
        stage_group=settings.stage_group,
    )

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        print_result(result, args.config)

    return EXIT_VALID if result.is_valid else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
