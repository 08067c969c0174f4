"""
Command-line entry point for validating and analyzing local log files.
"""

import argparse
import json
import sys
from pathlib import Path

from honeylog.analytics.engine import AnalyticsEngine
from honeylog.config import get_settings
from honeylog.geo.lookup import create_geo_lookup
from honeylog.logging_config import configure_logging
from honeylog.validation.validator import LogFormatValidator, format_validation_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="honeylog",
        description="Validate or analyze Cowrie JSON log files",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)
    
    validate = subcommands.add_parser("validate", help="Check the format of a log file")
    validate.add_argument("path", type=Path)
    validate.add_argument("--sample-size", type=int, default=10,
                          help="Number of non-blank lines to examine (default: 10)")
    validate.add_argument("--json", action="store_true", help="Print the report as JSON")
    
    analyze = subcommands.add_parser("analyze", help="Print the analytics report of a log file")
    analyze.add_argument("path", type=Path)
    
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings)
    
    try:
        content = args.path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        print(f"Cannot read {args.path}: {e}", file=sys.stderr)
        return 2
    
    if args.command == "validate":
        validator = LogFormatValidator()
        report = validator.validate(content, args.sample_size)
        if args.json:
            print(report.model_dump_json(by_alias=True, indent=2))
        else:
            print(format_validation_report(report, validator))
        return 1 if report.invalid_lines else 0
    
    geo = create_geo_lookup(settings)
    try:
        report = AnalyticsEngine(geo=geo, settings=settings).analyze_text(content)
    finally:
        geo.close()
    print(json.dumps(report.model_dump(mode="json", by_alias=True), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
