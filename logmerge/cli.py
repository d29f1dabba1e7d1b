"""logmerge — deduplicate dashboard access records across a directory of access logs."""

import logging
import sys
from argparse import ArgumentParser

from logmerge.config import OUTPUT_FORMATS, load_config, load_yaml_config
from logmerge.errors import ExtractionError
from logmerge.formatter import get_formatter
from logmerge.parser import compile_line_pattern
from logmerge.reducer import reduce_directory
from logmerge.stats import ScanStats, format_stats_json, format_stats_text

logger = logging.getLogger("logmerge")


def build_parser() -> ArgumentParser:
    """Build the CLI argument parser."""
    parser = ArgumentParser(
        prog="logmerge",
        description="Extract and deduplicate dashboard access records from a log directory.",
    )
    parser.add_argument(
        "log_dir",
        nargs="?",
        help="Directory of access logs (plain or gzip). Falls back to LOG_DIR or the config file",
    )
    parser.add_argument(
        "--config",
        help="Optional YAML config file",
    )
    parser.add_argument(
        "--output",
        choices=OUTPUT_FORMATS,
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--route-prefix",
        help="URL prefix preceding the identifier (default: /observabilityapp/d/)",
    )
    parser.add_argument(
        "--replace-on-newer",
        action="store_true",
        help="Replace the whole record (slug included) when a newer timestamp is seen",
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print scan statistics after the records",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def run(args, parser: ArgumentParser | None = None) -> int:
    """Load config, reduce the directory, and print the report. Returns exit status."""
    parser = parser or build_parser()
    try:
        config = load_config(args, load_yaml_config(args.config))
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s [logmerge] %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    if not config.log_dir:
        parser.error("a log directory is required (argument, LOG_DIR, or log_dir in --config)")

    logger.info(
        "Config: log_dir=%s, route_prefix=%s, replace_on_newer=%s",
        config.log_dir, config.route_prefix, config.replace_on_newer,
    )

    stats = ScanStats()
    try:
        records = reduce_directory(
            config.log_dir,
            pattern=compile_line_pattern(config.route_prefix),
            identifier_length=config.identifier_length,
            replace_on_newer=config.replace_on_newer,
            stats=stats,
        )
    except ExtractionError as e:
        print(f"failed to parse logs: {e}", file=sys.stderr)
        return 1

    formatter = get_formatter(config.output_format)
    for record in records.values():
        print(formatter(record))

    if args.stats:
        if config.output_format == "json":
            print(format_stats_json(stats))
        else:
            print(format_stats_text(stats))

    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        sys.exit(run(args, parser))
    except KeyboardInterrupt:
        sys.exit(0)
    except BrokenPipeError:
        sys.exit(0)
