"""Main CLI entry point for the API reference resolver."""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from src.cli.commands.refs import refs_command
from src.cli.commands.resolve import resolve_command
from src.cli.config import CONFLICT_STRATEGIES, Config
from src.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="api-ref-resolver",
        description="Merge OpenAPI or AsyncAPI documents that use $ref links across files",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Resolve external $refs into one self-contained document")
    resolve_parser.add_argument(
        "-i", "--input", default="api.yaml", help="An openapi.yaml or asyncapi.yaml file name or URL (default: api.yaml)"
    )
    resolve_parser.add_argument("-o", "--output", help="The output file (default: stdout)")
    resolve_parser.add_argument(
        "-f",
        "--format",
        choices=["yaml", "json"],
        help="Output format (default: from the output file extension, else yaml)",
    )
    resolve_parser.add_argument(
        "-n",
        "--no-markers",
        action="store_true",
        help="Do not add x-resolved-from and x-resolved-at markers",
    )
    resolve_parser.add_argument(
        "--conflict-strategy",
        choices=CONFLICT_STRATEGIES,
        help="What to do when two sources define the same component (default: rename)",
    )
    resolve_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    resolve_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    # Refs command
    refs_parser = subparsers.add_parser("refs", help="List the $ref values of a document")
    refs_parser.add_argument("-i", "--input", default="api.yaml", help="Document file name or URL (default: api.yaml)")
    refs_parser.add_argument("--external-only", action="store_true", help="Only list references to other documents")
    refs_parser.add_argument("--config", help="Path to .env configuration file", default=None)
    refs_parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging(verbose=args.verbose)

    try:
        config = Config(args.config)
    except ValueError as e:
        logger.error(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    if args.command == "resolve":
        resolve_command(
            config=config,
            input_path=args.input,
            output_path=args.output,
            output_format=args.format,
            markers=False if args.no_markers else None,
            conflict_strategy=args.conflict_strategy,
            verbose=args.verbose,
        )
    elif args.command == "refs":
        refs_command(config=config, input_path=args.input, external_only=args.external_only)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
