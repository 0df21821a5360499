"""
logicgraph.cli - Command-line interface.

Main entry point for the logicgraph CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from logicgraph import __version__
from logicgraph.commands import build_cmd, classify_cmd, config_cmd, cycles_cmd


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="logicgraph",
        description="Compile stateful DNF logic into a minimized region graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  logicgraph build world.json                 # Write regions.json, region_data.py, .dot
  logicgraph build world.json --start Start   # Relabel the start state as Menu
  logicgraph build --keep Town --no-dot       # Keep a region, skip DOT output
  logicgraph cycles world.json                # Report waypoint reference cycles
  logicgraph classify '$TAKEDAMAGE' '$BENCHRESET'

Configuration:
  logicgraph config path                      # Show config file location
  logicgraph config show                      # View all settings

For detailed command help: logicgraph <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"logicgraph {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Verbose output (-vv for debug logging)",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    # Subcommands
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # build command
    build_parser = subparsers.add_parser(
        "build",
        help="Compile a world definition into a region graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  logicgraph build world.json -o out
  logicgraph build world.json --inline-waypoint 'Can_.*'
  logicgraph build world.json --keep-file keep.json
""",
    )
    build_parser.add_argument(
        "world",
        nargs="?",
        type=Path,
        help="World definition JSON (default: input.world from config)",
    )
    build_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output directory (default: output.directory from config)",
        metavar="DIR",
    )
    build_parser.add_argument(
        "--start",
        help="State region to relabel as Menu",
        metavar="TERM",
    )
    build_parser.add_argument(
        "--keep",
        nargs="+",
        help="Regions exempt from merging",
        metavar="NAME",
    )
    build_parser.add_argument(
        "--keep-file",
        type=Path,
        help="JSON array of regions exempt from merging",
        metavar="FILE",
    )
    build_parser.add_argument(
        "--inline-waypoint",
        action="append",
        help="Regex of stateful waypoints to inline (can be repeated)",
        metavar="PATTERN",
    )
    build_parser.add_argument(
        "--no-dot",
        action="store_true",
        help="Do not write the DOT rendering",
    )

    # cycles command
    cycles_parser = subparsers.add_parser(
        "cycles",
        help="Report reference cycles between logic objects",
    )
    cycles_parser.add_argument(
        "world",
        nargs="?",
        type=Path,
        help="World definition JSON (default: input.world from config)",
    )
    cycles_parser.add_argument(
        "--pattern",
        action="append",
        help="Only consider objects whose names match this regex (can be repeated)",
        metavar="PATTERN",
    )

    # classify command
    classify_parser = subparsers.add_parser(
        "classify",
        help="Show the classification of state modifier tokens",
    )
    classify_parser.add_argument(
        "tokens",
        nargs="+",
        help="Modifier tokens, e.g. '$CASTSPELL[1]'",
        metavar="TOKEN",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="View configuration",
    )
    config_subparsers = config_parser.add_subparsers(dest="config_action")
    show_parser = config_subparsers.add_parser("show", help="Show effective configuration")
    show_parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON instead of TOML",
    )
    config_subparsers.add_parser("path", help="Show configuration file location")

    return parser


def configure_logging(args: argparse.Namespace) -> None:
    """Set the root log level from -v/-q."""
    if args.quiet:
        level = logging.ERROR
    elif args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install logicgraph[completion]
    # Then activate: eval "$(register-python-argcomplete logicgraph)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    configure_logging(args)

    # Handle no command
    if not args.command:
        parser.print_help()
        return 0

    try:
        # Dispatch to command handlers
        if args.command == "build":
            return build_cmd.run(args)
        elif args.command == "cycles":
            return cycles_cmd.run(args)
        elif args.command == "classify":
            return classify_cmd.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except Exception as e:
        if args.verbose >= 2:
            raise
        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
