"""Main argument parser for Podkeeper CLI."""

import argparse

from podkeeper import __version__


def create_main_parser() -> argparse.ArgumentParser:
    """Create and configure the main argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="podkeeper",
        description="Configuration and project layout for a CocoaPods-style dependency manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  podkeeper config show
  podkeeper config show --format json
  podkeeper config set skip_repo_update true
  podkeeper config path
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"podkeeper {__version__}",
    )

    return parser


def setup_subparsers(parser: argparse.ArgumentParser) -> argparse._SubParsersAction:
    """Set up subparsers for the main parser.

    Args:
        parser: Main argument parser

    Returns:
        Subparsers action for adding command parsers
    """
    return parser.add_subparsers(dest="command", help="Available commands")


def add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the output flags shared by all commands.

    Args:
        parser: Parser to add arguments to
    """
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show more debugging information",
    )

    parser.add_argument(
        "--silent",
        action="store_true",
        help="Show nothing",
    )


__all__ = [
    "create_main_parser",
    "setup_subparsers",
    "add_common_arguments",
]
