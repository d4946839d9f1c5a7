"""Config command argument parser for Podkeeper CLI."""

import argparse

from .main_parser import add_common_arguments


def add_config_subparser(subparsers) -> argparse.ArgumentParser:
    """Add config command subparser to the main parser.

    Args:
        subparsers: Subparsers object from the main argument parser

    Returns:
        The configured config subparser
    """
    config_parser = subparsers.add_parser(
        "config",
        help="Inspect and change the configuration",
        description="Show the effective configuration or change user settings"
    )

    config_subparsers = config_parser.add_subparsers(
        dest="config_command",
        help="Configuration commands",
        required=True
    )

    # Config show command
    show_parser = config_subparsers.add_parser(
        "show",
        help="Show effective flags and resolved paths"
    )
    add_common_arguments(show_parser)
    show_parser.add_argument(
        "--format",
        choices=["yaml", "json"],
        default="yaml",
        help="Output format (default: yaml)"
    )

    # Config set command
    set_parser = config_subparsers.add_parser(
        "set",
        help="Persist a flag in the user settings file"
    )
    add_common_arguments(set_parser)
    set_parser.add_argument(
        "key",
        help="Setting name, e.g. skip_repo_update"
    )
    set_parser.add_argument(
        "value",
        help="Boolean value (true/false, yes/no, on/off, 1/0)"
    )

    # Config path command
    path_parser = config_subparsers.add_parser(
        "path",
        help="Print the location of the user settings file"
    )
    add_common_arguments(path_parser)

    return config_parser


__all__ = ["add_config_subparser"]
