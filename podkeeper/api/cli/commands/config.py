"""Config command module - shows and changes the configuration."""

import argparse
import sys

from loguru import logger

from podkeeper.config import Config, get_config, reset_config
from podkeeper.core.config import write_user_setting
from podkeeper.ui import OutputFormatter


def config_command(args: argparse.Namespace) -> None:
    """Execute the config command with appropriate subcommand.

    Args:
        args: Parsed command-line arguments
    """
    subcommand_handlers = {
        "show": config_show_command,
        "set": config_set_command,
        "path": config_path_command,
    }

    handler = subcommand_handlers.get(args.config_command)
    if handler:
        handler(args)
    else:
        logger.error(f"Unknown config command: {args.config_command}")
        sys.exit(1)


def load_config(args: argparse.Namespace) -> Config:
    """Return the global configuration with the CLI output flags applied."""
    config = get_config()
    if getattr(args, "silent", False):
        config.silent = True
    if getattr(args, "verbose", False):
        config.verbose = True
    return config


def config_show_command(args: argparse.Namespace) -> None:
    """Handle config show command."""
    config = load_config(args)
    formatter = OutputFormatter(verbose=config.verbose, silent=config.silent)

    data = config.to_dict()
    if config.extra_settings:
        data["ignored_settings"] = sorted(config.extra_settings)

    if args.format == "json":
        formatter.json_output(data)
    else:
        formatter.yaml_output(data)


def config_set_command(args: argparse.Namespace) -> None:
    """Handle config set command."""
    config = load_config(args)
    formatter = OutputFormatter(verbose=config.verbose, silent=config.silent)
    settings_file = config.user_settings_file

    settings = write_user_setting(settings_file, args.key, args.value)
    # The next access re-reads the file
    reset_config()

    formatter.info(f"Set {args.key} to {str(getattr(settings, args.key)).lower()}")
    formatter.verbose_info(f"Settings file: {settings_file}")


def config_path_command(args: argparse.Namespace) -> None:
    """Handle config path command."""
    config = load_config(args)
    print(config.user_settings_file)
