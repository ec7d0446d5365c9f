"""
Command registration
"""

import argparse
from typing import Dict

from config.settings import Settings

from .base_command import BaseCommand
from .check_command import CheckCommand
from .extract_command import ExtractCommand
from .sync_command import SyncCommand
from .translate_command import TranslateCommand


def register_commands(parser: argparse.ArgumentParser, settings: Settings) -> Dict[str, BaseCommand]:
    """Register all commands as subparsers and return them by name"""

    # Initialize commands
    commands = [
        CheckCommand(settings),
        ExtractCommand(settings),
        SyncCommand(settings),
        TranslateCommand(settings),
    ]

    subparsers = parser.add_subparsers(dest='command', metavar='command')
    subparsers.required = True
    for command in commands:
        subparser = subparsers.add_parser(command.name, help=command.help, description=command.help)
        command.add_arguments(subparser)

    return {command.name: command for command in commands}
