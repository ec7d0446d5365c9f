"""
Command line commands
"""

from .base_command import BaseCommand
from .check_command import CheckCommand
from .extract_command import ExtractCommand
from .sync_command import SyncCommand
from .translate_command import TranslateCommand
from .register_commands import register_commands

__all__ = ['BaseCommand', 'CheckCommand', 'ExtractCommand', 'SyncCommand', 'TranslateCommand', 'register_commands']
