"""
Utility modules for catalog tooling
"""

from .validators import InputValidator
from .file_utils import FileManager
from .retry import call_with_retry
from .formatting import format_list, format_section

__all__ = ['InputValidator', 'FileManager', 'call_with_retry', 'format_list', 'format_section']
