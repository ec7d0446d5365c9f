"""
Base command class
"""

import argparse
import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set

from config.settings import Settings, GuardrailConfig
from config.load_config import load_guardrails_config
from locales.locale_store import LocaleStore
from utils.exceptions import CatalogGuardError
from utils.file_utils import FileManager
from utils.validators import InputValidator

logger = logging.getLogger(__name__)


class BaseCommand(ABC):
    """Base command class with common functionality"""

    name = ''
    help = ''

    def __init__(self, settings: Settings, store: Optional[LocaleStore] = None):
        self.settings = settings
        self.file_manager = FileManager(settings.paths.source_extensions)
        self.store = store or LocaleStore(settings.paths.locales_dir, self.file_manager)
        self._config: Optional[GuardrailConfig] = None

    @property
    def config(self) -> GuardrailConfig:
        """Guardrails config, loaded once per command run"""
        if self._config is None:
            self._config = load_guardrails_config(self.settings.paths.guardrails_config)
        return self._config

    def add_arguments(self, parser: argparse.ArgumentParser):
        """Register command specific flags"""

    def load_source(self) -> Dict[str, Any]:
        """Load the authoritative catalog"""
        return self.store.read_source(self.config.source_locale)

    @abstractmethod
    async def run(self, args: argparse.Namespace) -> int:
        """Run the command and return its exit code"""

    async def execute(self, args: argparse.Namespace) -> int:
        """Run the command, turning tooling errors into exit code 1"""
        try:
            return await self.run(args)
        except CatalogGuardError as e:
            self.handle_error(e)
            return 1

    def handle_error(self, error: Exception):
        """Handle errors with logging"""
        error_info = {
            'error_type': type(error).__name__,
            'command': self.name
        }
        logger.debug(f"Error in {self.name}: {error}", extra=error_info)
        print(str(error), file=sys.stderr)

    def requested_locales(self, raw: Optional[str]) -> Optional[Set[str]]:
        """Parse --locale, warning about codes that do not look like locales"""
        requested = InputValidator.parse_locale_list(raw)
        for code in sorted(requested or ()):
            valid, error = InputValidator.validate_locale_code(code)
            if not valid:
                logger.warning(error)
        return requested
