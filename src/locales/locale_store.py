"""
Locale store for reading and writing catalog files
"""

from pathlib import Path
from typing import Dict, Any, List, Optional
import logging

from utils.exceptions import LocaleFileError, SourceLocaleMissingError
from utils.file_utils import FileManager

logger = logging.getLogger(__name__)

LOCALE_SUFFIX = '.json'


class LocaleStore:
    """Access to the `<locale-code>.json` catalogs of one locales directory"""

    def __init__(self, locales_dir, file_manager: Optional[FileManager] = None):
        """
        Initialize LocaleStore

        Args:
            locales_dir: Path to locales directory
            file_manager: File helper used for JSON reads and atomic writes
        """
        self.locales_dir = Path(locales_dir)
        self.file_manager = file_manager or FileManager()

    def list_locale_files(self) -> List[str]:
        """List catalog file names in stable sorted order"""
        if not self.locales_dir.is_dir():
            logger.warning(f"Locales directory not found: {self.locales_dir}")
            return []
        return sorted(
            entry.name for entry in self.locales_dir.iterdir()
            if entry.is_file() and entry.name.endswith(LOCALE_SUFFIX)
        )

    def locale_codes(self) -> List[str]:
        """List available locale codes"""
        return [name[:-len(LOCALE_SUFFIX)] for name in self.list_locale_files()]

    def path_for(self, locale_code: str) -> Path:
        return self.locales_dir / f"{locale_code}{LOCALE_SUFFIX}"

    def has_locale(self, locale_code: str) -> bool:
        return f"{locale_code}{LOCALE_SUFFIX}" in self.list_locale_files()

    def read(self, locale_code: str) -> Dict[str, Any]:
        """
        Load one locale catalog

        Raises:
            LocaleFileError: If the file is unreadable or not a JSON object
        """
        path = self.path_for(locale_code)
        try:
            data = self.file_manager.read_json(path)
        except (OSError, ValueError) as e:
            raise LocaleFileError(f"Failed to read locale file {path}: {e}") from e

        if not isinstance(data, dict):
            raise LocaleFileError(f"Locale file is not a JSON object: {path}")

        logger.debug(f"Loaded catalog for locale: {locale_code}")
        return data

    def read_source(self, source_locale: str) -> Dict[str, Any]:
        """Load the authoritative catalog, failing if it is absent"""
        if not self.has_locale(source_locale):
            raise SourceLocaleMissingError(self.path_for(source_locale))
        return self.read(source_locale)

    def write(self, locale_code: str, tree: Dict[str, Any]) -> Path:
        """Write one locale catalog atomically and return its path"""
        path = self.path_for(locale_code)
        self.file_manager.write_json_atomic(path, tree)
        logger.info(f"Wrote catalog for locale: {locale_code}")
        return path

    def target_locales(self, source_locale: str, requested: Optional[set] = None) -> List[str]:
        """
        Locale codes other than the source, optionally restricted

        Args:
            source_locale: Code of the authoritative locale
            requested: Set of codes to keep, or None for all

        Returns:
            Sorted list of target locale codes
        """
        return [
            code for code in self.locale_codes()
            if code != source_locale and (requested is None or code in requested)
        ]
