"""
Exception types shared by catalog tooling
"""

from typing import Optional


class CatalogGuardError(Exception):
    """Base error for catalog tooling"""


class SourceLocaleMissingError(CatalogGuardError):
    """Raised when the source locale catalog file does not exist"""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Source locale file not found: {path}")


class LocaleFileError(CatalogGuardError):
    """Raised when a locale file cannot be read or is not a JSON object"""


class TranslationError(CatalogGuardError):
    """Fatal failure talking to the translation service"""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ''):
        self.status = status
        self.body = body[:500]
        super().__init__(message)


class RetryableTranslationError(TranslationError):
    """Rate limit or server fault; safe to retry"""


class TagHandlingError(TranslationError):
    """The service could not parse the inline placeholder tags"""


class ResponseShapeError(TranslationError):
    """Response did not carry one translation per submitted text"""


class SourceDirectoryError(CatalogGuardError):
    """Raised when the application source directory does not exist"""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Source directory not found: {path}")
