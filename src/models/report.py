"""
Guardrail report models
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class PlaceholderMismatch:
    """Placeholder sets that differ between source and locale for one key"""
    key: str
    source: List[str]
    locale: List[str]

    def describe(self) -> str:
        source = '[' + ','.join(f'"{name}"' for name in self.source) + ']'
        locale = '[' + ','.join(f'"{name}"' for name in self.locale) + ']'
        return f"{self.key} (source: {source}, locale: {locale})"


@dataclass
class TypeDrift:
    """Leaf whose scalar type differs between source and locale"""
    key: str
    source_type: str
    locale_type: str

    def describe(self) -> str:
        return f"{self.key} (source: {self.source_type}, locale: {self.locale_type})"


@dataclass
class LocaleIssues:
    """Drift of one locale catalog relative to the source catalog"""
    locale_code: str
    missing_keys: List[str] = field(default_factory=list)
    extra_keys: List[str] = field(default_factory=list)
    placeholder_mismatches: List[PlaceholderMismatch] = field(default_factory=list)
    type_drift: List[TypeDrift] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        """Number of error categories present for this locale"""
        return sum(1 for group in (self.missing_keys, self.extra_keys, self.placeholder_mismatches) if group)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0


@dataclass
class GuardrailReport:
    """Outcome of one guardrail run"""
    source_locale: str
    locales_checked: int = 0
    source_files_scanned: int = 0
    source_key_count: int = 0
    used_key_count: int = 0
    used_but_missing: List[str] = field(default_factory=list)
    locales: List[LocaleIssues] = field(default_factory=list)
    stale_keys: List[str] = field(default_factory=list)
    variable_expressions: List[str] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return (1 if self.used_but_missing else 0) + sum(issues.error_count for issues in self.locales)

    @property
    def warning_count(self) -> int:
        drift = sum(1 for issues in self.locales if issues.type_drift)
        return (1 if self.stale_keys else 0) + (1 if self.variable_expressions else 0) + drift

    @property
    def passed(self) -> bool:
        return self.error_count == 0

    def errors_by_locale(self) -> List[Tuple[str, int]]:
        return [(issues.locale_code, issues.error_count) for issues in self.locales]
