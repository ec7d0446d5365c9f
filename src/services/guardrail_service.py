"""
Consistency guardrails between catalogs and source code usage
"""

import logging
from pathlib import Path
from typing import Any, Dict

from config.settings import GuardrailConfig
from locales.flat_catalog import flatten
from locales.locale_store import LocaleStore
from locales.placeholders import collect_placeholders
from models.extraction import ExtractionResult
from models.report import GuardrailReport, LocaleIssues, PlaceholderMismatch, TypeDrift
from services.key_extractor import KeyExtractor

logger = logging.getLogger(__name__)


def _scalar_type(value: Any) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    return type(value).__name__


def compare_locale(locale_code: str, source_flat: Dict[str, Any], locale_flat: Dict[str, Any]) -> LocaleIssues:
    """
    Compare one flattened locale against the flattened source catalog

    Missing keys, extra keys and placeholder mismatches are errors. Leaves
    present on both sides with different scalar types are collected as
    type drift, which is only a warning.
    """
    issues = LocaleIssues(locale_code=locale_code)
    source_keys = sorted(source_flat)

    issues.missing_keys = [key for key in source_keys if key not in locale_flat]
    issues.extra_keys = sorted(key for key in locale_flat if key not in source_flat)

    for key in source_keys:
        if key not in locale_flat:
            continue
        source_value = source_flat[key]
        locale_value = locale_flat[key]

        if isinstance(source_value, str) and isinstance(locale_value, str):
            source_placeholders = collect_placeholders(source_value)
            locale_placeholders = collect_placeholders(locale_value)
            if source_placeholders != locale_placeholders:
                issues.placeholder_mismatches.append(
                    PlaceholderMismatch(key, source_placeholders, locale_placeholders)
                )
            continue

        source_type, locale_type = _scalar_type(source_value), _scalar_type(locale_value)
        if source_type != locale_type:
            issues.type_drift.append(TypeDrift(key, source_type, locale_type))

    return issues


class GuardrailService:
    """Runs the catalog consistency checks for one project"""

    def __init__(self, store: LocaleStore, config: GuardrailConfig):
        self.store = store
        self.config = config

    def evaluate(
        self,
        source_flat: Dict[str, Any],
        locale_flats: Dict[str, Dict[str, Any]],
        extraction: ExtractionResult
    ) -> GuardrailReport:
        """
        Build a report from already loaded catalogs

        Args:
            source_flat: Flattened source catalog
            locale_flats: Flattened catalogs of the other locales, by code
            extraction: Keys recovered from source code

        Returns:
            GuardrailReport; it passes only when no locale has errors and
            every statically called key exists in the source catalog
        """
        source_keys = sorted(source_flat)
        used_keys = extraction.used_keys

        report = GuardrailReport(
            source_locale=self.config.source_locale,
            locales_checked=len(locale_flats) + 1,
            source_files_scanned=extraction.source_files_scanned,
            source_key_count=len(source_keys),
            used_key_count=len(used_keys),
            used_but_missing=extraction.missing_in_source(source_keys),
            variable_expressions=list(extraction.variable_expressions),
        )

        for locale_code in sorted(locale_flats):
            issues = compare_locale(locale_code, source_flat, locale_flats[locale_code])
            if issues.has_errors:
                logger.debug(f"[{locale_code}] {issues.error_count} error groups")
            report.locales.append(issues)

        report.stale_keys = [
            key for key in source_keys
            if key not in used_keys and not self.config.key_is_ignored(key)
        ]
        return report

    def run(self, source_dir: Path) -> GuardrailReport:
        """
        Load the catalogs, scan source code and build the report

        Raises:
            SourceLocaleMissingError: If the source locale catalog is absent
            LocaleFileError: If a catalog cannot be read
        """
        source_flat = flatten(self.store.read_source(self.config.source_locale))

        extractor = KeyExtractor(source_flat.keys(), self.store.file_manager)
        extraction = extractor.extract_from_directory(source_dir)

        locale_flats = {
            locale_code: flatten(self.store.read(locale_code))
            for locale_code in self.store.target_locales(self.config.source_locale)
        }
        return self.evaluate(source_flat, locale_flats, extraction)
