"""
Check command: catalog guardrails
"""

import argparse
import logging
import sys
from typing import List

from models.report import GuardrailReport
from services.guardrail_service import GuardrailService
from utils.formatting import format_section

from .base_command import BaseCommand

logger = logging.getLogger(__name__)


def render_errors(report: GuardrailReport) -> List[str]:
    errors = []

    if report.used_but_missing:
        errors.append(format_section(
            'Keys used in source code but missing in source locale:',
            report.used_but_missing, 50
        ))

    for issues in report.locales:
        code = issues.locale_code
        if issues.missing_keys:
            errors.append(format_section(
                f"[{code}] Missing keys ({len(issues.missing_keys)}):",
                issues.missing_keys, 25
            ))
        if issues.extra_keys:
            errors.append(format_section(
                f"[{code}] Extra keys ({len(issues.extra_keys)}):",
                issues.extra_keys, 25
            ))
        if issues.placeholder_mismatches:
            errors.append(format_section(
                f"[{code}] Placeholder mismatches ({len(issues.placeholder_mismatches)}):",
                [mismatch.describe() for mismatch in issues.placeholder_mismatches], 15
            ))

    return errors


def render_warnings(report: GuardrailReport) -> List[str]:
    warnings = []

    if report.stale_keys:
        warnings.append('\n'.join([
            format_section(f"Potentially stale source locale keys ({len(report.stale_keys)}):", report.stale_keys, 20),
            '  (These are warnings only due to dynamic key access patterns.)'
        ]))

    if report.variable_expressions:
        warnings.append('\n'.join([
            format_section(
                f"Dynamic key expressions detected ({len(report.variable_expressions)}):",
                report.variable_expressions, 20
            ),
            '  (Resolved via literal scans when possible.)'
        ]))

    for issues in report.locales:
        if issues.type_drift:
            warnings.append(format_section(
                f"[{issues.locale_code}] Value type differs from source ({len(issues.type_drift)}):",
                [drift.describe() for drift in issues.type_drift], 15
            ))

    return warnings


class CheckCommand(BaseCommand):
    """Validates key parity, placeholder consistency and source key coverage"""

    name = 'check'
    help = 'Validate locale catalogs against the source locale and source code'

    async def run(self, args: argparse.Namespace) -> int:
        service = GuardrailService(self.store, self.config)
        report = service.run(self.settings.paths.source_dir)
        logger.debug(
            f"Guardrails: {report.error_count} errors, {report.warning_count} warnings, "
            f"per locale: {report.errors_by_locale()}"
        )

        print(f"Checked locales: {report.locales_checked}")
        print(f"Source locale: {report.source_locale}")
        print(f"Source files scanned: {report.source_files_scanned}")
        print(f"Source locale keys: {report.source_key_count}")
        print(f"Used keys detected: {report.used_key_count}")

        warnings = render_warnings(report)
        if warnings:
            print('\nWarnings:')
            for warning in warnings:
                print(f"\n{warning}")

        errors = render_errors(report)
        if errors:
            print('\nErrors:', file=sys.stderr)
            for error in errors:
                print(f"\n{error}", file=sys.stderr)
            return 1

        print('\nAll i18n guardrails passed.')
        return 0
