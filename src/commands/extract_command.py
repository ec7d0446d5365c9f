"""
Extract command: report which catalog keys the source code uses
"""

import argparse
import json

from locales.flat_catalog import flatten
from services.key_extractor import KeyExtractor

from .base_command import BaseCommand


class ExtractCommand(BaseCommand):
    """Prints the key usage report as JSON"""

    name = 'extract'
    help = 'Report catalog keys referenced by source code'

    async def run(self, args: argparse.Namespace) -> int:
        source_keys = sorted(flatten(self.load_source()))

        extractor = KeyExtractor(source_keys, self.file_manager)
        extraction = extractor.extract_from_directory(self.settings.paths.source_dir)

        output = extraction.to_dict(self.config.source_locale, source_keys)
        print(json.dumps(output, indent=2, ensure_ascii=False))

        missing = output['missingInSourceLocale']
        if missing:
            print(f"\nKeys used in source code but missing in source locale ({len(missing)})")
            for key in missing:
                print(f"- {key}")
            return 1

        return 0
