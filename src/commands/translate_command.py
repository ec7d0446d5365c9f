"""
Translate command: fill missing and TODO entries through DeepL
"""

import argparse
import copy
import logging
import sys
from typing import Any, Dict, List

from locales.flat_catalog import flatten, get_value_at_path, set_value_at_path
from services.translation_service import (
    TranslationService,
    map_locale_to_deepl_target,
    map_source_locale_to_deepl,
)
from services.tree_sync import META_PREFIX, is_untranslated
from utils.validators import InputValidator

from .base_command import BaseCommand

logger = logging.getLogger(__name__)


def keys_to_translate(
    source_flat: Dict[str, Any],
    locale_flat: Dict[str, Any],
    rewrite_existing: bool = False
) -> List[str]:
    """
    Select source keys whose locale value should be (re)translated

    Only text leaves outside `_meta.` qualify. Without rewrite_existing a key
    qualifies when the locale lacks it or still holds a TODO marker.
    """
    keys = []
    for key in sorted(source_flat):
        if key.startswith(META_PREFIX) or not isinstance(source_flat[key], str):
            continue
        if rewrite_existing or key not in locale_flat or is_untranslated(locale_flat[key]):
            keys.append(key)
    return keys


class TranslateCommand(BaseCommand):
    """Translates locale entries from the source locale via DeepL"""

    name = 'translate'
    help = 'Machine-translate missing or TODO entries via DeepL'

    def add_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument('--write', action='store_true', help="Write translated locales to disk (default: dry-run)")
        parser.add_argument('--rewrite-existing', action='store_true', help="Re-translate all translatable keys (not only TODO/missing)")
        parser.add_argument('--locale', default=None, help="Comma-separated locale list (e.g. --locale=de-DE,fr-FR)")
        parser.add_argument('--batch-size', default=None, help=f"Texts per API request (default: {self.settings.translator.batch_size})")

    async def run(self, args: argparse.Namespace) -> int:
        valid, error = InputValidator.validate_batch_size(args.batch_size)
        if not valid:
            print(error, file=sys.stderr)
            return 1
        batch_size = int(args.batch_size) if args.batch_size is not None else self.settings.translator.batch_size

        if not self.settings.translator.api_key:
            print('Missing DEEPL_API_KEY. Export it and retry.', file=sys.stderr)
            return 1

        source_flat = flatten(self.load_source())
        source_lang = map_source_locale_to_deepl(self.config.source_locale)
        requested = self.requested_locales(args.locale)
        targets = self.store.target_locales(self.config.source_locale, requested)

        if not targets:
            print('No target locales selected.')
            return 0

        print(f"Source locale: {self.config.source_locale}")
        print(f"Target locales: {len(targets)}")
        print(f"Mode: {'write' if args.write else 'dry-run'}{' + rewrite-existing' if args.rewrite_existing else ''}")

        service = TranslationService(self.settings.translator)
        translated_locale_count = 0
        try:
            for locale_code in targets:
                if await self.translate_locale(service, locale_code, source_flat, source_lang, batch_size, args):
                    translated_locale_count += 1
        finally:
            await service.close()

        if not args.write:
            print('\nDry run only. Re-run with --write to apply changes.')

        if translated_locale_count == 0:
            print('\nNo locale files changed.')

        return 0

    async def translate_locale(
        self,
        service: TranslationService,
        locale_code: str,
        source_flat: Dict[str, Any],
        source_lang: str,
        batch_size: int,
        args: argparse.Namespace
    ) -> bool:
        """
        Translate one locale; nothing is written unless every batch succeeds

        Returns:
            True if the locale changed
        """
        target_lang = map_locale_to_deepl_target(locale_code)
        if not target_lang:
            logger.info(f"Skipping {locale_code}: no DeepL target language")
            print(f"[{locale_code}] skipped (unsupported DeepL target language)")
            return False

        current = self.store.read(locale_code)
        updated = copy.deepcopy(current)
        keys = keys_to_translate(source_flat, flatten(current), args.rewrite_existing)

        if not keys:
            print(f"[{locale_code}] nothing to translate")
            return False

        print(f"[{locale_code}] translating {len(keys)} keys...")
        translations = await service.translate_texts(
            [source_flat[key] for key in keys], source_lang, target_lang, batch_size
        )

        for key, translated in zip(keys, translations):
            if translated and translated.strip():
                set_value_at_path(updated, key, translated)

        changed_keys = [key for key in keys if get_value_at_path(current, key) != get_value_at_path(updated, key)]
        if not changed_keys:
            print(f"[{locale_code}] no changes after translation")
            return False

        if args.write:
            self.store.write(locale_code, updated)
            print(f"[{locale_code}] wrote {len(changed_keys)} keys")
        else:
            print(f"[{locale_code}] would update {len(changed_keys)} keys")

        return True
