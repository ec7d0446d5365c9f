"""
Sync command: reshape locale catalogs to the source catalog
"""

import argparse
import logging

from models.sync import SyncStats
from services.tree_sync import sync_locale_tree

from .base_command import BaseCommand

logger = logging.getLogger(__name__)


class SyncCommand(BaseCommand):
    """Adds missing keys as TODO markers and prunes keys the source dropped"""

    name = 'sync'
    help = 'Synchronize locale catalog structure with the source locale'

    def add_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument('--write', action='store_true', help="Write synchronized locales to disk (default: dry-run)")
        parser.add_argument('--keep-extra', action='store_true', help="Keep locale keys missing from the source locale")
        parser.add_argument('--locale', default=None, help="Comma-separated locale list (e.g. --locale=de-DE,fr-FR)")

    async def run(self, args: argparse.Namespace) -> int:
        source_tree = self.load_source()
        requested = self.requested_locales(args.locale)
        changed_locale_count = 0

        for locale_code in self.store.target_locales(self.config.source_locale, requested):
            current = self.store.read(locale_code)
            stats = SyncStats()
            synced = sync_locale_tree(source_tree, current, locale_code, '', stats, args.keep_extra)

            if not stats.changed:
                print(f"[{locale_code}] already in sync")
                continue

            changed_locale_count += 1
            print(f"\n[{locale_code}] changes")
            print(f"- add missing: {len(stats.added)}")
            print(f"- remove extra: {len(stats.removed)}")
            logger.debug(f"[{locale_code}] added={stats.added} removed={stats.removed}")

            if args.write:
                path = self.store.write(locale_code, synced)
                print(f"- wrote: {path}")

        if not args.write:
            print('\nDry run only. Re-run with --write to apply changes.')

        if changed_locale_count == 0:
            print('\nNo locale changes required.')

        return 0
