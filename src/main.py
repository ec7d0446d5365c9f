"""
Main application entry point
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add current directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from config import load_settings
from commands import register_commands

logger = logging.getLogger(__name__)


def configure_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stderr)]
    )


def build_parser(settings) -> tuple:
    parser = argparse.ArgumentParser(
        prog='catalog-guard',
        description="Keep locale catalogs consistent with source code and with each other"
    )
    commands = register_commands(parser, settings)
    return parser, commands


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    configure_logging(settings.log_level)
    parser, commands = build_parser(settings)
    args = parser.parse_args(argv)

    logger.debug(f"Running command: {args.command}")
    return await commands[args.command].execute(args)


def run():
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        sys.exit(130)


if __name__ == '__main__':
    run()
