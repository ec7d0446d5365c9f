"""
File management utilities
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Iterable, List, Optional
import logging

from .exceptions import SourceDirectoryError

logger = logging.getLogger(__name__)


class FileManager:
    """File management utilities"""

    def __init__(self, source_extensions: Optional[Iterable[str]] = None):
        self.source_extensions = set(source_extensions or ('.svelte', '.ts', '.js'))

    def walk_source_files(self, directory: Path) -> List[Path]:
        """
        Recursively list application source files

        Hidden files and directories (leading dot) are skipped.

        Args:
            directory: Root of the source tree

        Returns:
            Sorted list of file paths whose suffix is a source extension

        Raises:
            SourceDirectoryError: If the directory does not exist
        """
        directory = Path(directory)
        if not directory.is_dir():
            raise SourceDirectoryError(directory)

        output: List[Path] = []
        self._walk(directory, output)
        return sorted(output)

    def _walk(self, directory: Path, output: List[Path]):
        for entry in directory.iterdir():
            if entry.name.startswith('.'):
                continue
            if entry.is_dir():
                self._walk(entry, output)
            elif entry.is_file() and entry.suffix in self.source_extensions:
                output.append(entry)

    def read_text(self, file_path: Path) -> str:
        with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()

    def read_json(self, file_path: Path) -> Any:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def write_json_atomic(self, file_path: Path, data: Any, indent: str = '\t'):
        """Serialize JSON next to the target and move it into place"""
        file_path = Path(file_path)
        self.ensure_directory(file_path.parent)
        serialized = json.dumps(data, ensure_ascii=False, indent=indent) + '\n'

        fd, tmp_path = tempfile.mkstemp(prefix=f".{file_path.name}.", suffix='.tmp', dir=file_path.parent)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(serialized)
            os.replace(tmp_path, file_path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug(f"Wrote {file_path}")

    def ensure_directory(self, directory):
        """Ensure directory exists"""
        os.makedirs(directory, exist_ok=True)
