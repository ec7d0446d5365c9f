"""
Static extraction of catalog keys used by application source code
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Set

from models.extraction import ExtractionResult
from utils.file_utils import FileManager

logger = logging.getLogger(__name__)

# Both lookup spellings: the `$_(...)` store and a bare `t(...)` call
# (not a method call such as `foo.t(` or part of another identifier).
_CALL_PREFIXES = (r'\$_\(\s*', r'(?:^|[^\w$.])t\(\s*')

LITERAL_CALL_PATTERNS = [
    re.compile(prefix + r'([\'"])([^\'"`]+)\1', re.MULTILINE) for prefix in _CALL_PREFIXES
]
TEMPLATE_CALL_PATTERNS = [
    re.compile(prefix + r'`([^`]+)`', re.MULTILINE) for prefix in _CALL_PREFIXES
]
VARIABLE_CALL_PATTERNS = [
    re.compile(prefix + r'([A-Za-z_$][\w$.]*)\s*(?:,|\))', re.MULTILINE) for prefix in _CALL_PREFIXES
]
KEY_LIKE_STRING = re.compile(r'([\'"])([A-Za-z0-9]+(?:\.[A-Za-z0-9_-]+)+)\1')
TEMPLATE_INTERPOLATION = re.compile(r'\$\{[^}]+\}')

WILDCARD = '*'


def wildcard_to_regex(pattern: str) -> Pattern:
    """
    Compile a wildcard key pattern

    Literal segments are escaped; each `*` matches one or more characters
    other than the `.` separator.
    """
    escaped = re.escape(pattern)
    return re.compile(escaped.replace(re.escape(WILDCARD), r'[^.]+'))


class _Collector:
    """Accumulates matches from all passes over all files"""

    def __init__(self):
        self.static_keys: Set[str] = set()
        self.template_patterns: Set[str] = set()
        self.template_resolved_keys: Set[str] = set()
        self.variable_expressions: Set[str] = set()
        self.literal_referenced_keys: Set[str] = set()


class KeyExtractor:
    """Recovers the set of catalog keys referenced by application code"""

    def __init__(self, base_keys: Iterable[str], file_manager: Optional[FileManager] = None):
        """
        Args:
            base_keys: Known keys of the source locale catalog
            file_manager: File helper that walks the source tree
        """
        self.base_keys: List[str] = sorted(base_keys)
        self.base_key_set: Set[str] = set(self.base_keys)
        self.file_manager = file_manager or FileManager()

    def extract_from_directory(self, source_dir: Path) -> ExtractionResult:
        """Scan every source file under a directory"""
        source_files = self.file_manager.walk_source_files(source_dir)
        logger.info(f"Scanning {len(source_files)} source files in {source_dir}")

        collector = _Collector()
        for file_path in source_files:
            self._scan(self.file_manager.read_text(file_path), collector)

        return self._result(collector, len(source_files))

    def extract_from_texts(self, contents: Iterable[str]) -> ExtractionResult:
        """Scan in-memory source texts, one per file"""
        collector = _Collector()
        count = 0
        for content in contents:
            self._scan(content, collector)
            count += 1
        return self._result(collector, count)

    def _scan(self, content: str, collector: _Collector):
        self._extract_static_calls(content, collector)
        self._extract_template_calls(content, collector)
        self._extract_variable_calls(content, collector)
        self._extract_literal_references(content, collector)

    def _extract_static_calls(self, content: str, collector: _Collector):
        for pattern in LITERAL_CALL_PATTERNS:
            for match in pattern.finditer(content):
                collector.static_keys.add(match.group(2))

    def _extract_template_calls(self, content: str, collector: _Collector):
        for pattern in TEMPLATE_CALL_PATTERNS:
            for match in pattern.finditer(content):
                body = match.group(1).strip()
                if '${' not in body:
                    collector.static_keys.add(body)
                    continue

                wildcard = TEMPLATE_INTERPOLATION.sub(WILDCARD, body)
                collector.template_patterns.add(wildcard)
                regex = wildcard_to_regex(wildcard)
                for key in self.base_keys:
                    if regex.fullmatch(key):
                        collector.template_resolved_keys.add(key)

    def _extract_variable_calls(self, content: str, collector: _Collector):
        for pattern in VARIABLE_CALL_PATTERNS:
            for match in pattern.finditer(content):
                collector.variable_expressions.add(match.group(1))

    def _extract_literal_references(self, content: str, collector: _Collector):
        for match in KEY_LIKE_STRING.finditer(content):
            value = match.group(2)
            if value in self.base_key_set:
                collector.literal_referenced_keys.add(value)

    @staticmethod
    def _result(collector: _Collector, files_scanned: int) -> ExtractionResult:
        return ExtractionResult(
            source_files_scanned=files_scanned,
            static_keys=list(collector.static_keys),
            template_patterns=list(collector.template_patterns),
            template_resolved_keys=list(collector.template_resolved_keys),
            variable_expressions=list(collector.variable_expressions),
            literal_referenced_keys=list(collector.literal_referenced_keys),
        )
