"""
Key extraction result model
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Iterable, Set


@dataclass
class ExtractionResult:
    """Catalog keys recovered from application source code"""
    source_files_scanned: int = 0
    static_keys: List[str] = field(default_factory=list)
    template_patterns: List[str] = field(default_factory=list)
    template_resolved_keys: List[str] = field(default_factory=list)
    variable_expressions: List[str] = field(default_factory=list)
    literal_referenced_keys: List[str] = field(default_factory=list)

    def __post_init__(self):
        # Every sequence is deduplicated and sorted
        self.static_keys = sorted(set(self.static_keys))
        self.template_patterns = sorted(set(self.template_patterns))
        self.template_resolved_keys = sorted(set(self.template_resolved_keys))
        self.variable_expressions = sorted(set(self.variable_expressions))
        self.literal_referenced_keys = sorted(set(self.literal_referenced_keys))

    @property
    def used_keys(self) -> Set[str]:
        """Keys that count as referenced by code"""
        return set(self.static_keys) | set(self.template_resolved_keys) | set(self.literal_referenced_keys)

    def missing_in_source(self, source_keys: Iterable[str]) -> List[str]:
        """Static keys called from code but absent from the source catalog"""
        known = set(source_keys)
        return [key for key in self.static_keys if key not in known]

    def to_dict(self, source_locale: str, source_keys: Iterable[str]) -> Dict[str, Any]:
        """Convert to the JSON report printed by the extract command"""
        source_keys = list(source_keys)
        return {
            'sourceLocale': source_locale,
            'sourceFilesScanned': self.source_files_scanned,
            'keyCounts': {
                'sourceLocaleKeys': len(source_keys),
                'usedKeys': len(self.used_keys),
                'staticCallKeys': len(self.static_keys),
                'templateResolvedKeys': len(self.template_resolved_keys),
                'literalReferencedKeys': len(self.literal_referenced_keys),
            },
            'staticCallKeys': self.static_keys,
            'templatePatterns': self.template_patterns,
            'templateResolvedKeys': self.template_resolved_keys,
            'literalReferencedKeys': self.literal_referenced_keys,
            'variableExpressions': self.variable_expressions,
            'missingInSourceLocale': self.missing_in_source(source_keys),
        }
