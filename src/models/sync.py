"""
Synchronization statistics model
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class SyncStats:
    """Dotted paths added to and removed from a locale during one sync pass"""
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added or self.removed)
