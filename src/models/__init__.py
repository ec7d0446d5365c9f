"""
Data models for catalog tooling
"""

from .extraction import ExtractionResult
from .sync import SyncStats
from .report import GuardrailReport, LocaleIssues, PlaceholderMismatch, TypeDrift

__all__ = ['ExtractionResult', 'SyncStats', 'GuardrailReport', 'LocaleIssues', 'PlaceholderMismatch', 'TypeDrift']
