"""Core modules for translation health tracking."""

from .issue import (
    Issue,
    IssueKind,
    IssueLocation,
    IssueStatus,
    IssueValidationError,
    Severity,
    build_full_key,
    make_fingerprint,
)
from .store import IssueFilter, IssueStore
from .health_calculator import HealthCalculator, HealthSnapshot, LocaleHealth, summarize
from .controller import DetectionConfig, DetectionConfigError, DetectionController
from .codec import ImportResult, export_document, parse_document

__all__ = [
    'Issue',
    'IssueKind',
    'IssueLocation',
    'IssueStatus',
    'IssueValidationError',
    'Severity',
    'build_full_key',
    'make_fingerprint',
    'IssueFilter',
    'IssueStore',
    'HealthCalculator',
    'HealthSnapshot',
    'LocaleHealth',
    'summarize',
    'DetectionConfig',
    'DetectionConfigError',
    'DetectionController',
    'ImportResult',
    'export_document',
    'parse_document',
]
