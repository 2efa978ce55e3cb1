"""
Translation Health
==================

Runtime translation health tracking for localized applications.
Collects missing translations, fallback usage, hardcoded strings and
right-to-left layout defects while the application runs, and scores
every locale from 0 to 100.

Usage:
    from translation_health import TranslationHealthEngine

    engine = TranslationHealthEngine(known_locales=['en', 'ar'])
    engine.toggle_detection(True)
    engine.report_missing('save', 'ar', namespace='common', route='/settings')
    print(f"Translation health: {engine.health.overall_score}/100")

CLI:
    translation-health init
    translation-health report health-export.json
    translation-health triage health-export.json --clear-resolved
"""

from .__version__ import __version__, __author__, __description__

# Core exports
from .core.engine import TranslationHealthEngine
from .core.issue import Issue, IssueKind, IssueStatus, Severity
from .core.health_calculator import HealthCalculator, HealthSnapshot
from .core.controller import DetectionConfig

# Configuration
from .utils.config import Config

__all__ = [
    '__version__',
    '__author__',
    '__description__',
    'TranslationHealthEngine',
    'Issue',
    'IssueKind',
    'IssueStatus',
    'Severity',
    'HealthCalculator',
    'HealthSnapshot',
    'DetectionConfig',
    'Config',
]
