"""Configuration management for translation-health."""

import os
import re
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict

from .validators import is_valid_locale_code

CONFIG_FILENAME = '.translation-health.yml'

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off'}


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Configuration validation failed: {'; '.join(errors)}")


class ConfigValidationWarning:
    """Represents a configuration warning (non-fatal)."""

    def __init__(self, message: str):
        self.message = message

    def __str__(self):
        return self.message


@dataclass
class ProjectConfig:
    """Project configuration."""
    name: str = "Unnamed Project"


@dataclass
class LocalesConfig:
    """Locales the health score is computed for."""
    default: str = "en"
    supported: List[str] = field(default_factory=lambda: ["en"])
    # Extra locales to treat as right-to-left besides the built-in list
    rtl: List[str] = field(default_factory=list)


@dataclass
class DetectionSettings:
    """Initial detection config (what ``reset`` restores)."""
    enabled: bool = False
    detect_missing_keys: bool = True
    detect_fallback_usage: bool = True
    detect_hardcoded_strings: bool = True
    detect_rtl_issues: bool = True


@dataclass
class ScoringConfig:
    """Penalty per open issue, by severity."""
    high: int = 10
    medium: int = 5
    low: int = 2


@dataclass
class HardcodedConfig:
    """Hardcoded string heuristic tuning."""
    min_length: int = 3
    min_alpha_ratio: float = 0.5
    exclude_patterns: List[str] = field(default_factory=list)


@dataclass
class FeatureConfig:
    """Feature gate for the whole engine."""
    enabled: bool = True
    env_override: str = "TRANSLATION_HEALTH_ENABLED"

    def is_enabled(self) -> bool:
        """
        Resolve the gate, letting the environment override the file.

        Unrecognised environment values are ignored.
        """
        if self.env_override:
            raw = os.environ.get(self.env_override)
            if raw is not None:
                value = raw.strip().lower()
                if value in _TRUE_VALUES:
                    return True
                if value in _FALSE_VALUES:
                    return False
        return self.enabled


@dataclass
class ReportsConfig:
    """Reports configuration."""
    formats: List[str] = field(default_factory=lambda: ["console"])
    output: str = "./translation_health_reports/"


@dataclass
class Config:
    """Main configuration class."""
    project: ProjectConfig = field(default_factory=ProjectConfig)
    locales: LocalesConfig = field(default_factory=LocalesConfig)
    detection: DetectionSettings = field(default_factory=DetectionSettings)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    hardcoded: HardcodedConfig = field(default_factory=HardcodedConfig)
    feature: FeatureConfig = field(default_factory=FeatureConfig)
    reports: ReportsConfig = field(default_factory=ReportsConfig)

    @classmethod
    def from_file(cls, config_path: Optional[Path] = None) -> 'Config':
        """Load configuration from YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

            if not config_path.exists():
                return cls()

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Build configuration from a (partial) dictionary."""
        return cls(
            project=ProjectConfig(**data.get('project', {})),
            locales=LocalesConfig(**data.get('locales', {})),
            detection=DetectionSettings(**data.get('detection', {})),
            scoring=ScoringConfig(**data.get('scoring', {})),
            hardcoded=HardcodedConfig(**data.get('hardcoded', {})),
            feature=FeatureConfig(**data.get('feature', {})),
            reports=ReportsConfig(**data.get('reports', {})),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            'project': asdict(self.project),
            'locales': asdict(self.locales),
            'detection': asdict(self.detection),
            'scoring': asdict(self.scoring),
            'hardcoded': asdict(self.hardcoded),
            'feature': asdict(self.feature),
            'reports': asdict(self.reports),
        }

    def save(self, config_path: Optional[Path] = None):
        """Save configuration to YAML file."""
        if config_path is None:
            config_path = Path.cwd() / CONFIG_FILENAME

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def validate(self, raise_on_error: bool = False) -> tuple[List[str], List[ConfigValidationWarning]]:
        """
        Validate configuration and return errors and warnings.

        Args:
            raise_on_error: If True, raise ConfigValidationError on validation errors

        Returns:
            Tuple of (errors, warnings) lists
        """
        errors = []
        warnings = []

        if not is_valid_locale_code(self.locales.default):
            errors.append(
                f"Invalid default locale: '{self.locales.default}'. "
                f"Use ISO 639-1 format (e.g., 'en', 'ar', 'pt-BR')"
            )

        if not self.locales.supported:
            warnings.append(ConfigValidationWarning(
                "No supported locales configured; overall score will always be 100"
            ))

        for locale in self.locales.supported:
            if not is_valid_locale_code(locale):
                errors.append(f"Invalid supported locale: '{locale}'. Use ISO 639-1 format")

        for locale in self.locales.rtl:
            if not is_valid_locale_code(locale):
                errors.append(f"Invalid RTL locale: '{locale}'")

        if self.locales.supported and self.locales.default not in self.locales.supported:
            warnings.append(ConfigValidationWarning(
                f"Default locale '{self.locales.default}' not in supported locales list"
            ))

        for name in ('enabled', 'detect_missing_keys', 'detect_fallback_usage',
                     'detect_hardcoded_strings', 'detect_rtl_issues'):
            if not isinstance(getattr(self.detection, name), bool):
                errors.append(f"detection.{name} must be true or false")

        for name in ('high', 'medium', 'low'):
            weight = getattr(self.scoring, name)
            if isinstance(weight, bool) or not isinstance(weight, int) or not 0 <= weight <= 100:
                errors.append(f"scoring.{name} must be an integer between 0 and 100, got {weight!r}")

        weights_valid = not any(e.startswith('scoring.') for e in errors)
        if weights_valid and not (self.scoring.high >= self.scoring.medium >= self.scoring.low):
            warnings.append(ConfigValidationWarning(
                "scoring weights are not ordered high >= medium >= low"
            ))

        if self.hardcoded.min_length < 1:
            errors.append(f"hardcoded.min_length must be at least 1, got {self.hardcoded.min_length}")

        if not 0.0 <= self.hardcoded.min_alpha_ratio <= 1.0:
            errors.append(
                f"hardcoded.min_alpha_ratio must be between 0 and 1, got {self.hardcoded.min_alpha_ratio}"
            )

        for pattern in self.hardcoded.exclude_patterns:
            try:
                re.compile(pattern)
            except re.error as e:
                errors.append(f"Invalid hardcoded.exclude_patterns entry '{pattern}': {e}")

        valid_formats = ['console', 'json', 'markdown']
        for fmt in self.reports.formats:
            if fmt not in valid_formats:
                warnings.append(ConfigValidationWarning(
                    f"Unknown report format: '{fmt}'. Valid options: {', '.join(valid_formats)}"
                ))

        if raise_on_error and errors:
            raise ConfigValidationError(errors)

        return errors, warnings

    @property
    def severity_weights(self) -> Dict[str, int]:
        return {'high': self.scoring.high, 'medium': self.scoring.medium, 'low': self.scoring.low}

    def build_engine(self, extra_locales: Optional[List[str]] = None):
        """
        Create an engine wired with this configuration.

        Args:
            extra_locales: Locales to score in addition to ``locales.supported``
        """
        from ..core.controller import DetectionConfig
        from ..core.engine import TranslationHealthEngine
        from ..detectors.hardcoded import HardcodedHeuristic

        known_locales = list(self.locales.supported)
        for locale in extra_locales or ():
            if locale not in known_locales:
                known_locales.append(locale)

        return TranslationHealthEngine(
            known_locales=known_locales,
            default_config=DetectionConfig(**asdict(self.detection)),
            weights=self.severity_weights,
            heuristic=HardcodedHeuristic(
                min_length=self.hardcoded.min_length,
                min_alpha_ratio=self.hardcoded.min_alpha_ratio,
                exclude_patterns=self.hardcoded.exclude_patterns,
            ),
            rtl_locales=self.locales.rtl,
            feature_enabled=self.feature.is_enabled,
        )


def create_default_config(project_name: Optional[str] = None) -> Config:
    """Create default configuration, optionally naming the project."""
    config = Config()
    if project_name:
        config.project.name = project_name
    return config
