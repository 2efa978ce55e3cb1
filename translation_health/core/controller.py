"""Detection controller: decides which defect classes may be recorded."""

import logging
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .issue import IssueKind

logger = logging.getLogger('translation_health.controller')


class DetectionConfigError(ValueError):
    """Raised on an invalid detection config update."""


@dataclass(frozen=True)
class DetectionConfig:
    """Global switch plus one toggle per defect class."""
    enabled: bool = False
    detect_missing_keys: bool = True
    detect_fallback_usage: bool = True
    detect_hardcoded_strings: bool = True
    detect_rtl_issues: bool = True

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


# Which toggle gates which detector
TOGGLE_BY_KIND = {
    IssueKind.MISSING_TRANSLATION: 'detect_missing_keys',
    IssueKind.FALLBACK_USED: 'detect_fallback_usage',
    IssueKind.HARDCODED_STRING: 'detect_hardcoded_strings',
    IssueKind.RTL_VIOLATION: 'detect_rtl_issues',
}

CONFIG_FIELDS = tuple(f.name for f in fields(DetectionConfig))


class DetectionController:
    """
    Owns the DetectionConfig.

    Two axes: the global ``enabled`` flag and the per-kind toggles. Turning
    detection off only stops new issues; it never touches the store.
    """

    def __init__(self, defaults: Optional[DetectionConfig] = None):
        self._defaults = defaults or DetectionConfig()
        self._config = self._defaults

    @property
    def config(self) -> DetectionConfig:
        return self._config

    @property
    def defaults(self) -> DetectionConfig:
        return self._defaults

    @property
    def is_detecting(self) -> bool:
        return self._config.enabled

    def is_kind_enabled(self, kind) -> bool:
        """True when both the global switch and the kind's toggle are on."""
        if not self._config.enabled:
            return False
        return getattr(self._config, TOGGLE_BY_KIND[IssueKind(kind)])

    def toggle_detection(self, enabled: Optional[bool] = None) -> bool:
        """
        Flip the global switch, or set it when ``enabled`` is given.

        Returns:
            New value of the switch
        """
        value = (not self._config.enabled) if enabled is None else bool(enabled)
        self._config = replace(self._config, enabled=value)
        logger.info("Detection %s", "started" if value else "paused")
        return value

    def update_config(self, partial: Optional[Mapping[str, Any]] = None, **changes: Any) -> DetectionConfig:
        """
        Merge a partial update; unspecified fields keep their value.

        Raises:
            DetectionConfigError: Unknown field or non-boolean value
        """
        updates = dict(partial or {})
        updates.update(changes)

        errors = []
        for name, value in updates.items():
            if name not in CONFIG_FIELDS:
                errors.append(f"Unknown detection option '{name}'")
            elif not isinstance(value, bool):
                errors.append(f"Detection option '{name}' must be a boolean, got {value!r}")
        if errors:
            raise DetectionConfigError("; ".join(errors))

        self._config = replace(self._config, **updates)
        logger.debug("Detection config updated: %s", updates)
        return self._config

    def replace(self, config: DetectionConfig) -> None:
        """Install a complete config (import)."""
        self._config = config

    def reset_config(self) -> DetectionConfig:
        """Restore factory defaults."""
        self._config = self._defaults
        return self._config
