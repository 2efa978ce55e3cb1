"""Translation health engine: the control surface over store, controller and scores."""

import logging
from threading import RLock
from typing import Callable, Iterable, List, Mapping, Optional, Union

from ..detectors import (
    DirectionObservation,
    FallbackEvent,
    HardcodedCandidate,
    LookupMissEvent,
    detect,
    parse_missing_message,
)
from ..detectors.hardcoded import Heuristic
from .codec import ImportResult, export_document, parse_document
from .controller import DetectionConfig, DetectionController
from .health_calculator import HealthCalculator, HealthSnapshot, summarize
from .issue import Issue, IssueKind, IssueStatus, utcnow
from .store import IssueFilter, IssueStore

logger = logging.getLogger('translation_health.engine')

FeatureGate = Union[bool, Callable[[], bool]]


class TranslationHealthEngine:
    """
    Runtime translation health tracking.

    Events go through the detection controller, the matching detector and
    the issue store; the health snapshot is recomputed from the full store
    after every mutation (``auto_recalculate``) or on ``recalculate_health``.

    When the feature gate is off the engine is inert: observers return
    None, mutators do nothing, and ``health`` reports a fixed disabled
    snapshot. Reads keep working.
    """

    def __init__(
        self,
        known_locales: Iterable[str] = ('en',),
        store: Optional[IssueStore] = None,
        default_config: Optional[DetectionConfig] = None,
        weights: Optional[Mapping] = None,
        heuristic: Optional[Heuristic] = None,
        rtl_locales: Optional[Iterable[str]] = None,
        feature_enabled: FeatureGate = True,
        auto_recalculate: bool = True,
    ):
        """
        Initialize engine.

        Args:
            known_locales: Locales the health score covers
            store: Issue store to use (default: a new one)
            default_config: Initial detection config, restored by ``reset``
            weights: Severity -> penalty override
            heuristic: Hardcoded string classifier override
            rtl_locales: Extra right-to-left locales
            feature_enabled: Feature gate, a bool or a zero-argument callable
            auto_recalculate: Recompute health after every mutation
        """
        self.known_locales = list(dict.fromkeys(known_locales))
        self.store = store if store is not None else IssueStore()
        self.controller = DetectionController(default_config)
        self.weights = dict(weights or {})
        self.heuristic = heuristic
        self.rtl_locales = list(rtl_locales or ())
        self.auto_recalculate = auto_recalculate
        self._feature_enabled = feature_enabled
        self._lock = RLock()
        self._health = self._compute()

    # Feature gate

    @property
    def feature_enabled(self) -> bool:
        gate = self._feature_enabled
        return bool(gate() if callable(gate) else gate)

    def _inert(self, operation: str) -> bool:
        if self.feature_enabled:
            return False
        logger.debug("Engine disabled, ignoring %s", operation)
        return True

    # Read accessors

    @property
    def config(self) -> DetectionConfig:
        return self.controller.config

    @property
    def is_detecting(self) -> bool:
        return self.feature_enabled and self.controller.is_detecting

    @property
    def health(self) -> HealthSnapshot:
        if not self.feature_enabled:
            return HealthSnapshot.disabled_snapshot()
        return self._health

    def issues(
        self,
        kind: Optional[IssueKind] = None,
        locale: Optional[str] = None,
        status: Optional[IssueStatus] = None,
    ) -> List[Issue]:
        """Issues matching the filter, most recently seen first."""
        return self.store.list(IssueFilter(kind=kind, locale=locale, status=status))

    def get_issue(self, issue_id: str) -> Optional[Issue]:
        return self.store.get(issue_id)

    def summary(self) -> dict:
        """Open issue counts by kind and severity, all issues by status."""
        return summarize(self.store.snapshot())

    # Inbound events

    def observe(self, event) -> Optional[Issue]:
        """
        Feed one runtime event through gate, detector and store.

        Returns:
            The stored issue, or None when nothing was recorded
        """
        if self._inert('observe'):
            return None

        if not self.controller.is_kind_enabled(event.kind):
            return None

        issue = detect(event, heuristic=self.heuristic, rtl_locales=self.rtl_locales)
        if issue is None:
            return None

        with self._lock:
            stored = self.store.record(issue)
            self._after_mutation()
        return stored

    def report_missing(self, key: str, locale: str, namespace: Optional[str] = None,
                       route: Optional[str] = None, component_name: Optional[str] = None,
                       component_type: Optional[str] = None) -> Optional[Issue]:
        """Lookup miss callback."""
        return self.observe(LookupMissEvent(
            key=key, locale=locale, namespace=namespace, route=route,
            component_name=component_name, component_type=component_type,
        ))

    def report_fallback(self, key: str, locale: str, fallback_locale: str,
                        namespace: Optional[str] = None, route: Optional[str] = None,
                        component_name: Optional[str] = None,
                        component_type: Optional[str] = None) -> Optional[Issue]:
        """Fallback substitution callback."""
        return self.observe(FallbackEvent(
            key=key, locale=locale, fallback_locale=fallback_locale, namespace=namespace,
            route=route, component_name=component_name, component_type=component_type,
        ))

    def report_hardcoded(self, text: str, route: Optional[str] = None,
                         component_name: Optional[str] = None,
                         component_type: Optional[str] = None) -> Optional[Issue]:
        """Externally supplied hardcoded string candidate."""
        return self.observe(HardcodedCandidate(
            text=text, route=route, component_name=component_name, component_type=component_type,
        ))

    def report_rtl(self, locale: str, properties: Iterable[str] = (), direction: Optional[str] = None,
                   route: Optional[str] = None, component_name: Optional[str] = None,
                   component_type: Optional[str] = None) -> Optional[Issue]:
        """Layout direction observation."""
        return self.observe(DirectionObservation(
            locale=locale, properties=tuple(properties), direction=direction, route=route,
            component_name=component_name, component_type=component_type,
        ))

    def handle_lookup_error(self, message: str, locale: str, route: Optional[str] = None) -> Optional[Issue]:
        """
        Adapter for intl library error callbacks.

        Args:
            message: Error text, e.g. "Could not resolve `common.save` in
                messages for locale `en`."
            locale: Active locale
            route: Current route
        """
        full_key, namespace, key, _ = parse_missing_message(message)
        issue = self.report_missing(key=key, locale=locale, namespace=namespace, route=route)
        if issue is not None:
            logger.debug("Missing translation detected: %s for locale %s", full_key, locale)
        return issue

    # Mutating accessors

    def record(self, issue: Issue) -> Optional[Issue]:
        """
        Record an issue built outside the detectors.

        Still subject to the global switch and the kind's toggle.
        """
        if self._inert('record'):
            return None
        if not self.controller.is_kind_enabled(issue.kind):
            return None
        with self._lock:
            stored = self.store.record(issue)
            self._after_mutation()
        return stored

    def resolve(self, issue_id: str) -> bool:
        return self._transition('resolve', issue_id)

    def ignore(self, issue_id: str) -> bool:
        return self._transition('ignore', issue_id)

    def reopen(self, issue_id: str) -> bool:
        return self._transition('reopen', issue_id)

    def _transition(self, operation: str, issue_id: str) -> bool:
        if self._inert(operation):
            return False
        with self._lock:
            changed = getattr(self.store, operation)(issue_id)
            if changed:
                self._after_mutation()
        return changed

    def clear_resolved(self) -> int:
        if self._inert('clear_resolved'):
            return 0
        with self._lock:
            removed = self.store.clear_resolved()
            self._after_mutation()
        logger.info("Cleared %d resolved issue(s)", removed)
        return removed

    def clear_all(self) -> int:
        if self._inert('clear_all'):
            return 0
        with self._lock:
            removed = self.store.clear_all()
            self._after_mutation()
        logger.info("Cleared all %d issue(s)", removed)
        return removed

    def toggle_detection(self, enabled: Optional[bool] = None) -> bool:
        """Flip or set the global detection switch; returns the new value."""
        if self._inert('toggle_detection'):
            return False
        return self.controller.toggle_detection(enabled)

    def update_config(self, partial: Optional[Mapping] = None, **changes) -> DetectionConfig:
        """Merge a partial detection config update."""
        if self._inert('update_config'):
            return self.controller.config
        return self.controller.update_config(partial, **changes)

    def reset(self) -> None:
        """Factory reset: default detection config and an empty store."""
        if self._inert('reset'):
            return
        with self._lock:
            self.controller.reset_config()
            self.store.replace([])
            self._after_mutation()
        logger.info("Translation health engine reset")

    def recalculate_health(self) -> HealthSnapshot:
        """Recompute the health snapshot from the full store."""
        if not self.feature_enabled:
            return HealthSnapshot.disabled_snapshot()
        with self._lock:
            self._health = self._compute()
            return self._health

    # Export / import

    def export_data(self, pretty: bool = True) -> str:
        """Serialize all issues and the detection config."""
        with self._lock:
            return export_document(self.store.snapshot(), self.controller.config, utcnow(), pretty=pretty)

    def import_data(self, text: str) -> ImportResult:
        """
        Replace store contents and detection config with an exported document.

        All-or-nothing: a rejected document leaves the engine untouched.
        """
        if self._inert('import_data'):
            return ImportResult.failure("engine disabled")

        result = parse_document(text)
        if not result.success:
            logger.warning("Import rejected: %s", result.reason)
            return result

        with self._lock:
            self.store.replace(result.issues)
            self.controller.replace(result.config)
            self._after_mutation()

        logger.info("Imported %d issue(s)", len(result.issues))
        return result

    # Internals

    def _after_mutation(self) -> None:
        if self.auto_recalculate:
            self._health = self._compute()

    def _compute(self) -> HealthSnapshot:
        return HealthCalculator.calculate(
            self.store.snapshot(),
            self.known_locales,
            observed_keys=self.store.observed_keys(),
            weights=self.weights,
        )
