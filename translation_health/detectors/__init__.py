"""Detectors: pure functions turning one runtime event into at most one Issue."""

from typing import Callable, Dict, Optional

from ..core.issue import Issue, IssueKind
from .events import DirectionObservation, FallbackEvent, HardcodedCandidate, LookupMissEvent
from .hardcoded import HardcodedHeuristic, detect_hardcoded_string, filter_candidates, suggest_key
from .rtl import detect_rtl_violation, find_physical_properties
from .translation import detect_fallback_usage, detect_missing_translation, parse_missing_message

Detector = Callable[..., Optional[Issue]]

DETECTORS: Dict[IssueKind, Detector] = {
    IssueKind.MISSING_TRANSLATION: detect_missing_translation,
    IssueKind.FALLBACK_USED: detect_fallback_usage,
    IssueKind.HARDCODED_STRING: detect_hardcoded_string,
    IssueKind.RTL_VIOLATION: detect_rtl_violation,
}

_unhandled = set(IssueKind) - set(DETECTORS)
if _unhandled:
    raise ImportError(f"No detector registered for: {sorted(k.value for k in _unhandled)}")


def detect(event, heuristic=None, rtl_locales=None) -> Optional[Issue]:
    """
    Run the detector registered for ``event.kind``.

    Args:
        event: One of the event types in ``detectors.events``
        heuristic: Hardcoded string classifier override
        rtl_locales: Extra right-to-left locales

    Returns:
        Issue or None
    """
    kind = IssueKind(event.kind)
    detector = DETECTORS[kind]
    if kind == IssueKind.HARDCODED_STRING:
        return detector(event, heuristic=heuristic)
    if kind == IssueKind.RTL_VIOLATION:
        return detector(event, rtl_locales=rtl_locales)
    return detector(event)


__all__ = [
    'DETECTORS',
    'detect',
    'LookupMissEvent',
    'FallbackEvent',
    'HardcodedCandidate',
    'DirectionObservation',
    'HardcodedHeuristic',
    'detect_missing_translation',
    'detect_fallback_usage',
    'detect_hardcoded_string',
    'detect_rtl_violation',
    'find_physical_properties',
    'filter_candidates',
    'suggest_key',
    'parse_missing_message',
]
