"""Detectors for lookup misses and fallback usage."""

import re
from typing import Optional, Tuple

from ..core.issue import Issue, IssueKind, UNKNOWN, split_full_key
from .events import FallbackEvent, LookupMissEvent

# "Could not resolve `common.save` in messages for locale `en`."
_BACKTICK_PATTERN = re.compile(r'`([^`]+)`')
_LOCALE_PATTERN = re.compile(r'locale\s+`([^`]+)`')


def detect_missing_translation(event: LookupMissEvent) -> Issue:
    """A lookup miss is always a missing-translation issue."""
    return Issue(
        kind=IssueKind.MISSING_TRANSLATION,
        locale=event.locale,
        namespace=event.namespace,
        key=event.key,
        location=event.location,
        message=f"Missing translation for '{event.full_key}' in locale '{event.locale}'",
        first_seen_at=event.observed_at,
        last_seen_at=event.observed_at,
    )


def detect_fallback_usage(event: FallbackEvent) -> Optional[Issue]:
    """
    Fallback value substituted for the requested locale.

    Returns None when the "fallback" is the requested locale itself.
    """
    if event.fallback_locale == event.locale:
        return None

    return Issue(
        kind=IssueKind.FALLBACK_USED,
        locale=event.locale,
        namespace=event.namespace,
        key=event.key,
        location=event.location,
        fallback_locale=event.fallback_locale,
        message=(
            f"'{event.full_key}' is not translated for '{event.locale}', "
            f"showing the '{event.fallback_locale}' value instead"
        ),
        first_seen_at=event.observed_at,
        last_seen_at=event.observed_at,
    )


def parse_missing_message(message: str) -> Tuple[str, str, str, Optional[str]]:
    """
    Extract the key from an intl library "missing message" error.

    Args:
        message: Error text such as
            "Could not resolve `common.save` in messages for locale `en`."

    Returns:
        (full_key, namespace, key, locale) - full_key is "unknown" when the
        message names no key; namespace and locale may be None
    """
    locale_match = _LOCALE_PATTERN.search(message or '')
    locale = locale_match.group(1) if locale_match else None

    full_key = UNKNOWN
    for match in _BACKTICK_PATTERN.finditer(message or ''):
        if locale_match and match.start(1) == locale_match.start(1):
            continue
        full_key = match.group(1)
        break

    namespace, key = split_full_key(full_key)
    return full_key, namespace, key, locale
