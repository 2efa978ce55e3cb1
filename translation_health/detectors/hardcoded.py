"""Hardcoded string detector.

The classifier is a heuristic: on a population of candidates it produces
false positives and false negatives. It is kept as a swappable strategy so
it can be tuned without touching the store or the controller.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from ..core.issue import ALL_LOCALES, Issue, IssueKind
from ..utils.validators import alpha_ratio, is_excluded_string, sanitize_key_name
from .events import HardcodedCandidate

# (text, candidate) -> looks like untranslated user-facing text
Heuristic = Callable[[str, HardcodedCandidate], bool]

# Component type -> suggested key prefix
KEY_PREFIXES = {
    'button': 'button',
    'label': 'label',
    'text': 'text',
    'heading': 'title',
    'title': 'title',
    'alert': 'alert',
    'input': 'placeholder',
    'textfield': 'placeholder',
    'menu': 'menu',
    'link': 'link',
    'tooltip': 'tooltip',
}


@dataclass
class HardcodedHeuristic:
    """
    Default classifier for hardcoded string candidates.

    A candidate counts as user-facing text when it is long enough, is mostly
    alphabetic, and matches none of the exclusion rules (URLs, numbers,
    identifiers, CSS class lists, pure emoji, custom patterns).
    """
    min_length: int = 3
    min_alpha_ratio: float = 0.5
    exclude_patterns: List[str] = field(default_factory=list)

    def __post_init__(self):
        self._compiled = [re.compile(pattern) for pattern in self.exclude_patterns]

    def __call__(self, text: str, candidate: Optional[HardcodedCandidate] = None) -> bool:
        return self.is_user_facing(text)

    def is_user_facing(self, text: str) -> bool:
        """
        Check whether text looks like untranslated UI copy.

        Args:
            text: Candidate string

        Returns:
            True if the string should be reported
        """
        if not text:
            return False

        stripped = text.strip()
        if len(stripped) < self.min_length:
            return False

        if is_excluded_string(stripped):
            return False

        for pattern in self._compiled:
            if pattern.search(stripped):
                return False

        return alpha_ratio(stripped) >= self.min_alpha_ratio


DEFAULT_HEURISTIC = HardcodedHeuristic()


def suggest_key(text: str, component_type: Optional[str] = None) -> str:
    """
    Suggest a translation key for a hardcoded string.

    Examples:
        suggest_key("Click Me", "Button") -> "button.click.me"
    """
    prefix = KEY_PREFIXES.get((component_type or '').lower(), 'common')
    return sanitize_key_name(text, prefix=prefix)


def detect_hardcoded_string(
    candidate: HardcodedCandidate,
    heuristic: Optional[Heuristic] = None,
) -> Optional[Issue]:
    """
    Classify an externally supplied string.

    Args:
        candidate: String plus where it was rendered
        heuristic: Classifier override (default: HardcodedHeuristic())

    Returns:
        Issue for locale "all", or None when the string does not look like
        user-facing text
    """
    heuristic = heuristic or DEFAULT_HEURISTIC
    if not heuristic(candidate.text, candidate):
        return None

    text = candidate.text.strip()
    return Issue(
        kind=IssueKind.HARDCODED_STRING,
        locale=ALL_LOCALES,
        key=suggest_key(text, candidate.component_type),
        location=candidate.location,
        text=text,
        message=f"Hardcoded string \"{text[:60]}\" should use a translation key",
        first_seen_at=candidate.observed_at,
        last_seen_at=candidate.observed_at,
    )


def filter_candidates(texts: Iterable[str], heuristic: Optional[Heuristic] = None) -> List[str]:
    """Texts the heuristic would report, in input order, without duplicates."""
    heuristic = heuristic or DEFAULT_HEURISTIC
    seen = set()
    result = []
    for text in texts:
        candidate = HardcodedCandidate(text=text)
        if text not in seen and heuristic(text, candidate):
            seen.add(text)
            result.append(text)
    return result
