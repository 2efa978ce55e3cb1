"""Runtime events the detectors classify."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, Optional

from ..core.issue import IssueKind, IssueLocation, build_full_key, utcnow


@dataclass(frozen=True)
class LookupMissEvent:
    """A translation lookup that found no message for the locale."""
    kind: ClassVar[IssueKind] = IssueKind.MISSING_TRANSLATION

    key: str
    locale: str
    namespace: Optional[str] = None
    route: Optional[str] = None
    component_name: Optional[str] = None
    component_type: Optional[str] = None
    observed_at: datetime = field(default_factory=utcnow)

    @property
    def full_key(self) -> str:
        return build_full_key(self.namespace, self.key)

    @property
    def location(self) -> IssueLocation:
        return IssueLocation.create(self.route, self.component_name, self.component_type)


@dataclass(frozen=True)
class FallbackEvent:
    """A lookup served from ``fallback_locale`` because ``locale`` had no value."""
    kind: ClassVar[IssueKind] = IssueKind.FALLBACK_USED

    key: str
    locale: str
    fallback_locale: str
    namespace: Optional[str] = None
    route: Optional[str] = None
    component_name: Optional[str] = None
    component_type: Optional[str] = None
    observed_at: datetime = field(default_factory=utcnow)

    @property
    def full_key(self) -> str:
        return build_full_key(self.namespace, self.key)

    @property
    def location(self) -> IssueLocation:
        return IssueLocation.create(self.route, self.component_name, self.component_type)


@dataclass(frozen=True)
class HardcodedCandidate:
    """A rendered string supplied from outside that may be untranslated text."""
    kind: ClassVar[IssueKind] = IssueKind.HARDCODED_STRING

    text: str
    route: Optional[str] = None
    component_name: Optional[str] = None
    component_type: Optional[str] = None
    observed_at: datetime = field(default_factory=utcnow)

    @property
    def location(self) -> IssueLocation:
        return IssueLocation.create(self.route, self.component_name, self.component_type)


@dataclass(frozen=True)
class DirectionObservation:
    """
    Styling observed on a rendered component.

    ``properties`` holds the style properties or utility classes the
    component uses (``margin-left``, ``pl-4``, ``text-right``...), and
    ``direction`` the ``dir`` attribute it declares, if any.
    """
    kind: ClassVar[IssueKind] = IssueKind.RTL_VIOLATION

    locale: str
    properties: tuple = ()
    direction: Optional[str] = None
    route: Optional[str] = None
    component_name: Optional[str] = None
    component_type: Optional[str] = None
    observed_at: datetime = field(default_factory=utcnow)

    @property
    def location(self) -> IssueLocation:
        return IssueLocation.create(self.route, self.component_name, self.component_type)

    def __post_init__(self):
        object.__setattr__(self, 'properties', tuple(self.properties))
