"""Issue model: one tracked localization defect and its lifecycle."""

import hashlib
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple


UNKNOWN = "unknown"
ALL_LOCALES = "all"


class IssueValidationError(ValueError):
    """Raised when an Issue is constructed with invalid data."""


class IssueKind(str, Enum):
    """Closed set of defect classes the engine tracks."""
    MISSING_TRANSLATION = "missing-translation"
    FALLBACK_USED = "fallback-used"
    HARDCODED_STRING = "hardcoded-string"
    RTL_VIOLATION = "rtl-violation"


class Severity(str, Enum):
    """Issue severity, used for score weighting."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IssueStatus(str, Enum):
    """Issue lifecycle state."""
    OPEN = "open"
    RESOLVED = "resolved"
    IGNORED = "ignored"


SEVERITY_BY_KIND = {
    IssueKind.MISSING_TRANSLATION: Severity.HIGH,
    IssueKind.FALLBACK_USED: Severity.MEDIUM,
    IssueKind.HARDCODED_STRING: Severity.LOW,
    IssueKind.RTL_VIOLATION: Severity.MEDIUM,
}

# Kinds that are not tied to a single translation key / locale
LOCALE_AGNOSTIC_KINDS = frozenset({IssueKind.HARDCODED_STRING})


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def normalize_text(text: Optional[str]) -> str:
    """Collapse whitespace runs so reflowed copies of a string compare equal."""
    return " ".join((text or "").split())


def build_full_key(namespace: Optional[str], key: str) -> str:
    """
    Join namespace and key the way lookups address them.

    Examples:
        build_full_key("common", "save") -> "common.save"
        build_full_key(None, "save") -> "save"
    """
    if namespace:
        return f"{namespace}.{key}" if key else namespace
    return key or ""


def split_full_key(full_key: str) -> Tuple[Optional[str], str]:
    """
    Split a dotted key into (namespace, key).

    The first segment is the namespace; keys without a dot have none.
    """
    namespace, sep, key = full_key.partition(".")
    if sep and namespace and key:
        return namespace, key
    return None, full_key


def make_fingerprint(kind, full_key: str, locale: str, route: str) -> str:
    """
    Deterministic issue id for a (kind, fullKey, locale, route) tuple.

    The same logical defect always maps to the same id, so repeated
    reports coalesce into a single record.
    """
    kind = IssueKind(kind)
    raw = "|".join([kind.value, full_key or "", locale or "", route or ""])
    digest = hashlib.sha1(raw.encode("utf-8")).hexdigest()[:16]
    return f"{kind.value}:{digest}"


@dataclass(frozen=True)
class IssueLocation:
    """Best-effort provenance of an issue."""
    route: str = UNKNOWN
    component_name: str = UNKNOWN
    component_type: str = UNKNOWN

    @classmethod
    def create(
        cls,
        route: Optional[str] = None,
        component_name: Optional[str] = None,
        component_type: Optional[str] = None,
    ) -> 'IssueLocation':
        """Build a location, replacing missing values with "unknown"."""
        return cls(
            route=route or UNKNOWN,
            component_name=component_name or UNKNOWN,
            component_type=component_type or UNKNOWN,
        )


@dataclass
class Issue:
    """
    A single detected localization defect.

    Only ``status``, ``last_seen_at`` and ``occurrence_count`` change after
    construction; everything else identifies the defect.
    """
    kind: IssueKind
    locale: str
    key: str
    namespace: Optional[str] = None
    location: IssueLocation = field(default_factory=IssueLocation)
    message: str = ""
    fallback_locale: Optional[str] = None
    text: Optional[str] = None
    status: IssueStatus = IssueStatus.OPEN
    first_seen_at: datetime = field(default_factory=utcnow)
    last_seen_at: Optional[datetime] = None
    occurrence_count: int = 1
    id: str = ""
    severity: Optional[Severity] = None

    def __post_init__(self):
        try:
            self.kind = IssueKind(self.kind)
        except ValueError:
            raise IssueValidationError(f"Unknown issue kind: {self.kind!r}") from None

        try:
            self.status = IssueStatus(self.status)
        except ValueError:
            raise IssueValidationError(f"Unknown issue status: {self.status!r}") from None

        if self.severity is None:
            self.severity = SEVERITY_BY_KIND[self.kind]
        else:
            try:
                self.severity = Severity(self.severity)
            except ValueError:
                raise IssueValidationError(f"Unknown severity: {self.severity!r}") from None

        if not self.locale:
            raise IssueValidationError("Issue locale cannot be empty")

        if not self.full_key and self.kind not in LOCALE_AGNOSTIC_KINDS:
            raise IssueValidationError(f"{self.kind.value} issue requires a translation key")

        if self.occurrence_count < 1:
            raise IssueValidationError(
                f"occurrence_count must be positive, got {self.occurrence_count}"
            )

        if not isinstance(self.first_seen_at, datetime):
            raise IssueValidationError(f"first_seen_at must be a datetime, got {self.first_seen_at!r}")
        self.first_seen_at = to_utc(self.first_seen_at)

        if self.last_seen_at is None:
            self.last_seen_at = self.first_seen_at
        elif not isinstance(self.last_seen_at, datetime):
            raise IssueValidationError(f"last_seen_at must be a datetime, got {self.last_seen_at!r}")
        else:
            self.last_seen_at = to_utc(self.last_seen_at)

        if not self.id:
            self.id = self.fingerprint

    @property
    def full_key(self) -> str:
        """Namespace-qualified key (``namespace.key`` or just ``key``)."""
        return build_full_key(self.namespace, self.key)

    @property
    def identity_key(self) -> str:
        """
        Key part of the fingerprint.

        Hardcoded strings only carry a suggested key, which is lossy (first
        words, no punctuation), so they are identified by their text.
        """
        if self.kind == IssueKind.HARDCODED_STRING and self.text:
            return normalize_text(self.text)
        return self.full_key

    @property
    def fingerprint(self) -> str:
        """De-duplication id derived from kind, key (or text), locale and route."""
        return make_fingerprint(self.kind, self.identity_key, self.locale, self.location.route)

    @property
    def is_open(self) -> bool:
        return self.status == IssueStatus.OPEN

    def copy(self) -> 'Issue':
        """Detached copy, safe to hand out of the store."""
        return replace(self)
