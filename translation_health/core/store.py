"""Issue store: the single owner of all tracked issues."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from threading import Lock
from typing import Dict, FrozenSet, Iterable, List, Optional, Set

from .issue import Issue, IssueKind, IssueStatus

logger = logging.getLogger('translation_health.store')


@dataclass(frozen=True)
class IssueFilter:
    """Optional kind / locale / status constraints for ``IssueStore.list``."""
    kind: Optional[IssueKind] = None
    locale: Optional[str] = None
    status: Optional[IssueStatus] = None

    def matches(self, issue: Issue) -> bool:
        if self.kind is not None and issue.kind != IssueKind(self.kind):
            return False
        if self.locale is not None and issue.locale != self.locale:
            return False
        if self.status is not None and issue.status != IssueStatus(self.status):
            return False
        return True


class IssueStore:
    """
    Mutable collection of issues keyed by fingerprint.

    Every mutation runs behind one lock, so concurrent reporters never
    interleave a read-modify-write. Reads return copies.

    Besides the issues themselves the store keeps an observation ledger
    (locale -> full keys ever recorded). The ledger only grows: clearing,
    resetting or replacing issues never removes entries from it.
    """

    def __init__(self):
        self._issues: Dict[str, Issue] = {}
        self._observed: Dict[str, Set[str]] = defaultdict(set)
        self._lock = Lock()

    def __len__(self) -> int:
        return len(self._issues)

    def __contains__(self, issue_id: str) -> bool:
        return issue_id in self._issues

    def record(self, issue: Issue) -> Issue:
        """
        Insert an issue or coalesce it into the existing record.

        Args:
            issue: Freshly detected issue

        Returns:
            Copy of the stored record after the update
        """
        with self._lock:
            fingerprint = issue.fingerprint
            self._observe(issue)
            existing = self._issues.get(fingerprint)

            if existing is None:
                stored = issue.copy()
                stored.id = fingerprint
                stored.status = IssueStatus.OPEN
                self._issues[fingerprint] = stored
                logger.debug("New %s issue: %s (%s)", stored.kind.value, stored.full_key, stored.locale)
                return stored.copy()

            existing.occurrence_count += 1
            if issue.last_seen_at > existing.last_seen_at:
                existing.last_seen_at = issue.last_seen_at

            # Resolved issue seen again: regression
            if existing.status == IssueStatus.RESOLVED:
                existing.status = IssueStatus.OPEN
                logger.info("Reopened %s issue: %s (%s)", existing.kind.value, existing.full_key, existing.locale)

            return existing.copy()

    def resolve(self, issue_id: str) -> bool:
        """Mark an issue resolved. Unknown ids are ignored."""
        return self._transition(issue_id, IssueStatus.RESOLVED)

    def ignore(self, issue_id: str) -> bool:
        """Mark an issue ignored. Unknown ids are ignored."""
        return self._transition(issue_id, IssueStatus.IGNORED)

    def reopen(self, issue_id: str) -> bool:
        """Move an issue back to open. Unknown ids are ignored."""
        return self._transition(issue_id, IssueStatus.OPEN)

    def _transition(self, issue_id: str, status: IssueStatus) -> bool:
        with self._lock:
            issue = self._issues.get(issue_id)
            if issue is None:
                logger.debug("No issue with id %s, skipping %s", issue_id, status.value)
                return False
            issue.status = status
            return True

    def clear_resolved(self) -> int:
        """Remove resolved issues. Returns the number removed."""
        with self._lock:
            resolved = [
                issue_id for issue_id, issue in self._issues.items()
                if issue.status == IssueStatus.RESOLVED
            ]
            for issue_id in resolved:
                del self._issues[issue_id]
            return len(resolved)

    def clear_all(self) -> int:
        """Remove every issue. Returns the number removed."""
        with self._lock:
            count = len(self._issues)
            self._issues.clear()
            return count

    def replace(self, issues: Iterable[Issue]) -> None:
        """Swap the whole content for ``issues`` in one step."""
        fresh = {}
        for issue in issues:
            stored = issue.copy()
            fresh[stored.id] = stored

        with self._lock:
            self._issues = fresh
            for issue in fresh.values():
                self._observe(issue)

    def get(self, issue_id: str) -> Optional[Issue]:
        with self._lock:
            issue = self._issues.get(issue_id)
            return issue.copy() if issue else None

    def list(self, issue_filter: Optional[IssueFilter] = None) -> List[Issue]:
        """
        Issues matching ``issue_filter``, most recently seen first.

        Args:
            issue_filter: Optional filter (kind, locale, status)

        Returns:
            List of issue copies
        """
        issue_filter = issue_filter or IssueFilter()
        issues = [issue for issue in self.snapshot() if issue_filter.matches(issue)]
        issues.sort(key=lambda issue: issue.id)
        issues.sort(key=lambda issue: issue.last_seen_at, reverse=True)
        return issues

    def snapshot(self) -> List[Issue]:
        """Point-in-time copy of all issues, in insertion order."""
        with self._lock:
            return [issue.copy() for issue in self._issues.values()]

    def observed_keys(self) -> Dict[str, FrozenSet[str]]:
        """Locale -> every full key recorded for it during the process lifetime."""
        with self._lock:
            return {locale: frozenset(keys) for locale, keys in self._observed.items()}

    def _observe(self, issue: Issue) -> None:
        # Caller holds the lock
        if issue.full_key:
            self._observed[issue.locale].add(issue.full_key)
