"""Translation health score calculator."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional

from .issue import ALL_LOCALES, Issue, IssueStatus, Severity, utcnow


@dataclass
class LocaleHealth:
    """Health of a single locale."""
    score: int  # 0-100
    open_issue_count: int
    total_keys_observed: int


@dataclass
class HealthSnapshot:
    """Per-locale and overall translation health at one point in time."""
    overall_score: int  # 0-100
    per_locale: Dict[str, LocaleHealth] = field(default_factory=dict)
    computed_at: datetime = field(default_factory=utcnow)
    disabled: bool = False

    @property
    def grade(self) -> str:
        return HealthCalculator.grade_for(self.overall_score)

    @classmethod
    def disabled_snapshot(cls) -> 'HealthSnapshot':
        """Fixed snapshot reported while the engine is feature-gated off."""
        return cls(overall_score=100, per_locale={}, disabled=True)

    def to_dict(self) -> Dict:
        return {
            'overallScore': self.overall_score,
            'grade': self.grade,
            'disabled': self.disabled,
            'computedAt': self.computed_at.isoformat(),
            'perLocale': {
                locale: {
                    'score': health.score,
                    'openIssueCount': health.open_issue_count,
                    'totalKeysObserved': health.total_keys_observed,
                }
                for locale, health in self.per_locale.items()
            },
        }


class HealthCalculator:
    """Calculate translation health scores from the current issue set."""

    # Grade thresholds
    GRADE_THRESHOLDS = {
        'A+': 95,
        'A': 90,
        'B': 80,
        'C': 70,
        'D': 60,
        'F': 0,
    }

    # Penalty per open issue
    SEVERITY_WEIGHTS = {
        Severity.HIGH: 10,
        Severity.MEDIUM: 5,
        Severity.LOW: 2,
    }

    MAX_SCORE = 100

    @classmethod
    def calculate(
        cls,
        issues: Iterable[Issue],
        known_locales: Iterable[str],
        observed_keys: Optional[Mapping[str, Iterable[str]]] = None,
        weights: Optional[Mapping] = None,
    ) -> HealthSnapshot:
        """
        Calculate health snapshot.

        Args:
            issues: All issues currently in the store
            known_locales: Locales to score
            observed_keys: Locale -> full keys observed so far
            weights: Severity -> penalty override

        Returns:
            HealthSnapshot object
        """
        weights = cls._resolve_weights(weights)
        observed_keys = observed_keys or {}
        open_issues = [issue for issue in issues if issue.status == IssueStatus.OPEN]

        per_locale: Dict[str, LocaleHealth] = {}
        for locale in dict.fromkeys(known_locales):
            locale_issues = [
                issue for issue in open_issues
                if issue.locale == locale or issue.locale == ALL_LOCALES
            ]
            penalty = sum(weights[issue.severity] for issue in locale_issues)

            keys = set(observed_keys.get(locale, ()))
            keys.update(observed_keys.get(ALL_LOCALES, ()))

            per_locale[locale] = LocaleHealth(
                score=max(0, cls.MAX_SCORE - penalty),
                open_issue_count=len(locale_issues),
                total_keys_observed=len(keys),
            )

        if not per_locale:
            overall = cls.MAX_SCORE
        else:
            mean = sum(health.score for health in per_locale.values()) / len(per_locale)
            # Round half up
            overall = int(math.floor(mean + 0.5))

        return HealthSnapshot(overall_score=overall, per_locale=per_locale)

    @classmethod
    def _resolve_weights(cls, weights: Optional[Mapping]) -> Dict[Severity, int]:
        resolved = dict(cls.SEVERITY_WEIGHTS)
        for severity, weight in (weights or {}).items():
            resolved[Severity(severity)] = weight
        return resolved

    @classmethod
    def grade_for(cls, score: float) -> str:
        """Convert score to letter grade."""
        for grade, threshold in cls.GRADE_THRESHOLDS.items():
            if score >= threshold:
                return grade
        return 'F'

    @classmethod
    def get_grade_color(cls, grade: str) -> str:
        """Get color code for grade."""
        from ..utils.colors import Colors

        grade_colors = {
            'A+': Colors.OKGREEN,
            'A': Colors.OKGREEN,
            'B': Colors.OKCYAN,
            'C': Colors.WARNING,
            'D': Colors.WARNING,
            'F': Colors.FAIL,
        }
        return grade_colors.get(grade, Colors.ENDC)

    @classmethod
    def get_recommendations(cls, snapshot: HealthSnapshot, summary: Mapping[str, Mapping[str, int]]) -> List[str]:
        """
        Get improvement recommendations.

        Args:
            snapshot: Current health snapshot
            summary: Open issue counts, as returned by ``summarize``

        Returns:
            List of recommendations
        """
        if snapshot.disabled:
            return ["Translation health tracking is disabled"]

        recommendations = []
        by_kind = summary.get('kind', {})

        missing = by_kind.get('missing-translation', 0)
        if missing:
            recommendations.append(f"🔍 Add {missing} missing translation(s) to the message catalogs")

        fallback = by_kind.get('fallback-used', 0)
        if fallback:
            recommendations.append(f"🌐 Translate {fallback} key(s) currently served from a fallback locale")

        hardcoded = by_kind.get('hardcoded-string', 0)
        if hardcoded:
            recommendations.append(f"🔧 Move {hardcoded} hardcoded string(s) into translation keys")

        rtl = by_kind.get('rtl-violation', 0)
        if rtl:
            recommendations.append(f"↔️  Replace physical direction styles in {rtl} place(s) with logical ones")

        weakest = sorted(snapshot.per_locale.items(), key=lambda item: item[1].score)
        if weakest and weakest[0][1].score < 80:
            locale, health = weakest[0]
            recommendations.append(f"⚠️  Locale '{locale}' scores {health.score}/100 - prioritize it")
        elif snapshot.overall_score >= 95:
            recommendations.append("✨ Excellent translation health! Keep new keys covered")

        return recommendations

    @classmethod
    def compare_snapshots(cls, before: HealthSnapshot, after: HealthSnapshot) -> Dict[str, int]:
        """
        Compare two snapshots.

        Returns:
            Overall change plus one entry per locale present in either snapshot
        """
        changes = {'overall': after.overall_score - before.overall_score}
        for locale in sorted(set(before.per_locale) | set(after.per_locale)):
            old = before.per_locale.get(locale)
            new = after.per_locale.get(locale)
            old_score = old.score if old else cls.MAX_SCORE
            new_score = new.score if new else cls.MAX_SCORE
            changes[locale] = new_score - old_score
        return changes


def summarize(issues: Iterable[Issue], status: Optional[IssueStatus] = IssueStatus.OPEN) -> Dict[str, Dict[str, int]]:
    """
    Count issues by kind, severity and status.

    Args:
        issues: Issues to count
        status: Only count issues in this status for the kind/severity
            breakdown (None counts all)

    Returns:
        {'kind': {...}, 'severity': {...}, 'status': {...}}
    """
    summary: Dict[str, Dict[str, int]] = {'kind': {}, 'severity': {}, 'status': {}}
    for issue in issues:
        summary['status'][issue.status.value] = summary['status'].get(issue.status.value, 0) + 1
        if status is not None and issue.status != status:
            continue
        summary['kind'][issue.kind.value] = summary['kind'].get(issue.kind.value, 0) + 1
        summary['severity'][issue.severity.value] = summary['severity'].get(issue.severity.value, 0) + 1
    return summary
