"""Markdown report generator."""

from pathlib import Path
from typing import List, Optional

from ..core.health_calculator import HealthCalculator, HealthSnapshot, summarize
from ..core.issue import Issue, IssueStatus
from ..utils.colors import Colors


class MarkdownReporter:
    """Render a health snapshot and its issues as Markdown."""

    KIND_TITLES = {
        'missing-translation': 'Missing Translations',
        'fallback-used': 'Fallback Usage',
        'hardcoded-string': 'Hardcoded Strings',
        'rtl-violation': 'RTL Violations',
    }

    SEVERITY_BADGES = {
        'high': '🔴 High',
        'medium': '🟡 Medium',
        'low': '🔵 Low',
    }

    @staticmethod
    def score_emoji(score: int) -> str:
        if score >= 80:
            return "🟢"
        if score >= 60:
            return "🟡"
        if score >= 40:
            return "🟠"
        return "🔴"

    @staticmethod
    def _escape(text: str) -> str:
        return text.replace('|', '\\|').replace('\n', ' ')

    @classmethod
    def render(cls, snapshot: HealthSnapshot, issues: List[Issue], limit: int = 50) -> str:
        """
        Render report as Markdown text.

        Args:
            snapshot: Health snapshot
            issues: All issues, any status
            limit: Max rows per issue table

        Returns:
            Markdown document
        """
        summary = summarize(issues)

        lines = [
            "# Translation Health Report",
            "",
            f"**Generated:** {snapshot.computed_at.strftime('%Y-%m-%d %H:%M:%S')} UTC",
            "",
            "## Overall Score",
            "",
        ]

        if snapshot.disabled:
            lines.extend(["Translation health tracking is disabled.", ""])
            return '\n'.join(lines)

        lines.extend([
            f"{cls.score_emoji(snapshot.overall_score)} **{snapshot.overall_score}/100** ({snapshot.grade})",
            "",
            "| Status | Count |",
            "|--------|-------|",
            f"| 🔓 Open | {summary['status'].get('open', 0)} |",
            f"| ✅ Resolved | {summary['status'].get('resolved', 0)} |",
            f"| 🙈 Ignored | {summary['status'].get('ignored', 0)} |",
            "",
            "## Locales",
            "",
            "| Locale | Score | Open Issues | Keys Observed |",
            "|--------|-------|-------------|---------------|",
        ])

        for locale in sorted(snapshot.per_locale):
            health = snapshot.per_locale[locale]
            lines.append(
                f"| {cls.score_emoji(health.score)} {locale} | {health.score}/100 | "
                f"{health.open_issue_count} | {health.total_keys_observed} |"
            )

        open_issues = [issue for issue in issues if issue.status == IssueStatus.OPEN]
        for kind, title in cls.KIND_TITLES.items():
            kind_issues = [issue for issue in open_issues if issue.kind.value == kind]
            if not kind_issues:
                continue

            lines.extend([
                "",
                f"## {title} ({len(kind_issues)})",
                "",
                "| Severity | Locale | Key | Route | Count |",
                "|----------|--------|-----|-------|-------|",
            ])
            for issue in kind_issues[:limit]:
                lines.append(
                    f"| {cls.SEVERITY_BADGES[issue.severity.value]} | {issue.locale} | "
                    f"`{cls._escape(issue.full_key)}` | {cls._escape(issue.location.route)} | "
                    f"{issue.occurrence_count} |"
                )
            if len(kind_issues) > limit:
                lines.append(f"\n... and {len(kind_issues) - limit} more")

        recommendations = HealthCalculator.get_recommendations(snapshot, summary)
        if recommendations:
            lines.extend(["", "## Recommendations", ""])
            lines.extend(f"- {rec}" for rec in recommendations)

        lines.append("")
        return '\n'.join(lines)

    @classmethod
    def generate(
        cls,
        snapshot: HealthSnapshot,
        issues: List[Issue],
        output_path: Optional[Path] = None
    ) -> Path:
        """Markdown dosyasına dışa aktar."""
        if output_path is None:
            output_path = Path.cwd() / 'translation_health_report.md'

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(cls.render(snapshot, issues))

        print(f"{Colors.success('✓')} Markdown report: {output_path}")

        return output_path
