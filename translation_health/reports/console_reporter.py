"""Console report generator."""

from typing import Dict, List, Optional

from ..core.health_calculator import HealthCalculator, HealthSnapshot, summarize
from ..core.issue import Issue, IssueStatus
from ..utils.colors import Colors


class ConsoleReporter:
    """Generate console reports."""

    KIND_TITLES = {
        'missing-translation': '🔴 MISSING TRANSLATIONS',
        'fallback-used': '🟡 FALLBACK USAGE',
        'hardcoded-string': '⚠️  HARDCODED STRINGS',
        'rtl-violation': '↔️  RTL VIOLATIONS',
    }

    @staticmethod
    def print_full_report(
        snapshot: HealthSnapshot,
        issues: List[Issue],
        show_details: bool = False,
        limit: int = 10
    ):
        """
        Print comprehensive console report.

        Args:
            snapshot: Health snapshot
            issues: All issues, any status
            show_details: Show per-kind issue listings
            limit: Max issues per listing
        """
        summary = summarize(issues)

        ConsoleReporter._print_header()
        ConsoleReporter._print_health_score(snapshot, summary)

        if snapshot.disabled:
            return

        ConsoleReporter._print_locale_stats(snapshot)

        if show_details:
            open_issues = [issue for issue in issues if issue.status == IssueStatus.OPEN]
            for kind, title in ConsoleReporter.KIND_TITLES.items():
                ConsoleReporter._print_issues(
                    title,
                    [issue for issue in open_issues if issue.kind.value == kind],
                    limit=limit,
                )

        ConsoleReporter._print_recommendations(snapshot, summary)

    @staticmethod
    def _print_header():
        """Print report header."""
        print("\n" + "=" * 70)
        print(f"{Colors.bold('📊 TRANSLATION HEALTH REPORT')}")
        print("=" * 70)

    @staticmethod
    def _print_health_score(snapshot: HealthSnapshot, summary: Dict[str, Dict[str, int]]):
        """Print health score section."""
        print(f"\n{Colors.bold('🏥 HEALTH SCORE')}")
        print("-" * 70)

        if snapshot.disabled:
            print(Colors.warning("Translation health tracking is disabled"))
            return

        grade_color = HealthCalculator.get_grade_color(snapshot.grade)
        print(f"Overall Score: {grade_color}{snapshot.overall_score}/100 ({snapshot.grade}){Colors.ENDC}")
        print(f"Computed At: {snapshot.computed_at.isoformat()}")
        print()

        by_status = summary['status']
        by_severity = summary['severity']
        print(f"🔓 Open Issues: {by_status.get('open', 0)}")
        print(f"✅ Resolved: {by_status.get('resolved', 0)}")
        print(f"🙈 Ignored: {by_status.get('ignored', 0)}")
        print(f"   {Colors.severity('high', 'High')}: {by_severity.get('high', 0)}  "
              f"{Colors.severity('medium', 'Medium')}: {by_severity.get('medium', 0)}  "
              f"{Colors.severity('low', 'Low')}: {by_severity.get('low', 0)}")

    @staticmethod
    def _print_locale_stats(snapshot: HealthSnapshot):
        """Print per-locale statistics."""
        print(f"\n{Colors.bold('🌍 LOCALES')}")
        print("-" * 70)

        if not snapshot.per_locale:
            print("No locales configured")
            return

        print(f"{'Locale':<12} {'Open':<8} {'Keys':<8} {'Score':<15}")
        print("-" * 70)

        for locale in sorted(snapshot.per_locale):
            health = snapshot.per_locale[locale]
            bar = ConsoleReporter._create_progress_bar(health.score)
            print(f"{locale:<12} {health.open_issue_count:<8} {health.total_keys_observed:<8} {bar}")

    @staticmethod
    def _print_issues(title: str, issues: List[Issue], limit: int = 10):
        """Print one issue listing."""
        if not issues:
            return

        print(f"\n{Colors.bold(title)}")
        print("-" * 70)

        for i, issue in enumerate(issues[:limit], 1):
            print(f"{i}. [{Colors.severity(issue.severity.value)}] "
                  f"{Colors.warning(issue.full_key)} ({issue.locale}) x{issue.occurrence_count}")
            print(f"   Route: {issue.location.route}  Component: {issue.location.component_name}")
            if issue.message:
                print(f"   {issue.message}")
            print(f"   ID: {Colors.info(issue.id)}")

        if len(issues) > limit:
            print(f"\n... and {len(issues) - limit} more")

    @staticmethod
    def print_issue_table(issues: List[Issue], limit: Optional[int] = None):
        """Print a compact one-line-per-issue table."""
        if not issues:
            print(Colors.success("✓ No matching issues"))
            return

        shown = issues[:limit] if limit else issues

        print(f"{'ID':<37} {'Status':<9} {'Sev':<7} {'Locale':<7} {'Count':<6} Key")
        print("-" * 100)
        for issue in shown:
            status = Colors.status(issue.status.value, f"{issue.status.value:<9}")
            severity = Colors.severity(issue.severity.value, f"{issue.severity.value:<7}")
            print(f"{issue.id:<37} {status} {severity} {issue.locale:<7} "
                  f"{issue.occurrence_count:<6} {issue.full_key}")

        if len(issues) > len(shown):
            print(f"\n... and {len(issues) - len(shown)} more")

    @staticmethod
    def _print_recommendations(snapshot: HealthSnapshot, summary: Dict[str, Dict[str, int]]):
        """Print recommendations."""
        recommendations = HealthCalculator.get_recommendations(snapshot, summary)

        if not recommendations:
            return

        print(f"\n{Colors.bold('💡 RECOMMENDATIONS')}")
        print("-" * 70)

        for rec in recommendations:
            print(f"   {rec}")

        print()

    @staticmethod
    def _create_progress_bar(score: float, width: int = 20) -> str:
        """Create ASCII progress bar."""
        filled = int(width * score / 100)
        bar = '█' * filled + '░' * (width - filled)

        if score >= 90:
            color = Colors.OKGREEN
        elif score >= 70:
            color = Colors.OKCYAN
        else:
            color = Colors.WARNING

        return f"{color}{bar}{Colors.ENDC} {score}/100"
