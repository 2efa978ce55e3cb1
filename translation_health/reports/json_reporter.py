"""JSON report generator."""

import json
from pathlib import Path
from typing import List, Optional

from ..__version__ import __version__
from ..core.codec import format_timestamp, issue_to_dict
from ..core.health_calculator import HealthCalculator, HealthSnapshot, summarize
from ..core.issue import Issue, utcnow
from ..utils.colors import Colors


class JSONReporter:
    """Generate JSON reports for a health snapshot."""

    @staticmethod
    def build(snapshot: HealthSnapshot, issues: List[Issue]) -> dict:
        """
        Build the report structure.

        Args:
            snapshot: Health snapshot
            issues: All issues, any status

        Returns:
            Report dictionary
        """
        summary = summarize(issues)
        return {
            'metadata': {
                'generated_at': format_timestamp(utcnow()),
                'version': __version__,
            },
            'health': snapshot.to_dict(),
            'summary': summary,
            'recommendations': HealthCalculator.get_recommendations(snapshot, summary),
            'issues': [issue_to_dict(issue) for issue in issues],
        }

    @staticmethod
    def generate(
        snapshot: HealthSnapshot,
        issues: List[Issue],
        output_path: Optional[Path] = None,
        pretty: bool = True
    ) -> Path:
        """
        Generate JSON report.

        Args:
            snapshot: Health snapshot
            issues: All issues, any status
            output_path: Output file path
            pretty: Pretty print JSON

        Returns:
            Path to generated report
        """
        if output_path is None:
            output_path = Path.cwd() / 'translation_health_report.json'

        report = JSONReporter.build(snapshot, issues)

        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            if pretty:
                json.dump(report, f, indent=2, ensure_ascii=False)
            else:
                json.dump(report, f, ensure_ascii=False)

        print(f"\n{Colors.success('✓')} JSON report: {output_path}")

        return output_path

    @staticmethod
    def load(report_path: Path) -> dict:
        """
        Load JSON report from file.

        Args:
            report_path: Path to JSON report

        Returns:
            Report dictionary
        """
        with open(report_path, 'r', encoding='utf-8') as f:
            return json.load(f)
