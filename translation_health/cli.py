"""Command-line interface for translation-health."""

import sys
import argparse
from pathlib import Path
from typing import Optional

from .__version__ import __version__
from .core.codec import parse_document
from .core.issue import ALL_LOCALES, IssueKind, IssueStatus
from .core.health_calculator import HealthCalculator
from .detectors.hardcoded import KEY_PREFIXES
from .reports.console_reporter import ConsoleReporter
from .reports.json_reporter import JSONReporter
from .reports.markdown_reporter import MarkdownReporter
from .utils.colors import Colors
from .utils.config import CONFIG_FILENAME, Config, ConfigValidationError, create_default_config
from .utils.logging import configure_logging


def load_and_validate_config(validate: bool = True, verbose: bool = False) -> Config:
    """
    Load configuration and optionally validate it.

    Args:
        validate: Whether to validate the config
        verbose: Whether to print warnings

    Returns:
        Loaded Config object

    Raises:
        ConfigValidationError: If validation fails with errors
    """
    config = Config.from_file()

    if validate:
        errors, warnings = config.validate()

        # Print warnings if verbose
        if verbose and warnings:
            for warning in warnings:
                print(f"{Colors.warning('⚠️')}  Config warning: {warning}")

        # Raise on errors
        if errors:
            print(f"{Colors.error('❌')} Configuration errors:")
            for error in errors:
                print(f"   • {error}")
            raise ConfigValidationError(errors)

    return config


def open_document(config: Config, path: Path):
    """
    Build an engine from config and load an exported document into it.

    Locales that appear in the document are scored even when the config
    does not list them.

    Returns:
        Engine, or None after printing the reason the document was rejected
    """
    if not path.exists():
        print(f"{Colors.error('❌')} File not found: {path}")
        return None

    text = path.read_text(encoding='utf-8')

    parsed = parse_document(text)
    if not parsed.success:
        print(f"{Colors.error('❌')} Invalid document {path}: {parsed.reason}")
        return None

    extra_locales = sorted({
        issue.locale for issue in parsed.issues if issue.locale != ALL_LOCALES
    })
    engine = config.build_engine(extra_locales=extra_locales)

    result = engine.import_data(text)
    if not result.success:
        print(f"{Colors.error('❌')} Could not load {path}: {result.reason}")
        return None

    return engine


def save_document(engine, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(engine.export_data(), encoding='utf-8')
    return path


def cmd_init(args):
    """Initialize configuration file."""
    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not args.force:
        print(f"{Colors.error('❌')} Config already exists: {config_path}")
        print(f"   Use --force to overwrite")
        return 1

    config = create_default_config(args.name)
    if args.locales:
        config.locales.supported = [code.strip() for code in args.locales.split(',') if code.strip()]
        config.locales.default = config.locales.supported[0] if config.locales.supported else 'en'
    config.save(config_path)

    print(f"{Colors.success('✅')} Created: {config_path}")
    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. Edit {CONFIG_FILENAME} to list your supported locales")
    print(f"2. Export issues from your running application")
    print(f"3. Run: translation-health report <export.json>")

    return 0


def cmd_report(args):
    """Print and export a health report for an exported document."""
    try:
        config = load_and_validate_config(validate=True, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    engine = open_document(config, Path(args.file))
    if engine is None:
        return 1

    snapshot = engine.health
    issues = engine.issues()

    if 'console' in config.reports.formats or args.verbose:
        ConsoleReporter.print_full_report(
            snapshot=snapshot,
            issues=issues,
            show_details=args.verbose
        )

    if 'json' in config.reports.formats or args.json:
        JSONReporter.generate(
            snapshot=snapshot,
            issues=issues,
            output_path=Path(args.json) if args.json else Path(config.reports.output) / 'report.json'
        )

    if 'markdown' in config.reports.formats or args.markdown:
        MarkdownReporter.generate(
            snapshot=snapshot,
            issues=issues,
            output_path=Path(args.markdown) if args.markdown else Path(config.reports.output) / 'report.md'
        )

    # Check threshold
    if args.fail_below is not None and snapshot.overall_score < args.fail_below:
        print(f"\n{Colors.error('❌')} Health score below threshold: "
              f"{snapshot.overall_score} < {args.fail_below}")
        return 1

    return 0


def cmd_issues(args):
    """List issues of an exported document."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    engine = open_document(config, Path(args.file))
    if engine is None:
        return 1

    issues = engine.issues(
        kind=IssueKind(args.kind) if args.kind else None,
        locale=args.locale,
        status=IssueStatus(args.status) if args.status else None,
    )

    print(f"\n{Colors.bold('📋 ISSUES')} ({len(issues)})")
    print("=" * 100)
    ConsoleReporter.print_issue_table(issues, limit=args.limit)

    return 0


def cmd_validate(args):
    """Validate configuration and, optionally, an exported document."""
    print(f"\n{Colors.bold('🔍 VALIDATING')}")
    print("=" * 70)

    try:
        load_and_validate_config(validate=True, verbose=True)
    except ConfigValidationError:
        print(f"\n{Colors.error('❌ Validation FAILED')}")
        return 1

    print(f"  {Colors.success('✓')} Configuration")

    if not args.file:
        print(f"\n{Colors.success('✅ Validation PASSED')}")
        return 0

    path = Path(args.file)
    if not path.exists():
        print(f"  {Colors.error('✗')} File not found: {path}")
        print(f"\n{Colors.error('❌ Validation FAILED')}")
        return 1

    result = parse_document(path.read_text(encoding='utf-8'))
    if not result.success:
        print(f"  {Colors.error('✗')} {path.name}: {result.reason}")
        print(f"\n{Colors.error('❌ Validation FAILED')}")
        return 1

    print(f"  {Colors.success('✓')} {path.name}")
    print()
    print(f"Exported at: {result.exported_at.isoformat()}")
    print(f"Issues: {len(result.issues)}")
    print(f"Detection: {'enabled' if result.config.enabled else 'paused'}")
    for name, value in result.config.to_dict().items():
        if name != 'enabled':
            mark = Colors.success('on') if value else Colors.warning('off')
            print(f"   {name}: {mark}")

    print(f"\n{Colors.success('✅ Validation PASSED')}")
    return 0


def cmd_scan(args):
    """Classify candidate strings with the hardcoded string heuristic."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    candidates_path = Path(args.candidates)
    if not candidates_path.exists():
        print(f"{Colors.error('❌')} File not found: {candidates_path}")
        return 1

    output_path = Path(args.output) if args.output else None
    if output_path is not None and output_path.exists():
        engine = open_document(config, output_path)
        if engine is None:
            return 1
    else:
        engine = config.build_engine()

    if not engine.feature_enabled:
        print(f"{Colors.error('❌')} Translation health tracking is disabled")
        return 1

    texts = [
        line.strip()
        for line in candidates_path.read_text(encoding='utf-8').splitlines()
        if line.strip() and not line.lstrip().startswith('#')
    ]

    was_detecting = engine.is_detecting
    engine.toggle_detection(True)
    flagged = []
    for text in texts:
        issue = engine.report_hardcoded(
            text,
            route=args.route,
            component_name=args.component,
            component_type=args.component_type,
        )
        if issue is not None:
            flagged.append(issue)
    engine.toggle_detection(was_detecting)

    print(f"\n{Colors.bold('⚠️  HARDCODED STRING SCAN')}")
    print("-" * 70)
    print(f"Candidates: {len(texts)}")
    print(f"Flagged: {len(flagged)}")
    print()

    for i, issue in enumerate(flagged, 1):
        print(f"{i}. \"{issue.text[:50]}\"")
        print(f"   Key: {Colors.info(issue.key)}")

    if output_path is not None:
        save_document(engine, output_path)
        print(f"\n{Colors.success('✓')} Saved: {output_path}")

    return 0


def cmd_triage(args):
    """Resolve, ignore, reopen or clear issues in an exported document."""
    try:
        config = load_and_validate_config(validate=True, verbose=False)
    except ConfigValidationError:
        return 1

    path = Path(args.file)
    engine = open_document(config, path)
    if engine is None:
        return 1

    if args.clear_all and not args.confirm:
        print(f"{Colors.error('❌')} --clear-all removes every issue. Use --confirm to proceed")
        return 1

    before = engine.health
    failed = False

    actions = (
        ('resolve', args.resolve, 'Resolved'),
        ('ignore', args.ignore, 'Ignored'),
        ('reopen', args.reopen, 'Reopened'),
    )
    for operation, issue_ids, label in actions:
        for issue_id in issue_ids or []:
            if getattr(engine, operation)(issue_id):
                print(f"{Colors.success('✓')} {label}: {issue_id}")
            else:
                print(f"{Colors.warning('⚠️')}  Unknown issue id: {issue_id}")
                failed = True

    if args.clear_resolved:
        removed = engine.clear_resolved()
        print(f"{Colors.success('✓')} Removed {removed} resolved issue(s)")

    if args.clear_all:
        removed = engine.clear_all()
        print(f"{Colors.success('✓')} Removed {removed} issue(s)")

    after = engine.health
    change = HealthCalculator.compare_snapshots(before, after)['overall']
    sign = '+' if change > 0 else ''
    print(f"\nHealth: {before.overall_score} → {after.overall_score} ({sign}{change})")

    output_path = Path(args.output) if args.output else path
    if args.dry_run:
        print(f"{Colors.info('ℹ️')}  Dry run, {output_path} not written")
    else:
        save_document(engine, output_path)
        print(f"{Colors.success('✓')} Saved: {output_path}")

    return 1 if failed else 0


def main(argv: Optional[list] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='translation-health',
        description='Runtime translation health tracking: reports, triage and validation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Only log warnings and errors')
    parser.add_argument('--log-file', metavar='PATH', help='Also write debug logs to a file')
    parser.add_argument('--no-color', action='store_true', help='Disable colored log output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help='Initialize configuration file')
    init_parser.add_argument('--name', help='Project name')
    init_parser.add_argument('--locales', metavar='CODES', help='Comma separated locales, e.g. en,ar,de')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # report command
    report_parser = subparsers.add_parser('report', help='Health report for an exported document')
    report_parser.add_argument('file', help='Exported document (JSON)')
    report_parser.add_argument('--json', metavar='PATH', help='Output JSON report')
    report_parser.add_argument('--markdown', metavar='PATH', help='Output Markdown report')
    report_parser.add_argument('--fail-below', type=int, metavar='SCORE',
                               help='Exit with error if overall score is below SCORE')
    report_parser.add_argument('--verbose', '-v', action='store_true', help='Show detailed output')

    # issues command
    issues_parser = subparsers.add_parser('issues', help='List issues of an exported document')
    issues_parser.add_argument('file', help='Exported document (JSON)')
    issues_parser.add_argument('--kind', choices=[kind.value for kind in IssueKind], help='Filter by kind')
    issues_parser.add_argument('--locale', '-l', metavar='CODE', help='Filter by locale')
    issues_parser.add_argument('--status', choices=[status.value for status in IssueStatus],
                               help='Filter by status')
    issues_parser.add_argument('--limit', type=int, default=50, help='Max issues to show (default: 50)')

    # validate command
    validate_parser = subparsers.add_parser('validate', help='Validate config and an exported document')
    validate_parser.add_argument('file', nargs='?', help='Exported document (JSON)')

    # scan command
    scan_parser = subparsers.add_parser('scan', help='Classify candidate strings as hardcoded or not')
    scan_parser.add_argument('candidates', help='Text file, one candidate string per line')
    scan_parser.add_argument('--route', help='Route the strings were rendered on')
    scan_parser.add_argument('--component', help='Component name')
    scan_parser.add_argument('--component-type', choices=sorted(KEY_PREFIXES),
                             help='Component type (used for key suggestions)')
    scan_parser.add_argument('--output', '-o', metavar='PATH',
                             help='Merge flagged strings into this exported document')

    # triage command
    triage_parser = subparsers.add_parser('triage', help='Change issue status in an exported document')
    triage_parser.add_argument('file', help='Exported document (JSON)')
    triage_parser.add_argument('--resolve', action='append', metavar='ID', help='Resolve issue')
    triage_parser.add_argument('--ignore', action='append', metavar='ID', help='Ignore issue')
    triage_parser.add_argument('--reopen', action='append', metavar='ID', help='Reopen issue')
    triage_parser.add_argument('--clear-resolved', action='store_true', help='Remove resolved issues')
    triage_parser.add_argument('--clear-all', action='store_true', help='Remove every issue')
    triage_parser.add_argument('--confirm', action='store_true', help='Confirm --clear-all')
    triage_parser.add_argument('--output', '-o', metavar='PATH', help='Write result here instead of FILE')
    triage_parser.add_argument('--dry-run', action='store_true', help='Preview only')

    args = parser.parse_args(argv)

    configure_logging(
        verbose=getattr(args, 'verbose', False),
        quiet=args.quiet,
        log_file=Path(args.log_file) if args.log_file else None,
        use_colors=not args.no_color
    )

    # Execute command
    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'report':
        return cmd_report(args)
    elif args.command == 'issues':
        return cmd_issues(args)
    elif args.command == 'validate':
        return cmd_validate(args)
    elif args.command == 'scan':
        return cmd_scan(args)
    elif args.command == 'triage':
        return cmd_triage(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
