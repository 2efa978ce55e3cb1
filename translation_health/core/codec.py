"""Export / import of issues and detection config as a portable JSON document."""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from .controller import DetectionConfig
from .issue import (
    Issue,
    IssueKind,
    IssueLocation,
    IssueStatus,
    IssueValidationError,
    Severity,
    to_utc,
    utcnow,
)

DOCUMENT_VERSION = 1

# DetectionConfig field -> document key
CONFIG_KEYS = {
    'enabled': 'enabled',
    'detect_missing_keys': 'detectMissingKeys',
    'detect_fallback_usage': 'detectFallbackUsage',
    'detect_hardcoded_strings': 'detectHardcodedStrings',
    'detect_rtl_issues': 'detectRTLIssues',
}

REQUIRED_ISSUE_FIELDS = (
    'id', 'kind', 'severity', 'locale', 'key', 'status',
    'firstSeenAt', 'lastSeenAt', 'occurrenceCount',
)


class DocumentError(ValueError):
    """Structural defect in an import document."""


@dataclass
class ImportResult:
    """Outcome of parsing an import document."""
    success: bool
    reason: Optional[str] = None
    issues: List[Issue] = field(default_factory=list)
    config: Optional[DetectionConfig] = None
    exported_at: Optional[datetime] = None

    @classmethod
    def failure(cls, reason: str) -> 'ImportResult':
        return cls(success=False, reason=reason)

    def __bool__(self) -> bool:
        return self.success


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC."""
    return to_utc(value).isoformat()


def parse_timestamp(value: Any, where: str) -> datetime:
    """Parse an ISO-8601 timestamp, treating naive values as UTC."""
    if not isinstance(value, str) or not value:
        raise DocumentError(f"{where} must be an ISO-8601 timestamp string")

    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise DocumentError(f"{where} is not a valid ISO-8601 timestamp: {value!r}") from None

    return to_utc(parsed)


def issue_to_dict(issue: Issue) -> Dict[str, Any]:
    """Serialize one issue with camelCase keys."""
    return {
        'id': issue.id,
        'kind': issue.kind.value,
        'severity': issue.severity.value,
        'locale': issue.locale,
        'namespace': issue.namespace,
        'key': issue.key,
        'fullKey': issue.full_key,
        'location': {
            'route': issue.location.route,
            'componentName': issue.location.component_name,
            'componentType': issue.location.component_type,
        },
        'status': issue.status.value,
        'message': issue.message,
        'fallbackLocale': issue.fallback_locale,
        'text': issue.text,
        'firstSeenAt': format_timestamp(issue.first_seen_at),
        'lastSeenAt': format_timestamp(issue.last_seen_at),
        'occurrenceCount': issue.occurrence_count,
    }


def config_to_dict(config: DetectionConfig) -> Dict[str, bool]:
    return {doc_key: getattr(config, name) for name, doc_key in CONFIG_KEYS.items()}


def export_document(
    issues: Iterable[Issue],
    config: DetectionConfig,
    exported_at: Optional[datetime] = None,
    pretty: bool = True,
) -> str:
    """
    Serialize issues and config.

    Args:
        issues: Issues to export
        config: Current detection config
        exported_at: Export timestamp (default: now)
        pretty: Indent the JSON output

    Returns:
        JSON document
    """
    document = {
        'version': DOCUMENT_VERSION,
        'exportedAt': format_timestamp(exported_at or utcnow()),
        'config': config_to_dict(config),
        'issues': [issue_to_dict(issue) for issue in issues],
    }
    if pretty:
        return json.dumps(document, indent=2, ensure_ascii=False)
    return json.dumps(document, ensure_ascii=False)


def parse_document(text: str) -> ImportResult:
    """
    Parse and validate an exported document.

    Never raises for bad input: every structural defect becomes a failed
    ImportResult carrying a human-readable reason.
    """
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        return ImportResult.failure(f"Invalid JSON: {e}")

    try:
        return _parse(data)
    except DocumentError as e:
        return ImportResult.failure(str(e))


def _parse(data: Any) -> ImportResult:
    if not isinstance(data, dict):
        raise DocumentError("Document must be a JSON object")

    for name in ('issues', 'config', 'exportedAt'):
        if name not in data:
            raise DocumentError(f"Missing required field '{name}'")

    version = data.get('version', DOCUMENT_VERSION)
    if version != DOCUMENT_VERSION:
        raise DocumentError(f"Unsupported document version: {version!r}")

    exported_at = parse_timestamp(data['exportedAt'], 'exportedAt')
    config = _parse_config(data['config'])

    if not isinstance(data['issues'], list):
        raise DocumentError("'issues' must be an array")

    issues = []
    seen_ids = set()
    for index, raw in enumerate(data['issues']):
        issue = _parse_issue(raw, f"issues[{index}]")
        if issue.id in seen_ids:
            raise DocumentError(f"issues[{index}]: duplicate id {issue.id!r}")
        seen_ids.add(issue.id)
        issues.append(issue)

    return ImportResult(success=True, issues=issues, config=config, exported_at=exported_at)


def _parse_config(raw: Any) -> DetectionConfig:
    if not isinstance(raw, dict):
        raise DocumentError("'config' must be an object")

    values = {}
    for name, doc_key in CONFIG_KEYS.items():
        if doc_key not in raw:
            raise DocumentError(f"config: missing required field '{doc_key}'")
        if not isinstance(raw[doc_key], bool):
            raise DocumentError(f"config.{doc_key} must be a boolean")
        values[name] = raw[doc_key]
    return DetectionConfig(**values)


def _parse_issue(raw: Any, where: str) -> Issue:
    if not isinstance(raw, dict):
        raise DocumentError(f"{where} must be an object")

    for name in REQUIRED_ISSUE_FIELDS:
        if name not in raw:
            raise DocumentError(f"{where}: missing required field '{name}'")

    kind = _enum(IssueKind, raw['kind'], f"{where}.kind")
    severity = _enum(Severity, raw['severity'], f"{where}.severity")
    status = _enum(IssueStatus, raw['status'], f"{where}.status")

    count = raw['occurrenceCount']
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise DocumentError(f"{where}.occurrenceCount must be a positive integer")

    for name in ('id', 'locale', 'key'):
        if not isinstance(raw[name], str):
            raise DocumentError(f"{where}.{name} must be a string")

    for name in ('namespace', 'message', 'fallbackLocale', 'text'):
        _optional_string(raw.get(name), f"{where}.{name}")

    location = raw.get('location') or {}
    if not isinstance(location, dict):
        raise DocumentError(f"{where}.location must be an object")
    for name in ('route', 'componentName', 'componentType'):
        _optional_string(location.get(name), f"{where}.location.{name}")

    try:
        issue = Issue(
            kind=kind,
            locale=raw['locale'],
            key=raw['key'],
            namespace=raw.get('namespace'),
            location=IssueLocation.create(
                route=location.get('route'),
                component_name=location.get('componentName'),
                component_type=location.get('componentType'),
            ),
            message=raw.get('message') or '',
            fallback_locale=raw.get('fallbackLocale'),
            text=raw.get('text'),
            status=status,
            first_seen_at=parse_timestamp(raw['firstSeenAt'], f"{where}.firstSeenAt"),
            last_seen_at=parse_timestamp(raw['lastSeenAt'], f"{where}.lastSeenAt"),
            occurrence_count=count,
            id=raw['id'],
            severity=severity,
        )
    except IssueValidationError as e:
        raise DocumentError(f"{where}: {e}") from None

    if issue.id != issue.fingerprint:
        raise DocumentError(f"{where}: id {issue.id!r} does not match the issue fingerprint")

    return issue


def _enum(enum_cls, value: Any, where: str):
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        valid = ', '.join(member.value for member in enum_cls)
        raise DocumentError(f"{where}: unknown value {value!r} (expected one of: {valid})") from None


def _optional_string(value: Any, where: str) -> None:
    if value is not None and not isinstance(value, str):
        raise DocumentError(f"{where} must be a string or null")
