"""Tests for the export / import document codec."""

import json
import pytest
from datetime import datetime, timedelta, timezone

from translation_health.core.codec import (
    DOCUMENT_VERSION,
    DocumentError,
    export_document,
    format_timestamp,
    parse_document,
    parse_timestamp,
)
from translation_health.core.controller import DetectionConfig
from translation_health.core.issue import Issue, IssueKind, IssueLocation, IssueStatus


T0 = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def sample_issues():
    missing = Issue(
        kind=IssueKind.MISSING_TRANSLATION,
        locale='ar',
        namespace='common',
        key='save',
        location=IssueLocation.create('/settings', 'SaveButton', 'button'),
        message="Missing translation for 'common.save' in locale 'ar'",
        first_seen_at=T0,
        last_seen_at=T0 + timedelta(minutes=3),
        occurrence_count=4,
    )
    fallback = Issue(
        kind=IssueKind.FALLBACK_USED,
        locale='de',
        key='title',
        fallback_locale='en',
        status=IssueStatus.IGNORED,
        first_seen_at=T0,
    )
    hardcoded = Issue(
        kind=IssueKind.HARDCODED_STRING,
        locale='all',
        key='button.click.me',
        text='Click Me',
        status=IssueStatus.RESOLVED,
        first_seen_at=T0,
    )
    return [missing, fallback, hardcoded]


def sample_document(**overrides):
    data = json.loads(export_document(sample_issues(), DetectionConfig(enabled=True), T0))
    data.update(overrides)
    return data


class TestTimestamps:
    """Test cases for timestamp helpers."""

    def test_format_is_utc_iso(self):
        assert format_timestamp(T0) == '2024-05-01T12:00:00+00:00'

    def test_naive_treated_as_utc(self):
        assert format_timestamp(datetime(2024, 5, 1, 12, 0)) == '2024-05-01T12:00:00+00:00'

    def test_parse_zulu(self):
        assert parse_timestamp('2024-05-01T12:00:00Z', 'x') == T0

    def test_parse_offset_converted_to_utc(self):
        assert parse_timestamp('2024-05-01T15:00:00+03:00', 'x') == T0

    @pytest.mark.parametrize('value', ['yesterday', '', None, 12345, '2024-13-45T00:00:00'])
    def test_parse_rejects_malformed(self, value):
        with pytest.raises(DocumentError):
            parse_timestamp(value, 'firstSeenAt')


class TestExport:
    """Test cases for export_document."""

    def test_document_shape(self):
        data = json.loads(export_document(sample_issues(), DetectionConfig(), T0))

        assert data['version'] == DOCUMENT_VERSION
        assert data['exportedAt'] == '2024-05-01T12:00:00+00:00'
        assert data['config'] == {
            'enabled': False,
            'detectMissingKeys': True,
            'detectFallbackUsage': True,
            'detectHardcodedStrings': True,
            'detectRTLIssues': True,
        }
        assert len(data['issues']) == 3

    def test_issue_fields_are_camel_case(self):
        data = json.loads(export_document(sample_issues(), DetectionConfig(), T0))
        missing = data['issues'][0]

        assert missing['kind'] == 'missing-translation'
        assert missing['severity'] == 'high'
        assert missing['fullKey'] == 'common.save'
        assert missing['location'] == {
            'route': '/settings', 'componentName': 'SaveButton', 'componentType': 'button',
        }
        assert missing['occurrenceCount'] == 4
        assert missing['lastSeenAt'] == '2024-05-01T12:03:00+00:00'

    def test_pretty_uses_two_space_indent(self):
        text = export_document([], DetectionConfig(), T0)
        assert '\n  "version": 1' in text

    def test_compact(self):
        assert '\n' not in export_document([], DetectionConfig(), T0, pretty=False)


class TestParse:
    """Test cases for parse_document."""

    def test_round_trip(self):
        issues = sample_issues()
        config = DetectionConfig(enabled=True, detect_rtl_issues=False)

        result = parse_document(export_document(issues, config, T0))

        assert result.success
        assert result.reason is None
        assert result.issues == issues
        assert result.config == config
        assert result.exported_at == T0

    def test_empty_document(self):
        result = parse_document(export_document([], DetectionConfig(), T0))
        assert result.success
        assert result.issues == []

    def test_invalid_json(self):
        result = parse_document('{not json')
        assert not result
        assert 'Invalid JSON' in result.reason

    def test_not_an_object(self):
        assert not parse_document('[]').success
        assert not parse_document('null').success

    @pytest.mark.parametrize('field', ['issues', 'config', 'exportedAt'])
    def test_missing_top_level_field(self, field):
        data = sample_document()
        del data[field]
        result = parse_document(json.dumps(data))
        assert not result.success
        assert field in result.reason

    def test_unsupported_version(self):
        result = parse_document(json.dumps(sample_document(version=2)))
        assert not result.success
        assert 'version' in result.reason

    def test_unknown_kind(self):
        data = sample_document()
        data['issues'][0]['kind'] = 'not-a-real-kind'
        result = parse_document(json.dumps(data))
        assert not result.success
        assert 'not-a-real-kind' in result.reason
        assert result.issues == []

    @pytest.mark.parametrize('field,value', [
        ('status', 'done'),
        ('severity', 'critical'),
        ('occurrenceCount', 0),
        ('occurrenceCount', -3),
        ('occurrenceCount', 'many'),
        ('occurrenceCount', True),
        ('firstSeenAt', 'yesterday'),
        ('lastSeenAt', None),
        ('locale', ''),
        ('key', 42),
        ('namespace', 7),
        ('message', ['not', 'text']),
        ('fallbackLocale', {'code': 'en'}),
        ('text', 3.5),
        ('location', 'home'),
    ])
    def test_invalid_issue_field(self, field, value):
        data = sample_document()
        data['issues'][0][field] = value
        result = parse_document(json.dumps(data))
        assert not result.success
        assert 'issues[0]' in result.reason

    @pytest.mark.parametrize('field,value', [
        ('route', 123),
        ('route', ['/settings']),
        ('componentName', False),
        ('componentType', {'type': 'button'}),
    ])
    def test_invalid_location_field(self, field, value):
        data = sample_document()
        data['issues'][0]['location'][field] = value
        result = parse_document(json.dumps(data))
        assert not result.success
        assert f'issues[0].location.{field}' in result.reason

    def test_null_optional_fields_accepted(self):
        data = sample_document()
        data['issues'][0]['location']['componentName'] = None
        data['issues'][0]['text'] = None
        assert parse_document(json.dumps(data)).success

    @pytest.mark.parametrize('field', ['id', 'kind', 'locale', 'status', 'occurrenceCount'])
    def test_missing_issue_field(self, field):
        data = sample_document()
        del data['issues'][1][field]
        result = parse_document(json.dumps(data))
        assert not result.success
        assert field in result.reason

    def test_id_must_match_fingerprint(self):
        data = sample_document()
        data['issues'][0]['id'] = 'missing-translation:0000000000000000'
        result = parse_document(json.dumps(data))
        assert not result.success
        assert 'fingerprint' in result.reason

    def test_duplicate_ids(self):
        data = sample_document()
        data['issues'].append(dict(data['issues'][0]))
        result = parse_document(json.dumps(data))
        assert not result.success
        assert 'duplicate' in result.reason

    def test_config_value_must_be_bool(self):
        data = sample_document()
        data['config']['enabled'] = 'yes'
        result = parse_document(json.dumps(data))
        assert not result.success
        assert 'config.enabled' in result.reason

    def test_config_field_required(self):
        data = sample_document()
        del data['config']['detectRTLIssues']
        assert not parse_document(json.dumps(data)).success

    def test_location_defaults_to_unknown(self):
        data = sample_document()
        for raw in data['issues']:
            raw.pop('location')
        # Route is part of the fingerprint, so only issues exported with an
        # unknown route survive without a location
        data['issues'] = data['issues'][1:]
        result = parse_document(json.dumps(data))
        assert result.success
        assert all(issue.location.route == 'unknown' for issue in result.issues)
