"""Tests for TranslationHealthEngine."""

import json
import logging
import threading

import pytest

from translation_health.core.controller import DetectionConfig, DetectionConfigError
from translation_health.core.engine import TranslationHealthEngine
from translation_health.core.issue import Issue, IssueKind, IssueStatus
from translation_health.detectors import HardcodedCandidate, LookupMissEvent


@pytest.fixture
def engine():
    engine = TranslationHealthEngine(known_locales=['en'])
    engine.toggle_detection(True)
    return engine


class TestScenarios:
    """End-to-end scenarios through the control surface."""

    def test_single_miss(self, engine):
        """Tek bir eksik çeviri: 90/90."""
        engine.report_missing('save', 'en', namespace='common', route='/dashboard')

        issues = engine.issues()
        assert len(issues) == 1
        assert issues[0].kind == IssueKind.MISSING_TRANSLATION
        assert issues[0].status == IssueStatus.OPEN
        assert issues[0].full_key == 'common.save'
        assert issues[0].location.route == '/dashboard'
        assert issues[0].occurrence_count == 1
        assert engine.health.per_locale['en'].score == 90
        assert engine.health.overall_score == 90

    def test_single_miss_without_namespace(self, engine):
        engine.report_missing('greeting', 'en', route='/home')

        issues = engine.issues()
        assert issues[0].full_key == 'greeting'
        assert engine.health.overall_score == 90

    def test_repeated_miss(self, engine):
        """Aynı eksik iki kez: tek kayıt, sayaç 2, skor hâlâ 90."""
        engine.report_missing('greeting', 'en', route='/home')
        engine.report_missing('greeting', 'en', route='/home')

        issues = engine.issues()
        assert len(issues) == 1
        assert issues[0].occurrence_count == 2
        assert engine.health.overall_score == 90

    def test_resolve(self, engine):
        issue = engine.report_missing('greeting', 'en', route='/home')

        assert engine.resolve(issue.id) is True
        assert engine.health.per_locale['en'].score == 100
        assert engine.health.per_locale['en'].total_keys_observed >= 1

    def test_malformed_import(self, engine):
        engine.report_missing('greeting', 'en', route='/home')
        before = engine.issues()
        config_before = engine.config

        document = json.loads(engine.export_data())
        document['issues'][0]['kind'] = 'not-a-real-kind'
        result = engine.import_data(json.dumps(document))

        assert result.success is False
        assert result.reason
        assert engine.issues() == before
        assert engine.config == config_before


class TestObserve:
    """Test cases for event intake and gating."""

    def test_detection_off_by_default(self):
        engine = TranslationHealthEngine(known_locales=['en'])
        assert engine.is_detecting is False
        assert engine.report_missing('greeting', 'en') is None
        assert engine.issues() == []

    def test_per_kind_toggle(self, engine):
        engine.update_config(detect_missing_keys=False)
        assert engine.report_missing('greeting', 'en') is None
        assert engine.report_fallback('greeting', 'de', 'en') is not None

    def test_toggle_off_keeps_issues(self, engine):
        engine.report_missing('greeting', 'en')
        engine.toggle_detection(False)

        assert engine.report_missing('farewell', 'en') is None
        assert len(engine.issues()) == 1

    def test_observe_event_object(self, engine):
        issue = engine.observe(LookupMissEvent(key='save', namespace='common', locale='en'))
        assert issue.full_key == 'common.save'

    def test_detector_rejection_records_nothing(self, engine):
        assert engine.report_fallback('title', 'en', 'en') is None
        assert engine.report_hardcoded('flex gap-2') is None
        assert engine.report_rtl('en', properties=['margin-left']) is None
        assert engine.issues() == []

    def test_hardcoded_counts_against_every_locale(self):
        engine = TranslationHealthEngine(known_locales=['en', 'ar'])
        engine.toggle_detection(True)
        engine.report_hardcoded('Click Me', component_type='button')

        assert engine.health.per_locale['en'].score == 98
        assert engine.health.per_locale['ar'].score == 98

    def test_distinct_hardcoded_strings_stay_separate(self, engine):
        texts = ['Save your changes now', 'Save your changes now or lose them', 'Save your changes now!']
        for text in texts:
            engine.report_hardcoded(text, route='/s')
        engine.report_hardcoded('Save your changes now', route='/s')

        issues = engine.issues(kind=IssueKind.HARDCODED_STRING)
        assert len(issues) == 3
        assert sorted(issue.text for issue in issues) == sorted(texts)
        counts = {issue.text: issue.occurrence_count for issue in issues}
        assert counts['Save your changes now'] == 2
        assert counts['Save your changes now or lose them'] == 1

    def test_rtl_with_extra_locales(self):
        engine = TranslationHealthEngine(known_locales=['ckb'], rtl_locales=['ckb'])
        engine.toggle_detection(True)
        issue = engine.report_rtl('ckb', properties=['pl-4'], component_name='Card')
        assert issue is not None
        assert engine.health.per_locale['ckb'].score == 95

    def test_custom_heuristic(self):
        engine = TranslationHealthEngine(heuristic=lambda text, candidate: text.startswith('!'))
        engine.toggle_detection(True)
        assert engine.report_hardcoded('Click Me') is None
        assert engine.observe(HardcodedCandidate(text='!x')) is not None

    def test_handle_lookup_error(self, engine):
        issue = engine.handle_lookup_error(
            "Could not resolve `common.save` in messages for locale `en`.", 'en', route='/settings'
        )
        assert issue.namespace == 'common'
        assert issue.key == 'save'
        assert issue.location.route == '/settings'

    def test_handle_lookup_error_without_key(self, engine):
        issue = engine.handle_lookup_error("boom", 'en')
        assert issue.full_key == 'unknown'

    def test_idempotent_detection(self, engine):
        for _ in range(5):
            engine.report_fallback('title', 'de', 'en', route='/')
        issues = engine.issues()
        assert len(issues) == 1
        assert issues[0].occurrence_count == 5


class TestRecord:
    """Test cases for record()."""

    def test_record_external_issue(self, engine):
        stored = engine.record(Issue(kind=IssueKind.MISSING_TRANSLATION, locale='en', key='save'))
        assert stored is not None
        assert engine.health.overall_score == 90

    def test_record_respects_toggles(self, engine):
        engine.update_config({'detect_rtl_issues': False})
        assert engine.record(Issue(kind=IssueKind.RTL_VIOLATION, locale='ar', key='ml-4')) is None


class TestStatusChanges:
    """Test cases for resolve / ignore / clear."""

    def test_ignore_removes_penalty(self, engine):
        issue = engine.report_missing('greeting', 'en')
        assert engine.ignore(issue.id) is True
        assert engine.health.overall_score == 100
        assert engine.issues(status=IssueStatus.IGNORED)[0].id == issue.id

    def test_unknown_id(self, engine):
        assert engine.resolve('missing-translation:ffffffffffffffff') is False
        assert engine.ignore('nope') is False

    def test_regression_reopens(self, engine):
        issue = engine.report_missing('greeting', 'en')
        engine.resolve(issue.id)
        engine.report_missing('greeting', 'en')

        assert engine.get_issue(issue.id).status == IssueStatus.OPEN
        assert engine.health.overall_score == 90

    def test_reopen(self, engine):
        issue = engine.report_missing('greeting', 'en')
        engine.ignore(issue.id)
        assert engine.reopen(issue.id) is True
        assert engine.health.overall_score == 90

    def test_clear_resolved(self, engine):
        first = engine.report_missing('a', 'en')
        engine.report_missing('b', 'en')
        engine.resolve(first.id)

        assert engine.clear_resolved() == 1
        assert [issue.key for issue in engine.issues()] == ['b']

    def test_clear_all_keeps_observed_keys(self, engine):
        engine.report_missing('a', 'en')
        engine.report_missing('b', 'en')

        assert engine.clear_all() == 2
        assert engine.issues() == []
        assert engine.health.overall_score == 100
        assert engine.health.per_locale['en'].total_keys_observed == 2


class TestConfigSurface:
    """Test cases for config operations."""

    def test_update_config_validates(self, engine):
        with pytest.raises(DetectionConfigError):
            engine.update_config({'unknown': True})

    def test_reset(self):
        engine = TranslationHealthEngine(
            known_locales=['en'],
            default_config=DetectionConfig(enabled=True, detect_rtl_issues=False),
        )
        engine.update_config(enabled=False, detect_rtl_issues=True)
        engine.toggle_detection(True)
        engine.report_missing('greeting', 'en')

        engine.reset()

        assert engine.issues() == []
        assert engine.config == DetectionConfig(enabled=True, detect_rtl_issues=False)
        assert engine.health.overall_score == 100
        assert engine.health.per_locale['en'].total_keys_observed == 1

    def test_custom_weights(self):
        engine = TranslationHealthEngine(known_locales=['en'], weights={'high': 40})
        engine.toggle_detection(True)
        engine.report_missing('greeting', 'en')
        assert engine.health.overall_score == 60


class TestMonotonicObservedKeys:
    """totalKeysObserved never decreases."""

    def test_across_every_mutation(self, engine):
        history = []

        def snapshot():
            history.append(engine.health.per_locale['en'].total_keys_observed)

        a = engine.report_missing('a', 'en')
        snapshot()
        engine.report_missing('b', 'en')
        snapshot()
        engine.resolve(a.id)
        snapshot()
        engine.clear_resolved()
        snapshot()
        engine.import_data(engine.export_data())
        snapshot()
        engine.clear_all()
        snapshot()
        engine.reset()
        snapshot()

        assert history == sorted(history)
        assert history[-1] == 2


class TestRecalculate:
    """Test cases for lazy health recomputation."""

    def test_manual_recalculation(self):
        engine = TranslationHealthEngine(known_locales=['en'], auto_recalculate=False)
        engine.toggle_detection(True)
        engine.report_missing('greeting', 'en')

        assert engine.health.overall_score == 100
        assert engine.recalculate_health().overall_score == 90
        assert engine.health.overall_score == 90


class TestExportImport:
    """Test cases for export_data / import_data."""

    def test_round_trip(self, engine):
        engine.report_missing('greeting', 'en', route='/home')
        hardcoded = engine.report_hardcoded('Click Me', route='/home', component_type='button')
        engine.ignore(hardcoded.id)
        engine.update_config(detect_rtl_issues=False)
        exported = engine.export_data()

        other = TranslationHealthEngine(known_locales=['en'])
        result = other.import_data(exported)

        assert result.success
        assert other.issues() == engine.issues()
        assert other.config == engine.config
        assert other.health.overall_score == engine.health.overall_score

    def test_import_replaces_store(self, engine):
        engine.report_missing('old', 'en')
        other = TranslationHealthEngine(known_locales=['en'])
        other.toggle_detection(True)
        other.report_missing('new', 'en')

        engine.import_data(other.export_data())
        assert [issue.key for issue in engine.issues()] == ['new']

    @pytest.mark.parametrize('field,value', [
        ('route', 123),
        ('componentType', ['button']),
    ])
    def test_wrongly_typed_location_rejected(self, engine, field, value):
        engine.report_missing('save', 'en', namespace='common', route='/settings')
        before = engine.issues()

        document = json.loads(engine.export_data())
        document['issues'][0]['location'][field] = value
        result = engine.import_data(json.dumps(document))

        assert result.success is False
        assert field in result.reason
        assert engine.issues() == before

    def test_failed_import_logged(self, engine, caplog):
        with caplog.at_level(logging.WARNING, logger='translation_health'):
            result = engine.import_data('not json')
        assert not result.success
        assert 'Import rejected' in caplog.text


class TestFeatureGate:
    """When the feature is off the engine is inert."""

    def test_disabled_engine(self):
        engine = TranslationHealthEngine(known_locales=['en'], feature_enabled=False)

        assert engine.toggle_detection(True) is False
        assert engine.is_detecting is False
        assert engine.report_missing('greeting', 'en') is None
        assert engine.record(Issue(kind=IssueKind.MISSING_TRANSLATION, locale='en', key='x')) is None
        assert engine.issues() == []

        health = engine.health
        assert health.disabled is True
        assert health.overall_score == 100
        assert health.per_locale == {}

    def test_disabled_import_fails(self):
        source = TranslationHealthEngine(known_locales=['en'])
        engine = TranslationHealthEngine(known_locales=['en'], feature_enabled=False)

        result = engine.import_data(source.export_data())
        assert result.success is False
        assert result.reason == "engine disabled"

    def test_callable_gate(self):
        state = {'on': True}
        engine = TranslationHealthEngine(known_locales=['en'], feature_enabled=lambda: state['on'])
        engine.toggle_detection(True)
        issue = engine.report_missing('greeting', 'en')

        state['on'] = False
        assert engine.report_missing('farewell', 'en') is None
        assert engine.resolve(issue.id) is False
        assert engine.health.disabled is True
        # Reads keep working
        assert len(engine.issues()) == 1

        state['on'] = True
        assert engine.health.overall_score == 90


class TestSummary:
    """Test cases for summary()."""

    def test_counts(self, engine):
        engine.report_missing('a', 'en')
        engine.report_fallback('b', 'de', 'en')
        resolved = engine.report_missing('c', 'en')
        engine.resolve(resolved.id)

        summary = engine.summary()
        assert summary['kind'] == {'missing-translation': 1, 'fallback-used': 1}
        assert summary['severity'] == {'high': 1, 'medium': 1}
        assert summary['status'] == {'open': 2, 'resolved': 1}


class TestConcurrency:
    """Concurrent reporters never lose occurrences."""

    def test_parallel_reports(self, engine):
        def worker():
            for _ in range(100):
                engine.report_missing('greeting', 'en', route='/home')

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        issues = engine.issues()
        assert len(issues) == 1
        assert issues[0].occurrence_count == 400
        assert engine.health.overall_score == 90
