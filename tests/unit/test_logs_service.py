"""
Unit tests for LogService

Tests ordering, type filtering, counts, purge and the text export.
"""
import pytest

from shortlyx.db.models.logs import LogType
from shortlyx.features.logs.services import REPORT_FILENAME


@pytest.mark.unit
class TestLogService:
    @pytest.fixture
    def entries(self, log_svc):
        return [
            log_svc.append(LogType.SIGNUP, "User alice signed up", {"userId": "u1"}),
            log_svc.append(LogType.LOGIN, "User alice logged in", {"userId": "u1"}),
            log_svc.append(LogType.SEARCH, "Searched for: travel", {"query": "travel", "resultsCount": 0}),
        ]

    def test_list_all_is_chronological(self, log_svc, entries):
        assert [e.id for e in log_svc.list_all()] == [e.id for e in entries]

    def test_list_recent_is_reverse_chronological(self, log_svc, entries):
        assert [e.id for e in log_svc.list_recent()] == [e.id for e in reversed(entries)]

    def test_metadata_round_trip(self, log_svc, entries):
        stored = log_svc.list_by_type(LogType.SEARCH)[0]
        assert stored.meta == {"query": "travel", "resultsCount": 0}

    def test_count_by_type_covers_every_type(self, log_svc, entries):
        counts = log_svc.count_by_type()
        assert set(counts) == {t.value for t in LogType}
        assert counts["login"] == 1
        assert counts["upload"] == 0

    def test_clear(self, log_svc, entries):
        assert log_svc.clear() == 3
        assert log_svc.list_all() == []

    def test_export_report_newest_first(self, log_svc, entries):
        report = log_svc.export_report()
        lines = report.splitlines()

        assert lines[0] == "ShortlyX Activity Logs"
        assert lines[1].startswith("Generated: ")
        assert lines[2] == "Entries: 3"
        body = lines[4:]
        assert body[0].startswith("[SEARCH] ")
        assert body[-1].startswith("[SIGNUP] ")
        assert body[1] == "[LOGIN] 2025-01-15 12:00:02 User alice logged in"

    def test_export_truncates_long_messages(self, log_svc):
        log_svc.append(LogType.COMMENT, "x" * 200)
        line = log_svc.export_report().splitlines()[-1]
        assert line.endswith(" " + "x" * 80)

    def test_report_filename(self):
        assert REPORT_FILENAME == "shortlyx-logs.txt"
