"""
Tests for the summary history and preferences store.
"""
import pytest

from app.core.database import KeyValue
from app.models.summary import SummaryHistoryCreate, SummaryLength, UserPreferences
from app.services.history_service import HISTORY_KEY, PREFERENCES_KEY, HistoryService


@pytest.fixture
def history(db_session):
    return HistoryService(db_session=db_session)


def entry(n: int) -> SummaryHistoryCreate:
    return SummaryHistoryCreate(
        source_language="English",
        target_language="French",
        summary_length="short",
        content_preview=f"content {n}",
        summary=f"summary {n}",
    )


class TestHistory:

    def test_empty_history(self, history):
        assert history.get_history() == []

    def test_save_assigns_id_and_date(self, history):
        saved = history.save_summary(entry(1))

        assert saved.id
        assert saved.date is not None
        assert history.get_history()[0].id == saved.id

    def test_newest_first_and_capped(self, history):
        for n in range(25):
            history.save_summary(entry(n))

        items = history.get_history()

        assert len(items) == 20
        assert items[0].summary == "summary 24"
        assert items[-1].summary == "summary 5"

    def test_ids_are_unique(self, history):
        ids = {history.save_summary(entry(n)).id for n in range(5)}
        assert len(ids) == 5

    def test_delete(self, history):
        keep = history.save_summary(entry(1))
        drop = history.save_summary(entry(2))

        assert history.delete_summary(drop.id) is True
        assert [item.id for item in history.get_history()] == [keep.id]

    def test_delete_missing_id(self, history):
        history.save_summary(entry(1))
        assert history.delete_summary("no-such-id") is False

    @pytest.mark.parametrize("corrupt", ["not a list", 42, [{"id": "x"}]])
    def test_corrupt_history_reads_as_empty(self, history, db_session, corrupt):
        db_session.add(KeyValue(key=HISTORY_KEY, value=corrupt))
        db_session.commit()

        assert history.get_history() == []

    def test_stored_with_camel_case_keys(self, history, db_session):
        history.save_summary(entry(1))

        stored = db_session.get(KeyValue, HISTORY_KEY).value
        assert stored[0]["contentPreview"] == "content 1"
        assert "targetLanguage" in stored[0]


class TestPreferences:

    def test_defaults(self, history):
        preferences = history.get_preferences()

        assert preferences.default_target_language == "English"
        assert preferences.default_summary_length == SummaryLength.MEDIUM
        assert preferences.dark_mode is False

    def test_save_and_read_back(self, history):
        history.save_preferences(UserPreferences(
            default_target_language="Japanese",
            default_summary_length=SummaryLength.LONG,
            dark_mode=True,
        ))

        preferences = history.get_preferences()
        assert preferences.default_target_language == "Japanese"
        assert preferences.default_summary_length == SummaryLength.LONG
        assert preferences.dark_mode is True

    def test_corrupt_preferences_fall_back_to_defaults(self, history, db_session):
        db_session.add(KeyValue(key=PREFERENCES_KEY, value={"darkMode": "sometimes"}))
        db_session.commit()

        assert history.get_preferences() == UserPreferences()
