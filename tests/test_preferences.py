"""Tests for the quiz answer store."""

import pytest

from src.api.exceptions import InvalidPreferencesError, PreferenceStoreError
from src.recommender.preferences import PreferenceStore


@pytest.fixture
def store(tmp_path):
    store = PreferenceStore(str(tmp_path / "prefs"))
    store.load()
    return store


def test_missing_file_starts_empty(store):
    assert store.num_profiles == 0
    assert store.get("42") is None


def test_update_creates_and_persists(store, tmp_path):
    prefs = store.update(
        "42",
        {"favoriteStyle": "classic", "preferredFit": "regular", "hasCompletedQuiz": True},
    )

    assert prefs.favorite_style == "classic"
    assert prefs.has_completed_quiz is True
    assert store.store_path.exists()

    reopened = PreferenceStore(str(tmp_path / "prefs"))
    assert reopened.load() == 1
    assert reopened.get("42") == prefs


def test_update_merges_with_existing_answers(store):
    store.update("7", {"favoriteStyle": "elegant", "colorPalette": "deep"})
    merged = store.update("7", {"colorPalette": "earth", "hasCompletedQuiz": True})

    assert merged.favorite_style == "elegant"
    assert merged.color_palette == "earth"
    assert merged.has_completed_quiz is True


def test_update_rejects_unknown_quiz_option(store):
    with pytest.raises(InvalidPreferencesError) as exc_info:
        store.update("7", {"favoriteStyle": "gothic", "preferredFit": "slim"})

    assert exc_info.value.details == {"invalid": {"favoriteStyle": "gothic"}}
    assert store.get("7") is None


def test_free_form_size_is_stored(store):
    prefs = store.update("7", {"preferredSize": "M"})

    assert prefs.preferred_size == "M"


def test_legacy_unknown_values_are_readable(store):
    """Answers stored before validation existed still load."""
    store._documents["legacy"] = {"favoriteStyle": "boho", "hasCompletedQuiz": True}

    prefs = store.get("legacy")

    assert prefs.favorite_style == "boho"


def test_corrupt_file_raises_store_error(tmp_path):
    prefs_dir = tmp_path / "prefs"
    prefs_dir.mkdir()
    (prefs_dir / "user_preferences.joblib").write_bytes(b"not a joblib file")

    with pytest.raises(PreferenceStoreError):
        PreferenceStore(str(prefs_dir)).load()


def test_failed_save_leaves_answers_unchanged(tmp_path):
    """An unwritable store raises and keeps serving what is on disk."""
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("")
    store = PreferenceStore(str(blocker / "prefs"))
    store.load()

    with pytest.raises(PreferenceStoreError):
        store.update("u1", {"favoriteStyle": "classic", "hasCompletedQuiz": True})

    assert store.get("u1") is None
    assert store.num_profiles == 0


def test_failed_save_keeps_previous_answers(store, monkeypatch):
    store.update("7", {"favoriteStyle": "elegant"})

    def fail_dump(documents, path):
        raise OSError("disk full")

    monkeypatch.setattr("src.recommender.preferences.joblib.dump", fail_dump)

    with pytest.raises(PreferenceStoreError):
        store.update("7", {"favoriteStyle": "classic"})

    assert store.get("7").favorite_style == "elegant"


def test_extra_answers_are_kept(store, tmp_path):
    store.update("7", {"favoriteStyle": "classic", "shoeSize": "42"})

    reopened = PreferenceStore(str(tmp_path / "prefs"))
    reopened.load()

    assert reopened.get("7").to_document()["shoeSize"] == "42"
