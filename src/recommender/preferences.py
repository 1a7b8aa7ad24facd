"""File-backed store of style-quiz answers.

Answers are kept as camelCase documents keyed by user id and persisted with
joblib in the configured directory.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

import joblib
from pydantic import ValidationError

from src.api.exceptions import InvalidPreferencesError, PreferenceStoreError
from src.recommender.models import UserPreferences
from src.recommender.scoring import (
    FIT_CATEGORIES,
    PALETTE_COLORS,
    STYLE_TAGS,
    WARDROBE_PRIORITIES,
)

# Configure module logger
logger = logging.getLogger(__name__)

PREFERENCES_FILENAME = "user_preferences.joblib"

# Quiz question (camelCase) -> accepted answers
QUIZ_OPTIONS = {
    "favoriteStyle": frozenset(STYLE_TAGS),
    "colorPalette": frozenset(PALETTE_COLORS),
    "preferredFit": frozenset(FIT_CATEGORIES),
    "wardrobePriority": WARDROBE_PRIORITIES,
}


def validate_quiz_answers(updates: Dict[str, Any]) -> None:
    """Reject submitted answers that are not known quiz options.

    Raises:
        InvalidPreferencesError: If any answer is outside its options.
    """
    invalid = {
        key: value
        for key, value in updates.items()
        if key in QUIZ_OPTIONS and value is not None and value not in QUIZ_OPTIONS[key]
    }
    if invalid:
        raise InvalidPreferencesError(invalid)


class PreferenceStore:
    """Quiz answers keyed by user id."""

    def __init__(self, store_dir: str, filename: str = PREFERENCES_FILENAME):
        self.store_dir = store_dir
        self.store_path = Path(store_dir) / filename
        self._lock = threading.Lock()
        self._documents: Dict[str, Dict[str, Any]] = {}

    @property
    def num_profiles(self) -> int:
        return len(self._documents)

    def load(self) -> int:
        """Load persisted answers; a missing file means an empty store.

        Raises:
            PreferenceStoreError: If the file exists but cannot be read.
        """
        if not self.store_path.exists():
            logger.info(f"No preference file at {self.store_path}, starting empty")
            with self._lock:
                self._documents = {}
            return 0

        try:
            documents = joblib.load(self.store_path)
        except Exception as e:
            logger.error(f"Failed to read preferences: {e}", exc_info=True)
            raise PreferenceStoreError(str(self.store_path), e) from e

        if not isinstance(documents, dict):
            raise PreferenceStoreError(
                str(self.store_path),
                TypeError(f"expected a mapping, got {type(documents).__name__}"),
            )

        with self._lock:
            self._documents = {str(k): dict(v) for k, v in documents.items()}

        logger.info(f"Loaded preferences for {len(self._documents)} users")
        return len(self._documents)

    def _save(self, documents: Dict[str, Dict[str, Any]]) -> None:
        try:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            joblib.dump(documents, self.store_path)
        except OSError as e:
            logger.error(f"Failed to persist preferences: {e}", exc_info=True)
            raise PreferenceStoreError(str(self.store_path), e) from e

    def get(self, user_id: str) -> Optional[UserPreferences]:
        """Return a user's quiz answers, or None if they have none.

        Raises:
            PreferenceStoreError: If the stored document is unreadable.
        """
        document = self._documents.get(str(user_id))
        if document is None:
            return None
        try:
            return UserPreferences.model_validate(document)
        except ValidationError as e:
            raise PreferenceStoreError(str(self.store_path), e) from e

    def update(self, user_id: str, updates: Dict[str, Any]) -> UserPreferences:
        """Merge quiz answers into a user's record and persist the store.

        Args:
            user_id: The shopper's id.
            updates: camelCase answers; keys present overwrite stored ones.

        Returns:
            The merged preferences.

        Raises:
            PreferenceStoreError: If the store cannot be written. The
                in-memory answers are left unchanged.
        """
        validate_quiz_answers(updates)

        with self._lock:
            merged = {**self._documents.get(str(user_id), {}), **updates}
            preferences = UserPreferences.model_validate(merged)
            documents = {**self._documents, str(user_id): preferences.to_document()}
            self._save(documents)
            self._documents = documents

        logger.info(
            "Preferences updated",
            extra={"user_id": str(user_id), "fields": sorted(updates)},
        )
        return preferences
