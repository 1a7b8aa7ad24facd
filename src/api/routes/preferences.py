"""Style-quiz preference endpoints.

The caller's identity comes from the X-User-ID header set by the auth
gateway; both endpoints require it.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.api.dependencies import get_preference_store, get_required_user_id
from src.recommender.preferences import PreferenceStore

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/preferences",
    tags=["preferences"],
)


class QuizAnswers(BaseModel):
    """Quiz answers submitted by the storefront; all fields optional.

    Keys beyond the quiz questions are stored as sent.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    favorite_style: Optional[str] = None
    color_palette: Optional[str] = None
    preferred_fit: Optional[str] = None
    wardrobe_priority: Optional[str] = None
    preferred_size: Optional[str] = None
    has_completed_quiz: Optional[bool] = None


class PreferencesUpdateRequest(BaseModel):
    preferences: QuizAnswers


class PreferencesResponse(BaseModel):
    user_id: str
    preferences: Optional[Dict[str, Any]] = None


@router.get("", response_model=PreferencesResponse)
def read_preferences(
    user_id: str = Depends(get_required_user_id),
    store: PreferenceStore = Depends(get_preference_store),
) -> PreferencesResponse:
    """Return the caller's stored quiz answers (None if never taken)."""
    preferences = store.get(user_id)
    return PreferencesResponse(
        user_id=user_id,
        preferences=preferences.to_document() if preferences else None,
    )


@router.patch("", response_model=PreferencesResponse)
def update_preferences(
    request: PreferencesUpdateRequest,
    user_id: str = Depends(get_required_user_id),
    store: PreferenceStore = Depends(get_preference_store),
) -> PreferencesResponse:
    """Merge submitted quiz answers into the caller's stored answers.

    Only fields present in the body are changed.

    Raises:
        InvalidPreferencesError: If an answer is not a known quiz option.
    """
    updates = request.preferences.model_dump(by_alias=True, exclude_unset=True)
    updates.update(request.preferences.model_extra or {})
    logger.info(f"Updating preferences for user {user_id}: {sorted(updates)}")

    preferences = store.update(user_id, updates)
    return PreferencesResponse(user_id=user_id, preferences=preferences.to_document())
