"""Recommendation orchestration.

Resolves a shopper's quiz answers, reads the published catalog and ranks it.
"""

import logging
from typing import List, NamedTuple, Optional, Union

from src.api.exceptions import PreferenceStoreError
from src.recommender.catalog import CatalogStore
from src.recommender.models import Product, ScoredProduct, UserPreferences
from src.recommender.preferences import PreferenceStore
from src.recommender.ranking import DEFAULT_TOP_N, rank_products

# Configure module logger
logger = logging.getLogger(__name__)


class RecommendationResult(NamedTuple):
    """Ranked products plus whether they were personalized."""

    products: Union[List[ScoredProduct], List[Product]]
    personalized: bool
    reason: Optional[str]
    preferences: Optional[UserPreferences] = None


def resolve_preferences(
    user_id: Optional[str],
    preference_store: Optional[PreferenceStore],
) -> Optional[UserPreferences]:
    """Look up quiz answers, treating an unavailable store as "no answers"."""
    if user_id is None or preference_store is None:
        return None

    try:
        return preference_store.get(user_id)
    except PreferenceStoreError as e:
        logger.warning(
            "Preference store unavailable, using fallback rail",
            extra={"user_id": user_id, "error": e.message},
        )
        return None


def get_recommended_products(
    user_id: Optional[str],
    catalog: CatalogStore,
    preference_store: Optional[PreferenceStore],
    top_n: int = DEFAULT_TOP_N,
) -> RecommendationResult:
    """Build the "Recommended for You" rail for a shopper.

    Args:
        user_id: Signed-in shopper, or None for guests.
        catalog: Loaded catalog store.
        preference_store: Quiz answer store; None disables personalization.
        top_n: Rail length.

    Returns:
        RecommendationResult. Personalized results carry the reason
        "your <style> style", or None when no favorite style was
        answered; fallback results carry no reason.
    """
    preferences = resolve_preferences(user_id, preference_store)
    products = rank_products(catalog.published_products(), preferences, top_n=top_n)

    if preferences is None or not preferences.has_completed_quiz:
        logger.info(
            "Serving fallback recommendations",
            extra={"user_id": user_id, "num_products": len(products)},
        )
        return RecommendationResult(products=products, personalized=False, reason=None)

    logger.info(
        "Serving personalized recommendations",
        extra={"user_id": user_id, "num_products": len(products)},
    )
    style = preferences.favorite_style
    return RecommendationResult(
        products=products,
        personalized=True,
        reason=f"your {style} style" if style else None,
        preferences=preferences,
    )
