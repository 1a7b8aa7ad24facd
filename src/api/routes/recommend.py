"""Recommendation endpoints for the Atelier API.

This module serves the personalized "Recommended for You" rail built from a
shopper's style-quiz answers, falling back to featured products for guests.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from src.api.dependencies import (
    get_catalog_store,
    get_optional_preference_store,
    get_optional_user_id,
)
from src.api.metrics import metrics_service
from src.config import get_settings
from src.recommender.catalog import CatalogStore
from src.recommender.preferences import PreferenceStore
from src.recommender.scoring import score_breakdown
from src.recommender.service import get_recommended_products

# Configure module logger
logger = logging.getLogger(__name__)

# Create API router
router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"],
)


class RecommendationResponse(BaseModel):
    """Response model for recommendation requests.

    Attributes:
        products: Ranked product documents. Personalized results carry
            matchScore and matchReason.
        personalized: Whether quiz answers drove the ranking.
        reason: "your <style> style" when personalized, otherwise None.
    """

    products: List[Dict[str, Any]] = Field(..., description="Ranked products")
    personalized: bool = Field(..., description="Whether quiz answers were used")
    reason: Optional[str] = Field(default=None, description="Why these products")


@router.get("", response_model=RecommendationResponse)
def get_recommendations(
    explain: bool = Query(default=False, description="Attach per-rule points"),
    user_id: Optional[str] = Depends(get_optional_user_id),
    catalog: CatalogStore = Depends(get_catalog_store),
    preference_store: Optional[PreferenceStore] = Depends(get_optional_preference_store),
) -> RecommendationResponse:
    """Get the "Recommended for You" rail.

    Signed-in shoppers with completed quiz answers get the catalog ranked by
    match score. Guests and shoppers without answers get the newest featured
    products.

    Example:
        GET /recommendations with header X-User-ID: 42
    """
    start_time = time.perf_counter()

    result = get_recommended_products(
        user_id=user_id,
        catalog=catalog,
        preference_store=preference_store,
        top_n=get_settings().recommendation_limit,
    )

    documents = []
    for product in result.products:
        document = product.to_document()
        if explain and result.preferences is not None:
            document["scoreBreakdown"] = score_breakdown(
                product, result.preferences
            ).as_dict()
        documents.append(document)

    latency_ms = (time.perf_counter() - start_time) * 1000
    metrics_service.record_ranking(latency_ms, personalized=result.personalized)

    logger.info(
        "Recommendations served",
        extra={
            "user_id": user_id,
            "personalized": result.personalized,
            "num_products": len(documents),
            "latency_ms": round(latency_ms, 2),
        },
    )

    return RecommendationResponse(
        products=documents,
        personalized=result.personalized,
        reason=result.reason,
    )
