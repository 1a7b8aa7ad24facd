"""Catalog browsing endpoints."""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import (
    get_catalog_store,
    get_optional_preference_store,
    get_optional_user_id,
)
from src.recommender.catalog import CatalogStore
from src.recommender.preferences import PreferenceStore
from src.recommender.ranking import DEFAULT_TOP_N, favorite_style_first, products_by_style
from src.recommender.service import resolve_preferences

# Configure module logger
logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/products",
    tags=["products"],
)


@router.get("", response_model=List[Dict[str, Any]])
def list_products(
    featured: Optional[bool] = None,
    category: Optional[str] = None,
    status: Optional[str] = None,
    style: Optional[str] = None,
    recommended: bool = False,
    user_id: Optional[str] = Depends(get_optional_user_id),
    catalog: CatalogStore = Depends(get_catalog_store),
    preference_store: Optional[PreferenceStore] = Depends(get_optional_preference_store),
) -> List[Dict[str, Any]]:
    """List published products, newest first.

    Args:
        featured: Only featured products when true.
        category: Exact category name.
        status: Exact merchandising status (e.g. "new", "sale").
        style: Style tag the product must carry.
        recommended: For signed-in shoppers, list products in their
            favorite style first.
    """
    products = catalog.published_products()

    if featured:
        products = [p for p in products if p.is_featured]
    if category:
        products = [p for p in products if p.category == category]
    if status:
        products = [p for p in products if (p.model_extra or {}).get("status") == status]
    if style:
        products = [p for p in products if style in p.styles]

    products = sorted(
        products,
        key=lambda p: p.created_at.timestamp() if p.created_at else float("-inf"),
        reverse=True,
    )

    if recommended and user_id is not None:
        preferences = resolve_preferences(user_id, preference_store)
        if preferences is not None:
            products = favorite_style_first(products, preferences.favorite_style)
            logger.debug(f"Listed {preferences.favorite_style} products first for user {user_id}")

    return [p.to_document() for p in products]


@router.get("/style/{style}", response_model=List[Dict[str, Any]])
def list_products_by_style(
    style: str,
    limit: int = Query(default=DEFAULT_TOP_N, ge=1, le=50),
    catalog: CatalogStore = Depends(get_catalog_store),
) -> List[Dict[str, Any]]:
    """Products carrying a style tag, featured first, then newest."""
    products = products_by_style(catalog.published_products(), style, top_n=limit)
    logger.debug(f"Found {len(products)} products for style {style}")
    return [p.to_document() for p in products]


@router.get("/{id_or_slug}", response_model=Dict[str, Any])
def get_product(
    id_or_slug: str,
    catalog: CatalogStore = Depends(get_catalog_store),
) -> Dict[str, Any]:
    """Fetch one published product by id or slug.

    Raises:
        ProductNotFoundError: If no published product matches.
    """
    return catalog.get_product(id_or_slug).to_document()
