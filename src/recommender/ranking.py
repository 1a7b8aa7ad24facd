"""Ranking of catalog products for the "Recommended for You" rail.

Turns a catalog snapshot into an ordered, truncated list. Shoppers with
completed quiz answers get products scored by ``src.recommender.scoring``;
everyone else gets the featured cold-start rail.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Union

import numpy as np

from src.recommender.models import Product, ScoredProduct, UserPreferences
from src.recommender.scoring import MatchResult, score_product

# Configure module logger
logger = logging.getLogger(__name__)

# Default parameters
DEFAULT_TOP_N = 8


def is_active(product: Product) -> bool:
    """Products are active unless explicitly switched off."""
    return product.is_active is not False


def is_published(product: Product, now: datetime) -> bool:
    """Return True if the product is active and its publish time has passed."""
    if not is_active(product):
        return False
    return product.publish_at is None or product.publish_at <= now


def _recency(products: Sequence[Product]) -> np.ndarray:
    """Creation timestamps as floats; products without one sort oldest."""
    return np.array(
        [
            p.created_at.timestamp() if p.created_at is not None else -np.inf
            for p in products
        ],
        dtype=float,
    )


def _newest_first(products: Sequence[Product]) -> List[Product]:
    order = np.argsort(-_recency(products), kind="stable")
    return [products[int(idx)] for idx in order]


def attach_match(product: Product, result: MatchResult) -> ScoredProduct:
    """Copy a product into a ScoredProduct carrying its match result."""
    data = product.model_dump(exclude={"hover_image"})
    return ScoredProduct(
        **data,
        match_score=result.match_score,
        match_reason=result.match_reason,
    )


def fallback_products(
    products: Sequence[Product],
    top_n: int = DEFAULT_TOP_N,
) -> List[Product]:
    """Cold-start rail for guests and shoppers without quiz answers.

    Featured, active products, newest first.

    Args:
        products: Catalog snapshot.
        top_n: Maximum number of products to return.

    Returns:
        Up to ``top_n`` products without match scores.
    """
    if top_n <= 0:
        return []

    featured = [p for p in products if p.is_featured and is_active(p)]
    ranked = _newest_first(featured)[:top_n]

    logger.debug(
        "Built fallback rail",
        extra={"num_candidates": len(featured), "num_returned": len(ranked)},
    )
    return ranked


def rank_products(
    products: Sequence[Product],
    preferences: Optional[UserPreferences],
    top_n: int = DEFAULT_TOP_N,
) -> Union[List[ScoredProduct], List[Product]]:
    """Rank a catalog snapshot for one shopper.

    Without completed quiz answers this is exactly ``fallback_products``.
    Otherwise every active product is scored, sorted by match score (highest
    first) with newer products winning ties, and truncated to ``top_n``.

    Args:
        products: Catalog snapshot.
        preferences: The shopper's quiz answers, or None for guests.
        top_n: Maximum number of products to return.

    Returns:
        ScoredProduct list on the personalized path, plain Product list on
        the fallback path. An empty catalog yields an empty list.
    """
    if preferences is None or not preferences.has_completed_quiz:
        return fallback_products(products, top_n=top_n)

    if top_n <= 0:
        return []

    candidates = [p for p in products if is_active(p)]
    if not candidates:
        logger.info("No active products to rank")
        return []

    results = [score_product(p, preferences) for p in candidates]
    scores = np.array([r.match_score for r in results], dtype=float)

    # np.lexsort sorts by the last key first
    order = np.lexsort((-_recency(candidates), -scores))[:top_n]

    ranked = [attach_match(candidates[int(idx)], results[int(idx)]) for idx in order]

    logger.info(
        "Ranked products",
        extra={
            "num_candidates": len(candidates),
            "num_returned": len(ranked),
            "top_score": ranked[0].match_score,
        },
    )
    return ranked


def products_by_style(
    products: Sequence[Product],
    style: str,
    top_n: int = DEFAULT_TOP_N,
) -> List[Product]:
    """Active products carrying a style tag, featured first, then newest."""
    if top_n <= 0:
        return []

    matching = [p for p in products if is_active(p) and style in p.styles]
    if not matching:
        return []

    featured = np.array([1.0 if p.is_featured else 0.0 for p in matching])
    order = np.lexsort((-_recency(matching), -featured))[:top_n]
    return [matching[int(idx)] for idx in order]


def favorite_style_first(products: Sequence[Product], style: Optional[str]) -> List[Product]:
    """Move products tagged with ``style`` to the front, keeping order otherwise."""
    if not style:
        return list(products)

    matches = np.array([0 if style in p.styles else 1 for p in products])
    order = np.argsort(matches, kind="stable")
    return [products[int(idx)] for idx in order]
