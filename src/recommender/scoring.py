"""Rule-based match scoring.

Scores one catalog product against one shopper's style-quiz answers with a
fixed-weight additive rule set. Every product is scored independently: there
is no normalisation across the catalog and no hidden state, so the same
(product, preferences) pair always yields the same result.

Point table:

    ======================================  ======
    Rule                                    Points
    ======================================  ======
    product carries the favourite style     15
    category suits the preferred fit        10
    each colour in the preferred palette    5
    product is featured                     8
    "quality" priority and product on sale  5
    ======================================  ======
"""

import logging
from types import MappingProxyType
from typing import FrozenSet, Mapping, NamedTuple, Optional

from src.recommender.models import Product, UserPreferences

# Configure module logger
logger = logging.getLogger(__name__)

STYLE_MATCH_POINTS = 15
FIT_MATCH_POINTS = 10
COLOR_MATCH_POINTS = 5
FEATURED_POINTS = 8
QUALITY_SALE_POINTS = 5

QUALITY_PRIORITY = "quality"
CURATED_REASON = "Curated selection"

# Quiz style answer -> product style tag
STYLE_TAGS: Mapping[str, str] = MappingProxyType(
    {
        "minimalist": "minimalist",
        "classic": "classic",
        "streetwear": "streetwear",
        "elegant": "elegant",
        "casual": "casual",
    }
)

FIT_CATEGORIES: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {
        "slim": frozenset({"Tops", "Knitwear"}),
        "regular": frozenset({"Tops", "Bottoms", "Accessories"}),
        "relaxed": frozenset({"Outerwear", "Tops"}),
        "oversized": frozenset({"Outerwear", "Knitwear"}),
    }
)

PALETTE_COLORS: Mapping[str, FrozenSet[str]] = MappingProxyType(
    {
        "neutrals": frozenset(
            {"Black", "White", "Charcoal", "Cream", "Ivory", "Oatmeal", "Heather Grey"}
        ),
        "earth": frozenset(
            {"Camel", "Sand", "Olive", "Cognac", "Tan", "Burgundy", "Forest"}
        ),
        "deep": frozenset({"Navy", "Midnight", "Burgundy", "Forest", "Indigo"}),
        "bold": frozenset({"Black", "White", "Sage", "Indigo"}),
    }
)

WARDROBE_PRIORITIES: FrozenSet[str] = frozenset(
    {"quality", "versatility", "statement", "comfort"}
)

_NO_MATCHES: FrozenSet[str] = frozenset()


class MatchResult(NamedTuple):
    """Score and human-readable reason for one product."""

    match_score: int
    match_reason: str


class ScoreBreakdown(NamedTuple):
    """Points earned by each scoring rule."""

    style: int
    fit: int
    color: int
    featured: int
    priority: int

    @property
    def total(self) -> int:
        return self.style + self.fit + self.color + self.featured + self.priority

    def as_dict(self) -> dict:
        data = self._asdict()
        data["total"] = self.total
        return data


def _style_tag(preferences: UserPreferences) -> Optional[str]:
    if preferences.favorite_style is None:
        return None
    return STYLE_TAGS.get(preferences.favorite_style)


def _fit_categories(preferences: UserPreferences) -> FrozenSet[str]:
    if preferences.preferred_fit is None:
        return _NO_MATCHES
    return FIT_CATEGORIES.get(preferences.preferred_fit, _NO_MATCHES)


def _palette_colors(preferences: UserPreferences) -> FrozenSet[str]:
    if preferences.color_palette is None:
        return _NO_MATCHES
    return PALETTE_COLORS.get(preferences.color_palette, _NO_MATCHES)


def matches_style(product: Product, preferences: UserPreferences) -> bool:
    """Return True if the product carries the shopper's favourite style tag."""
    tag = _style_tag(preferences)
    return tag is not None and tag in product.styles


def matches_fit(product: Product, preferences: UserPreferences) -> bool:
    """Return True if the product's category suits the preferred fit."""
    return product.category in _fit_categories(preferences)


def score_breakdown(product: Product, preferences: UserPreferences) -> ScoreBreakdown:
    """Compute the points each rule awards a product.

    Answers missing from the quiz, or outside the known quiz options, earn
    no points for the rule they feed.

    Args:
        product: Catalog product to score.
        preferences: The shopper's completed quiz answers.

    Returns:
        ScoreBreakdown whose ``total`` is the product's match score.
    """
    palette = _palette_colors(preferences)
    matching_colors = sum(1 for color in product.colors if color.name in palette)

    on_sale = product.original_price is not None
    wants_quality = preferences.wardrobe_priority == QUALITY_PRIORITY

    return ScoreBreakdown(
        style=STYLE_MATCH_POINTS if matches_style(product, preferences) else 0,
        fit=FIT_MATCH_POINTS if matches_fit(product, preferences) else 0,
        color=COLOR_MATCH_POINTS * matching_colors,
        featured=FEATURED_POINTS if product.is_featured else 0,
        priority=QUALITY_SALE_POINTS if wants_quality and on_sale else 0,
    )


def match_reason(product: Product, preferences: UserPreferences) -> str:
    """Pick the single reason shown next to a recommended product.

    A style match wins over a fit match; anything else is a curated pick.
    """
    if matches_style(product, preferences):
        return f"Matches your {preferences.favorite_style} style"
    if matches_fit(product, preferences):
        return f"Great for your {preferences.preferred_fit} fit preference"
    return CURATED_REASON


def score_product(product: Product, preferences: UserPreferences) -> MatchResult:
    """Score a product against a shopper's quiz answers.

    Example:
        >>> prefs = UserPreferences(favorite_style="minimalist", preferred_fit="slim",
        ...                         color_palette="neutrals", has_completed_quiz=True)
        >>> product = Product(id="1", styles=["minimalist"], category="Tops",
        ...                   colors=[{"name": "Black"}], is_featured=True)
        >>> score_product(product, prefs)
        MatchResult(match_score=38, match_reason='Matches your minimalist style')
    """
    result = MatchResult(
        match_score=score_breakdown(product, preferences).total,
        match_reason=match_reason(product, preferences),
    )
    logger.debug(
        "Scored product",
        extra={"product_id": product.id, "match_score": result.match_score},
    )
    return result
