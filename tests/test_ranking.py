"""Tests for ranking, the fallback rail and style browsing."""

from datetime import datetime, timezone

from src.recommender.models import ScoredProduct, UserPreferences
from src.recommender.ranking import (
    DEFAULT_TOP_N,
    fallback_products,
    favorite_style_first,
    is_published,
    products_by_style,
    rank_products,
)
from tests.conftest import make_product


def _ids(products):
    return [p.id for p in products]


def test_rank_without_preferences_equals_fallback():
    products = [
        make_product(str(i), days_old=i, isFeatured=i % 2 == 0, styles=["minimalist"])
        for i in range(12)
    ]

    assert rank_products(products, None) == fallback_products(products)


def test_rank_with_incomplete_quiz_equals_fallback():
    prefs = UserPreferences(favoriteStyle="minimalist", hasCompletedQuiz=False)
    products = [
        make_product(str(i), days_old=i, isFeatured=True, styles=["minimalist"])
        for i in range(5)
    ]

    ranked = rank_products(products, prefs)

    assert ranked == fallback_products(products)
    assert not any(isinstance(p, ScoredProduct) for p in ranked)


def test_fallback_is_featured_active_newest_first():
    products = [
        make_product("old", days_old=30, isFeatured=True),
        make_product("plain", days_old=0, isFeatured=False),
        make_product("new", days_old=1, isFeatured=True),
        make_product("off", days_old=0, isFeatured=True, isActive=False),
        make_product("mid", days_old=5, isFeatured=True, isActive=None),
    ]

    assert _ids(fallback_products(products)) == ["new", "mid", "old"]


def test_fallback_truncates_to_8():
    products = [make_product(str(i), days_old=i, isFeatured=True) for i in range(15)]

    result = fallback_products(products)

    assert len(result) == DEFAULT_TOP_N == 8
    assert _ids(result) == [str(i) for i in range(8)]


def test_rank_sorts_by_score_descending(minimalist_prefs):
    products = [
        make_product("curated", days_old=0),
        make_product("style", days_old=0, styles=["minimalist"]),
        make_product("fit", days_old=0, category="Tops"),
        make_product("all", days_old=0, styles=["minimalist"], category="Tops", isFeatured=True),
    ]

    ranked = rank_products(products, minimalist_prefs)

    assert _ids(ranked) == ["all", "style", "fit", "curated"]
    assert [p.match_score for p in ranked] == [33, 15, 10, 0]


def test_rank_breaks_ties_by_newest(minimalist_prefs):
    """Equal scores: the later createdAt comes first."""
    products = [
        make_product("older", days_old=20, styles=["minimalist"]),
        make_product("newer", days_old=2, styles=["minimalist"]),
        make_product("newest", days_old=0, styles=["minimalist"]),
    ]

    assert _ids(rank_products(products, minimalist_prefs)) == ["newest", "newer", "older"]


def test_rank_places_undated_products_last_among_ties(minimalist_prefs):
    products = [
        make_product("undated", styles=["minimalist"], createdAt=None),
        make_product("dated", days_old=400, styles=["minimalist"]),
    ]

    assert _ids(rank_products(products, minimalist_prefs)) == ["dated", "undated"]


def test_rank_returns_exactly_8_of_20(minimalist_prefs):
    products = [make_product(str(i), days_old=i, category="Tops") for i in range(20)]

    ranked = rank_products(products, minimalist_prefs)

    assert len(ranked) == 8


def test_rank_filters_inactive_products(minimalist_prefs):
    products = [
        make_product("active", styles=["minimalist"]),
        make_product("inactive", styles=["minimalist"], isActive=False),
        make_product("unset", styles=["minimalist"], isActive=None),
    ]

    assert set(_ids(rank_products(products, minimalist_prefs))) == {"active", "unset"}


def test_rank_empty_catalog(minimalist_prefs):
    assert rank_products([], minimalist_prefs) == []
    assert rank_products([], None) == []


def test_rank_attaches_score_and_reason(minimalist_prefs):
    product = make_product(
        "tee",
        styles=["minimalist"],
        category="Tops",
        colors=[{"name": "Black"}],
        isFeatured=True,
        description="Heavyweight jersey",
    )

    [scored] = rank_products([product], minimalist_prefs)

    assert isinstance(scored, ScoredProduct)
    assert scored.match_score == 38
    assert scored.match_reason == "Matches your minimalist style"

    document = scored.to_document()
    assert document["matchScore"] == 38
    assert document["matchReason"] == "Matches your minimalist style"
    assert document["description"] == "Heavyweight jersey"
    assert document["isFeatured"] is True


def test_rank_does_not_mutate_inputs(minimalist_prefs):
    products = [make_product("a", styles=["minimalist"]), make_product("b")]
    before = [p.model_dump() for p in products]

    rank_products(products, minimalist_prefs)

    assert [p.model_dump() for p in products] == before
    assert not any(isinstance(p, ScoredProduct) for p in products)


def test_rank_respects_custom_top_n(minimalist_prefs):
    products = [make_product(str(i), days_old=i) for i in range(10)]

    assert len(rank_products(products, minimalist_prefs, top_n=3)) == 3
    assert rank_products(products, minimalist_prefs, top_n=0) == []


def test_products_by_style_featured_first_then_newest():
    products = [
        make_product("plain-new", days_old=0, styles=["classic"]),
        make_product("featured-old", days_old=9, styles=["classic"], isFeatured=True),
        make_product("featured-new", days_old=3, styles=["classic"], isFeatured=True),
        make_product("other", days_old=0, styles=["casual"], isFeatured=True),
        make_product("inactive", days_old=0, styles=["classic"], isActive=False),
    ]

    result = products_by_style(products, "classic")

    assert _ids(result) == ["featured-new", "featured-old", "plain-new"]


def test_products_by_style_limit_and_no_matches():
    products = [make_product(str(i), days_old=i, styles=["elegant"]) for i in range(12)]

    assert len(products_by_style(products, "elegant")) == 8
    assert len(products_by_style(products, "elegant", top_n=3)) == 3
    assert products_by_style(products, "streetwear") == []


def test_is_published_respects_schedule():
    now = datetime(2024, 6, 1, tzinfo=timezone.utc)

    assert is_published(make_product(publishAt=None), now)
    assert is_published(make_product(publishAt="2024-05-31T00:00:00Z"), now)
    assert not is_published(make_product(publishAt="2024-06-02T00:00:00Z"), now)
    assert not is_published(make_product(isActive=False), now)


def test_favorite_style_first_is_stable():
    products = [
        make_product("a", styles=["casual"]),
        make_product("b", styles=["classic"]),
        make_product("c"),
        make_product("d", styles=["classic", "elegant"]),
    ]

    assert _ids(favorite_style_first(products, "classic")) == ["b", "d", "a", "c"]
    assert _ids(favorite_style_first(products, None)) == ["a", "b", "c", "d"]
    assert favorite_style_first([], "classic") == []
