"""CLI script for getting product recommendations.

Useful for testing and evaluation. Ranks the catalog for a stored shopper,
or for quiz answers given on the command line, and prints the rail.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.api.exceptions import AtelierException, PreferenceStoreError
from src.config import get_settings
from src.recommender.catalog import CatalogStore
from src.recommender.models import UserPreferences
from src.recommender.preferences import PreferenceStore
from src.recommender.ranking import DEFAULT_TOP_N, rank_products
from src.recommender.scoring import (
    FIT_CATEGORIES,
    PALETTE_COLORS,
    STYLE_TAGS,
    WARDROBE_PRIORITIES,
    score_breakdown,
)

# Setup logging
logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def build_preferences(args: argparse.Namespace) -> Optional[UserPreferences]:
    """Quiz answers from --user-id lookup or from the answer flags."""
    if args.user_id is not None:
        store = PreferenceStore(args.preferences_dir)
        try:
            store.load()
            return store.get(args.user_id)
        except PreferenceStoreError as e:
            logger.warning(f"Preference store unavailable, showing featured rail: {e.message}")
            return None

    answers = {
        "favoriteStyle": args.style,
        "colorPalette": args.palette,
        "preferredFit": args.fit,
        "wardrobePriority": args.priority,
    }
    if all(value is None for value in answers.values()):
        return None
    return UserPreferences(**answers, hasCompletedQuiz=True)


def format_rail(products: List, preferences: Optional[UserPreferences], explain: bool) -> str:
    """Render ranked products as printable lines."""
    if not products:
        return "  (no products)"

    lines = []
    for position, product in enumerate(products, start=1):
        score = getattr(product, "match_score", None)
        reason = getattr(product, "match_reason", None)
        line = f"  {position}. {product.name or product.id} [{product.category}]"
        if score is not None:
            line += f"  score={score}  ({reason})"
        lines.append(line)

        if explain and preferences is not None and preferences.has_completed_quiz:
            parts = score_breakdown(product, preferences).as_dict()
            lines.append(
                "       " + ", ".join(f"{k}={v}" for k, v in parts.items())
            )
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Get product recommendations from style-quiz answers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/recommend_cli.py --user-id 42
  python scripts/recommend_cli.py --style minimalist --fit slim --palette neutrals
  python scripts/recommend_cli.py --style classic --priority quality --explain
  python scripts/recommend_cli.py            # guest: featured rail
        """,
    )
    parser.add_argument("--user-id", type=str, help="Stored shopper to rank for")
    parser.add_argument("--style", choices=sorted(STYLE_TAGS))
    parser.add_argument("--palette", choices=sorted(PALETTE_COLORS))
    parser.add_argument("--fit", choices=sorted(FIT_CATEGORIES))
    parser.add_argument("--priority", choices=sorted(WARDROBE_PRIORITIES))
    parser.add_argument("--top-n", type=int, default=DEFAULT_TOP_N)
    parser.add_argument("--catalog", type=str, default=settings.catalog_path)
    parser.add_argument(
        "--preferences-dir", type=str, default=settings.preferences_dir
    )
    parser.add_argument(
        "--explain", action="store_true", help="Show points earned per rule"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    try:
        catalog = CatalogStore(args.catalog)
        catalog.load()
        preferences = build_preferences(args)
    except AtelierException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    products = rank_products(catalog.published_products(), preferences, top_n=args.top_n)
    personalized = preferences is not None and preferences.has_completed_quiz

    header = "personalized" if personalized else "featured (no quiz answers)"
    print(f"\nRecommendations - {header}:")
    print(format_rail(products, preferences, args.explain))
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
