"""Generate a fake luxury fashion catalog and quiz answers for development.

Creates a JSON catalog of synthetic products tagged with styles, categories,
colour variants and sale prices, plus a set of shopper quiz answers in the
preference store.

Example:
    Run the script directly to generate default data:
        $ python scripts/generate_fake_catalog.py

    Or import and use programmatically:
        from scripts.generate_fake_catalog import generate_fake_catalog
        df = generate_fake_catalog(num_products=40)
"""

import argparse
import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Optional

import pandas as pd

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.recommender.catalog import save_catalog_documents
from src.recommender.preferences import QUIZ_OPTIONS, PreferenceStore
from src.recommender.scoring import PALETTE_COLORS

# Default configuration constants
DEFAULT_NUM_PRODUCTS = 40
DEFAULT_NUM_SHOPPERS = 20
DEFAULT_DAYS_BACK = 120
DEFAULT_SEED = 42

CATEGORIES = {
    "Outerwear": ["Wool Coat", "Trench Coat", "Denim Jacket", "Wool Blazer"],
    "Tops": ["Silk Shirt", "Jersey Tee", "Poplin Shirt", "Linen Shirt"],
    "Bottoms": ["Linen Trousers", "Wide-Leg Trousers", "Pleated Chinos"],
    "Knitwear": ["Cashmere Sweater", "Merino Turtleneck", "Cable Cardigan"],
    "Accessories": ["Leather Belt", "Silk Scarf", "Leather Tote"],
}
STYLES = ["minimalist", "classic", "streetwear", "elegant", "casual"]
EXTRA_COLORS = ["Red", "Slate", "Rust", "Blush"]
COLOR_VALUES = {
    "Black": "#1A1A1A",
    "White": "#FFFFFF",
    "Charcoal": "#36454F",
    "Camel": "#C19A6B",
    "Navy": "#1B2838",
    "Ivory": "#FFFFF0",
    "Sage": "#9CAF88",
    "Sand": "#C2B280",
    "Olive": "#556B2F",
    "Burgundy": "#722F37",
    "Forest": "#228B22",
    "Oatmeal": "#D3C4A5",
}


def _color_names():
    names = set(EXTRA_COLORS)
    for palette in PALETTE_COLORS.values():
        names |= palette
    return sorted(names)


def generate_fake_catalog(
    num_products: int = DEFAULT_NUM_PRODUCTS,
    seed: int = DEFAULT_SEED,
    end_date: Optional[datetime] = None,
) -> pd.DataFrame:
    """Generate synthetic catalog documents.

    Args:
        num_products: Number of products to create. Must be positive.
        seed: Random seed for reproducibility.
        end_date: Newest possible creation time (default: now, UTC).

    Returns:
        DataFrame with one camelCase product document per row, newest first.

    Raises:
        ValueError: If num_products is not positive.
    """
    if num_products <= 0:
        raise ValueError("num_products must be positive")

    rng = random.Random(seed)
    end_date = end_date or datetime.now(timezone.utc)
    colors = _color_names()

    products = []
    for idx in range(1, num_products + 1):
        category = rng.choice(sorted(CATEGORIES))
        base_name = rng.choice(CATEGORIES[category])
        name = f"{base_name} {idx:03d}"
        price = float(rng.randrange(85, 900, 5))
        on_sale = rng.random() < 0.2
        created_at = end_date - timedelta(
            days=rng.randrange(DEFAULT_DAYS_BACK),
            seconds=rng.randrange(86400),
        )

        products.append(
            {
                "id": str(idx),
                "slug": name.lower().replace(" ", "-"),
                "name": name,
                "price": price,
                "originalPrice": round(price * 1.25) if on_sale else None,
                "category": category,
                "styles": rng.sample(STYLES, rng.randint(0, 2)),
                "colors": [
                    {"name": c, "value": COLOR_VALUES.get(c, "#808080")}
                    for c in rng.sample(colors, rng.randint(1, 3))
                ],
                "images": [
                    f"https://images.example.com/{idx}/front.jpg",
                    f"https://images.example.com/{idx}/back.jpg",
                ],
                "isFeatured": rng.random() < 0.3,
                "isActive": rng.random() > 0.05,
                "createdAt": created_at.isoformat(),
                "publishAt": None,
            }
        )

    df = pd.DataFrame(products)
    return df.sort_values("createdAt", ascending=False).reset_index(drop=True)


def generate_fake_preferences(
    store: PreferenceStore,
    num_shoppers: int = DEFAULT_NUM_SHOPPERS,
    seed: int = DEFAULT_SEED,
) -> int:
    """Fill a preference store with random completed quizzes.

    Shopper ids run from "1" to str(num_shoppers). Returns the count written.
    """
    rng = random.Random(seed)
    for user_id in range(1, num_shoppers + 1):
        answers = {key: rng.choice(sorted(options)) for key, options in QUIZ_OPTIONS.items()}
        answers["preferredSize"] = rng.choice(["XS", "S", "M", "L", "XL"])
        answers["hasCompletedQuiz"] = True
        store.update(str(user_id), answers)
    return num_shoppers


def main() -> None:
    """Generate the catalog and quiz answers and print a summary."""
    parser = argparse.ArgumentParser(description="Generate a fake catalog")
    parser.add_argument("--num-products", type=int, default=DEFAULT_NUM_PRODUCTS)
    parser.add_argument("--num-shoppers", type=int, default=DEFAULT_NUM_SHOPPERS)
    parser.add_argument("--output", type=str, default="data/catalog.json")
    parser.add_argument("--preferences-dir", type=str, default="data/preferences")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    args = parser.parse_args()

    print(f"Generating {args.num_products} fake products...")
    try:
        df = generate_fake_catalog(num_products=args.num_products, seed=args.seed)
    except ValueError as e:
        print(f"Error generating data: {e}")
        return

    save_catalog_documents(df.to_dict(orient="records"), args.output)

    store = PreferenceStore(args.preferences_dir)
    store.load()
    generate_fake_preferences(store, num_shoppers=args.num_shoppers, seed=args.seed)

    print(f"\nData generated successfully!")
    print(f"Catalog saved to: {args.output}")
    print(f"Preferences saved to: {store.store_path}")
    print(f"\nCatalog summary:")
    print(f"  Total products: {len(df)}")
    print(f"  Featured: {int(df['isFeatured'].sum())}")
    print(f"  On sale: {int(df['originalPrice'].notna().sum())}")
    print(f"  Products per category:")
    print(df["category"].value_counts().to_string())


if __name__ == "__main__":
    main()
