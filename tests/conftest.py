"""Shared fixtures for the Atelier test suite."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Generator, List

import pytest
from fastapi.testclient import TestClient

from src.api import dependencies
from src.api.metrics import metrics_service
from src.config import get_settings
from src.recommender.catalog import save_catalog_documents
from src.recommender.models import Product, UserPreferences

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def product_doc(product_id: str, days_old: int = 0, **fields: Any) -> Dict[str, Any]:
    """Build a camelCase product document created ``days_old`` days before BASE_TIME."""
    doc = {
        "id": product_id,
        "slug": f"product-{product_id}",
        "name": f"Product {product_id}",
        "price": 100.0,
        "originalPrice": None,
        "category": "Accessories",
        "styles": [],
        "colors": [],
        "images": [f"https://img.example.com/{product_id}.jpg"],
        "isFeatured": False,
        "isActive": True,
        "createdAt": (BASE_TIME - timedelta(days=days_old)).isoformat(),
    }
    doc.update(fields)
    return doc


def make_product(product_id: str = "1", days_old: int = 0, **fields: Any) -> Product:
    return Product.model_validate(product_doc(product_id, days_old, **fields))


@pytest.fixture
def minimalist_prefs() -> UserPreferences:
    """Completed quiz: minimalist, neutrals, slim fit, comfort first."""
    return UserPreferences(
        favoriteStyle="minimalist",
        colorPalette="neutrals",
        preferredFit="slim",
        wardrobePriority="comfort",
        hasCompletedQuiz=True,
    )


@pytest.fixture
def catalog_documents() -> List[Dict[str, Any]]:
    """A small luxury catalog with a mix of featured, sale and inactive items."""
    return [
        product_doc(
            "coat",
            days_old=10,
            name="Oversized Wool Coat",
            category="Outerwear",
            styles=["minimalist", "elegant"],
            colors=[
                {"name": "Charcoal", "value": "#36454F"},
                {"name": "Camel", "value": "#C19A6B"},
                {"name": "Navy", "value": "#1B2838"},
            ],
            images=["https://img.example.com/coat-1.jpg", "https://img.example.com/coat-2.jpg"],
            isFeatured=True,
        ),
        product_doc(
            "shirt",
            days_old=9,
            name="Silk Blend Relaxed Shirt",
            category="Tops",
            styles=["elegant", "classic"],
            colors=[{"name": "Ivory"}, {"name": "Sage"}, {"name": "Black"}],
            isFeatured=True,
        ),
        product_doc(
            "trousers",
            days_old=8,
            name="Tailored Linen Trousers",
            category="Bottoms",
            styles=["classic", "minimalist"],
            colors=[{"name": "Sand"}, {"name": "Olive"}],
        ),
        product_doc(
            "sweater",
            days_old=7,
            name="Cashmere Knit Sweater",
            category="Knitwear",
            styles=["elegant", "casual"],
            colors=[{"name": "Oatmeal"}, {"name": "Burgundy"}],
            isFeatured=True,
        ),
        product_doc(
            "blazer",
            days_old=6,
            name="Structured Wool Blazer",
            category="Outerwear",
            styles=["classic"],
            colors=[{"name": "Black"}],
            price=490.0,
            originalPrice=650.0,
        ),
        product_doc(
            "tee",
            days_old=1,
            name="Cotton Jersey Tee",
            category="Tops",
            styles=["minimalist", "casual"],
            colors=[{"name": "White"}, {"name": "Black"}],
        ),
        product_doc(
            "retired",
            days_old=0,
            name="Retired Hoodie",
            category="Tops",
            styles=["minimalist"],
            colors=[{"name": "Black"}],
            isFeatured=True,
            isActive=False,
        ),
        product_doc(
            "scheduled",
            days_old=0,
            name="Next Season Parka",
            category="Outerwear",
            styles=["minimalist"],
            isFeatured=True,
            publishAt="2999-01-01T00:00:00+00:00",
        ),
    ]


@pytest.fixture
def catalog_path(tmp_path: Path, catalog_documents) -> Path:
    path = tmp_path / "catalog.json"
    save_catalog_documents(catalog_documents, str(path))
    return path


@pytest.fixture
def client(tmp_path: Path, catalog_path: Path, monkeypatch) -> Generator[TestClient, None, None]:
    """Test client whose stores read the temporary catalog and preferences."""
    from src.api.main import app

    monkeypatch.setenv("ATELIER_CATALOG_PATH", str(catalog_path))
    monkeypatch.setenv("ATELIER_PREFERENCES_DIR", str(tmp_path / "preferences"))
    get_settings.cache_clear()
    dependencies.reset_stores()
    metrics_service.reset()

    yield TestClient(app)

    dependencies.reset_stores()
    get_settings.cache_clear()
