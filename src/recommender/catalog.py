"""File-backed product catalog.

This module loads catalog documents from a JSON file, validates them into
``Product`` models and serves read-only snapshots to the ranking code.
"""

import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd
from pydantic import ValidationError

from src.api.exceptions import CatalogLoadError, CatalogNotFoundError, ProductNotFoundError
from src.recommender.models import Product
from src.recommender.ranking import is_published

# Configure module logger
logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = {"id"}

# Derived fields that are recomputed on load
DERIVED_FIELDS = ("hoverImage", "matchScore", "matchReason")


def load_catalog_documents(catalog_path: str) -> List[Dict[str, Any]]:
    """Read catalog documents from a JSON file.

    The file holds a JSON array of product documents. Missing values are
    normalised to None so optional fields validate cleanly.

    Args:
        catalog_path: Path to the catalog JSON file.

    Returns:
        List of raw product documents.

    Raises:
        FileNotFoundError: If the catalog file does not exist.
        ValueError: If documents are missing required fields.
    """
    catalog_file = Path(catalog_path)
    if not catalog_file.exists():
        raise FileNotFoundError(f"Catalog file not found: {catalog_path}")

    logger.info(f"Loading catalog from {catalog_path}")
    df = pd.read_json(catalog_file, orient="records", dtype=False, convert_dates=False)

    if df.empty:
        logger.warning(f"Catalog {catalog_path} contains no products")
        return []

    if not REQUIRED_COLUMNS.issubset(df.columns):
        missing = REQUIRED_COLUMNS - set(df.columns)
        raise ValueError(f"Catalog missing required fields: {missing}")

    df = df.drop(columns=[c for c in DERIVED_FIELDS if c in df.columns])
    df = df.astype(object).where(df.notna(), None)

    # Drop keys the document never had so model defaults apply
    documents = [
        {key: value for key, value in record.items() if value is not None}
        for record in df.to_dict(orient="records")
    ]

    logger.info(f"Loaded {len(documents)} product documents")
    return documents


def save_catalog_documents(documents: Sequence[Dict[str, Any]], catalog_path: str) -> None:
    """Write catalog documents to a JSON file, creating parent directories."""
    catalog_file = Path(catalog_path)
    catalog_file.parent.mkdir(parents=True, exist_ok=True)

    pd.DataFrame(list(documents)).to_json(
        catalog_file,
        orient="records",
        date_format="iso",
        indent=2,
    )
    logger.info(f"Saved {len(documents)} products to {catalog_path}")


def parse_products(documents: Sequence[Dict[str, Any]]) -> List[Product]:
    """Validate raw documents into Product models."""
    return [Product.model_validate(doc) for doc in documents]


class CatalogStore:
    """In-memory snapshot of the product catalog.

    The snapshot is replaced wholesale on ``load``; readers always receive a
    list that is never mutated afterwards.
    """

    def __init__(self, catalog_path: str):
        self.catalog_path = catalog_path
        self._lock = threading.Lock()
        self._products: List[Product] = []
        self._loaded_at: Optional[datetime] = None

    @property
    def is_loaded(self) -> bool:
        return self._loaded_at is not None

    @property
    def loaded_at(self) -> Optional[datetime]:
        return self._loaded_at

    @property
    def num_products(self) -> int:
        return len(self._products)

    def load(self) -> int:
        """(Re)load the catalog from disk.

        Returns:
            Number of products loaded.

        Raises:
            CatalogNotFoundError: If the catalog file does not exist.
            CatalogLoadError: If the file cannot be parsed or validated.
        """
        try:
            products = parse_products(load_catalog_documents(self.catalog_path))
        except FileNotFoundError:
            logger.error(f"Catalog not found in {self.catalog_path}")
            raise CatalogNotFoundError(self.catalog_path)
        except (ValueError, ValidationError) as e:
            logger.error(f"Failed to load catalog: {e}", exc_info=True)
            raise CatalogLoadError(self.catalog_path, e) from e

        with self._lock:
            self._products = products
            self._loaded_at = datetime.now(timezone.utc)

        logger.info(
            "Catalog loaded",
            extra={"catalog_path": self.catalog_path, "num_products": len(products)},
        )
        return len(products)

    def all_products(self) -> List[Product]:
        """Every product in the snapshot, including inactive ones."""
        return self._products

    def published_products(self, now: Optional[datetime] = None) -> List[Product]:
        """Active products whose scheduled publish time has passed."""
        now = now or datetime.now(timezone.utc)
        return [p for p in self._products if is_published(p, now)]

    def get_product(self, id_or_slug: str, now: Optional[datetime] = None) -> Product:
        """Look up a published product by id, falling back to slug.

        Raises:
            ProductNotFoundError: If no published product matches.
        """
        published = self.published_products(now)
        for product in published:
            if product.id == id_or_slug:
                return product
        for product in published:
            if product.slug == id_or_slug:
                return product
        raise ProductNotFoundError(id_or_slug)
