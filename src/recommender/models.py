"""Product and preference models.

Catalog documents and quiz answers travel as camelCase JSON; the models
expose snake_case attributes and serialize back with camelCase aliases.
Unknown document fields (descriptions, sizes, variants, ...) are kept as-is
so they round-trip to API clients untouched.
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


class ColorVariant(BaseModel):
    """A named colour a product is offered in."""

    model_config = ConfigDict(extra="allow")

    name: str
    value: Optional[str] = None


class Product(BaseModel):
    """A catalog product document.

    Attributes:
        id: Catalog identifier.
        slug: URL slug, unique across the catalog.
        styles: Style tags such as "minimalist" or "streetwear".
        category: Category name such as "Tops" or "Outerwear".
        colors: Ordered colour variants.
        is_featured: Editorial "featured" flag.
        original_price: Pre-sale price; present only when on sale.
        created_at: Creation time, used for recency ordering.
        publish_at: Scheduled publish time; future values hide the product.
        is_active: Only active products are eligible for recommendation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str
    slug: Optional[str] = None
    name: str = ""
    price: Optional[float] = None
    original_price: Optional[float] = None
    category: str = ""
    styles: List[str] = Field(default_factory=list)
    colors: List[ColorVariant] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    is_featured: bool = False
    is_active: Optional[bool] = True
    created_at: Optional[datetime] = None
    publish_at: Optional[datetime] = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value):
        return value if isinstance(value, str) else str(value)

    @field_validator("styles", "colors", "images", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("created_at", "publish_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @computed_field(alias="hoverImage")
    @property
    def hover_image(self) -> Optional[str]:
        """Second product image, falling back to the first."""
        if len(self.images) > 1:
            return self.images[1]
        return self.images[0] if self.images else None

    def to_document(self) -> dict:
        """Serialize to the camelCase JSON shape served to clients."""
        return self.model_dump(by_alias=True, mode="json")


class ScoredProduct(Product):
    """A product annotated with its match against one shopper's quiz answers.

    Created per request and never persisted.
    """

    match_score: int
    match_reason: str


class UserPreferences(BaseModel):
    """Style-quiz answers for one shopper.

    Answer values are kept as plain strings: values outside the known quiz
    options are stored untouched and simply earn no points when scoring.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    favorite_style: Optional[str] = None
    color_palette: Optional[str] = None
    preferred_fit: Optional[str] = None
    wardrobe_priority: Optional[str] = None
    preferred_size: Optional[str] = None
    has_completed_quiz: bool = False

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
