"""
Product models for the Wishlist Product Extractor.
ParsedProduct is the single output of an extraction, whatever sources fed it.
"""
from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


class FieldSource(str, Enum):
    """Where a resolved product field came from."""
    JSON_LD = "json_ld"
    META_TAG = "meta_tag"
    TITLE_TAG = "title_tag"
    INFERRED = "inferred"
    NONE = "none"


class ParsedProduct(BaseModel):
    """
    Best-effort product metadata recovered from a product page.

    Every field is optional on its own; a page that yields only a name
    is a normal result, not an error.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    price: Optional[float] = None
    currency: Optional[str] = None

    @classmethod
    def empty(cls) -> "ParsedProduct":
        """The all-absent result."""
        return cls()

    def get_present_fields(self) -> List[str]:
        """Return list of fields that have values."""
        return [name for name, value in self.model_dump().items() if value is not None]

    def get_missing_fields(self) -> List[str]:
        """Return list of fields without values."""
        return [name for name, value in self.model_dump().items() if value is None]


class ProductUrlRequest(BaseModel):
    """Request body for the product endpoints."""
    url: str


class ProductDetailsResponse(BaseModel):
    """Response model for product detail extraction."""
    details: Optional[ParsedProduct] = None


class ProductImageResponse(BaseModel):
    """Response model for product image lookup."""
    model_config = ConfigDict(populate_by_name=True)

    image_url: Optional[str] = Field(default=None, alias="imageUrl")
