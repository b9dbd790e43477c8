"""Layers package initialization."""
from app.layers.structured_data import StructuredDataLayer
from app.layers.meta_tags import MetaTagLayer
from app.layers.extraction import ProductExtractor

__all__ = [
    "StructuredDataLayer",
    "MetaTagLayer",
    "ProductExtractor",
]
