"""
Structured Data Layer for the Wishlist Product Extractor.
Finds the schema.org Product described by a page's JSON-LD blocks.
"""
import json
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from app.utils.logger import LayerLogger


JSONLD_CONTENT_TYPE = "application/ld+json"
PRODUCT_TYPE = "Product"

# Keys an ImageObject may carry its URL under, most specific first
IMAGE_OBJECT_URL_KEYS = ("url", "contentUrl", "@id")


def _is_jsonld_type(value: Optional[str]) -> bool:
    return value is not None and value.strip().lower() == JSONLD_CONTENT_TYPE


def is_product(entity: Any) -> bool:
    """True if a JSON-LD node declares @type Product (alone or in a list)."""
    if not isinstance(entity, dict):
        return False
    schema_type = entity.get("@type")
    if schema_type == PRODUCT_TYPE:
        return True
    return isinstance(schema_type, list) and PRODUCT_TYPE in schema_type


class StructuredDataLayer:
    """
    JSON-LD parsing for product pages.

    Parsing is done once per page. Blocks that are empty or not valid JSON
    are skipped one at a time; they never abort the extraction.
    """

    def __init__(self):
        self.logger = LayerLogger("structured_data")

    def parse_all(self, soup: BeautifulSoup) -> List[Dict[str, Any]]:
        """
        Collect every JSON-LD object on the page in document order.

        A block holding an array contributes each of its objects; anything
        that is not an object is dropped.
        """
        items: List[Dict[str, Any]] = []

        for index, script in enumerate(soup.find_all("script", attrs={"type": _is_jsonld_type})):
            content = (script.string or script.get_text() or "").strip()
            if not content:
                continue

            try:
                data = json.loads(content)
            except ValueError as e:
                self.logger.log_skip(f"jsonld_block_{index}", reason=f"invalid_json: {e}")
                continue

            if isinstance(data, list):
                items.extend(item for item in data if isinstance(item, dict))
            elif isinstance(data, dict):
                items.append(data)

        self.logger.log_action("jsonld_parse", "completed", total_nodes=len(items))
        return items

    def find_product(self, items: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Pick the product node.

        Top-level nodes are searched first; only if none is a Product are
        the @graph containers searched.
        """
        for item in items:
            if is_product(item):
                return item

        for item in items:
            graph = item.get("@graph")
            if not isinstance(graph, list):
                continue
            for entry in graph:
                if is_product(entry):
                    return entry

        return None


# =========================================================================
# GUARDED FIELD ACCESS
# =========================================================================
#
# JSON-LD in the wild is untyped. Every accessor checks the shape it
# expects and returns None for anything else.
# =========================================================================


def jsonld_name(product: Optional[Dict[str, Any]]) -> Optional[str]:
    """Product name, only if it is a non-empty string."""
    if not product:
        return None
    name = product.get("name")
    return name if isinstance(name, str) and name.strip() else None


def _image_object_url(image: Dict[str, Any]) -> Optional[str]:
    for key in IMAGE_OBJECT_URL_KEYS:
        value = image.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def jsonld_image(product: Optional[Dict[str, Any]]) -> Optional[str]:
    """
    First usable image URL of the product.

    Handles:
    - String: single URL
    - List of strings or ImageObjects
    - dict: single ImageObject
    """
    if not product:
        return None

    image = product.get("image")
    if isinstance(image, str):
        return image if image.strip() else None
    if isinstance(image, dict):
        return _image_object_url(image)
    if isinstance(image, list):
        for entry in image:
            if isinstance(entry, str) and entry.strip():
                return entry
            if isinstance(entry, dict):
                url = _image_object_url(entry)
                if url:
                    return url
    return None


def _first_offer(product: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    offers = product.get("offers")
    if isinstance(offers, dict):
        return offers
    if isinstance(offers, list):
        for offer in offers:
            if isinstance(offer, dict):
                return offer
    return None


def jsonld_offer_price(product: Optional[Dict[str, Any]]) -> Optional[str]:
    """Offer price as raw text; numbers are stringified, anything else ignored."""
    if not product:
        return None
    offer = _first_offer(product)
    if offer is None:
        return None

    price = offer.get("price")
    if isinstance(price, bool):
        return None
    if isinstance(price, str):
        return price if price.strip() else None
    if isinstance(price, (int, float)):
        return str(price)
    return None


def jsonld_offer_currency(product: Optional[Dict[str, Any]]) -> Optional[str]:
    """Offer priceCurrency, only if it is a non-empty string."""
    if not product:
        return None
    offer = _first_offer(product)
    if offer is None:
        return None
    currency = offer.get("priceCurrency")
    return currency if isinstance(currency, str) and currency.strip() else None
