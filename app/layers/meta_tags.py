"""
Meta Tag Layer for the Wishlist Product Extractor.
Reads Open Graph, Twitter card and microdata tags in trust order.
"""
from typing import Optional, Sequence

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from app.utils.logger import LayerLogger


# Selector lists per field, most trusted first
TITLE_SELECTORS = (
    'meta[property="og:title"]',
    'meta[name="twitter:title"]',
    'meta[name="title"]',
)

IMAGE_SELECTORS = (
    'meta[property="og:image"]',
    'meta[property="og:image:url"]',
    'meta[name="twitter:image"]',
    'meta[itemprop="image"]',
    'link[rel="image_src"]',
)

PRICE_SELECTORS = (
    'meta[property="product:price:amount"]',
    'meta[property="og:price:amount"]',
    'meta[name="price"]',
    'meta[itemprop="price"]',
)

CURRENCY_SELECTORS = (
    'meta[property="product:price:currency"]',
    'meta[property="og:price:currency"]',
    'meta[itemprop="priceCurrency"]',
)


def _attr_text(value) -> Optional[str]:
    # bs4 returns multi-valued attributes (rel, class) as lists
    if isinstance(value, list):
        value = " ".join(value)
    if isinstance(value, str) and value.strip():
        return value
    return None


class MetaTagLayer:
    """First-match-wins lookup over ordered selector lists."""

    def __init__(self):
        self.logger = LayerLogger("meta_tags")

    def pick(self, soup: BeautifulSoup, selectors: Sequence[str]) -> Optional[str]:
        """
        Return the first non-empty content (or href) among the selectors.

        Only the first element matching each selector is consulted.
        """
        for selector in selectors:
            try:
                element = soup.select_one(selector)
            except SelectorSyntaxError as e:
                self.logger.log_skip(selector, reason=f"invalid_selector: {e}")
                continue

            if element is None:
                continue

            value = _attr_text(element.get("content")) or _attr_text(element.get("href"))
            if value:
                return value

        return None

    def document_title(self, soup: BeautifulSoup) -> Optional[str]:
        """Text of the first <title> element."""
        title_tag = soup.find("title")
        if title_tag:
            text = title_tag.get_text()
            return text if text.strip() else None
        return None
