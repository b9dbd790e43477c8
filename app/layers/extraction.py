"""
Extraction Layer for the Wishlist Product Extractor.
Fuses JSON-LD, meta tags and text heuristics into one ParsedProduct.
"""
from typing import Callable, Optional, Sequence, Tuple

from bs4 import BeautifulSoup

from app.adapters.page_fetcher import PageFetcher
from app.layers.meta_tags import (
    MetaTagLayer,
    TITLE_SELECTORS,
    IMAGE_SELECTORS,
    PRICE_SELECTORS,
    CURRENCY_SELECTORS,
)
from app.layers.structured_data import (
    StructuredDataLayer,
    jsonld_name,
    jsonld_image,
    jsonld_offer_price,
    jsonld_offer_currency,
)
from app.models.product import FieldSource, ParsedProduct
from app.utils.logger import LayerLogger
from app.utils.price import normalize_price, infer_currency
from app.utils.urls import resolve_url


Candidate = Tuple[FieldSource, Callable[[], Optional[str]]]


class ProductExtractor:
    """
    Product metadata extractor.

    extract() is a pure function of (html, url): no state is kept between
    calls. fetch_and_extract() adds the network fetch in front of it.

    Field precedence is JSON-LD first, then meta tags, then heuristics.
    """

    def __init__(self, fetcher: Optional[PageFetcher] = None):
        self.logger = LayerLogger("extraction_layer")
        self.fetcher = fetcher or PageFetcher()
        self.structured_data = StructuredDataLayer()
        self.meta_tags = MetaTagLayer()

    async def fetch_and_extract(self, url: str) -> ParsedProduct:
        """Fetch the page at url and extract its product metadata."""
        html = await self.fetcher.fetch(url)
        if html is None:
            self.logger.log_fallback(
                from_source="page_fetch",
                to_source="empty_result",
                reason="fetch_failed",
                url=url
            )
            return ParsedProduct.empty()

        return self.extract(html, url)

    def extract(self, html: str, url: str) -> ParsedProduct:
        """
        Extract product metadata from an HTML document.

        Never raises for page content: whatever cannot be read is left None.
        """
        self.logger.log_action("extract_product", "started", url=url)

        try:
            product = self._extract(html or "", url)
        except Exception as e:
            self.logger.log_error(
                f"Extraction failed: {str(e)}",
                error_type=type(e).__name__,
                url=url
            )
            return ParsedProduct.empty()

        self.logger.log_action(
            "extract_product",
            "completed",
            url=url,
            fields_present=product.get_present_fields(),
            fields_missing=product.get_missing_fields(),
        )
        return product

    def _extract(self, html: str, url: str) -> ParsedProduct:
        soup = BeautifulSoup(html, "lxml")

        items = self.structured_data.parse_all(soup)
        product_json = self.structured_data.find_product(items)
        self.logger.log_decision(
            decision="jsonld_product_found" if product_json else "jsonld_product_missing",
            reason=f"{len(items)} JSON-LD nodes on page",
            url=url
        )

        title, title_source = self._resolve("name", [
            (FieldSource.JSON_LD, lambda: jsonld_name(product_json)),
            (FieldSource.META_TAG, lambda: self.meta_tags.pick(soup, TITLE_SELECTORS)),
            (FieldSource.TITLE_TAG, lambda: self.meta_tags.document_title(soup)),
        ])

        raw_image, image_source = self._resolve("image", [
            (FieldSource.JSON_LD, lambda: jsonld_image(product_json)),
            (FieldSource.META_TAG, lambda: self.meta_tags.pick(soup, IMAGE_SELECTORS)),
        ])
        image_url = resolve_url(raw_image, url)

        raw_price, price_source = self._resolve("price", [
            (FieldSource.JSON_LD, lambda: jsonld_offer_price(product_json)),
            (FieldSource.META_TAG, lambda: self.meta_tags.pick(soup, PRICE_SELECTORS)),
        ])
        price = normalize_price(raw_price)
        if raw_price and price is None:
            self.logger.log_decision(
                decision="price_dropped",
                reason="no_numeric_value",
                url=url,
                raw_price=raw_price
            )

        currency, currency_source = self._resolve("currency", [
            (FieldSource.JSON_LD, lambda: jsonld_offer_currency(product_json)),
            (FieldSource.META_TAG, lambda: self.meta_tags.pick(soup, CURRENCY_SELECTORS)),
            (FieldSource.INFERRED, lambda: infer_currency(raw_price)),
        ])
        self.logger.log_action(
            "resolve_fields",
            "completed",
            url=url,
            sources={
                "name": title_source.value,
                "image": image_source.value,
                "price": price_source.value,
                "currency": currency_source.value,
            },
        )

        return ParsedProduct(
            name=title.strip() if title and title.strip() else None,
            image_url=image_url,
            price=price,
            currency=currency,
        )

    def _resolve(
        self,
        field: str,
        candidates: Sequence[Candidate],
    ) -> Tuple[Optional[str], FieldSource]:
        """Evaluate candidates in order; the first non-empty value wins."""
        for source, getter in candidates:
            value = getter()
            if value:
                self.logger.log_resolution(field, source.value, value)
                return value, source

        self.logger.log_resolution(field, FieldSource.NONE.value, None)
        return None, FieldSource.NONE

