"""
Page Fetcher Adapter for the Wishlist Product Extractor.
Downloads product pages; never raises on network trouble.
"""
from typing import Optional

import httpx

from app.config import config
from app.utils.logger import LayerLogger


# Content types we are willing to hand to the HTML parser
TEXT_CONTENT_MARKERS = ("text/", "html", "xml", "json")


class PageFetcher:
    """
    HTTP adapter that fetches a product page as text.

    Returns None on transport failure so the caller can degrade to an
    empty result. Non-OK responses are still read: many shops serve the
    product markup together with a 403/404 to unknown clients.
    """

    def __init__(
        self,
        timeout: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT
        self.transport = transport
        self.logger = LayerLogger("page_fetcher")

    async def fetch(self, url: str) -> Optional[str]:
        """
        Fetch the page at url.

        Returns:
            The response body, "" for non-text responses, or None when the
            request could not be completed.
        """
        self.logger.log_action("fetch_page", "started", url=url)

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = await client.get(url, headers=config.get_fetch_headers())
        except httpx.HTTPError as e:
            self.logger.log_error(
                f"Failed to fetch URL: {str(e)}",
                error_type="http_error",
                url=url
            )
            return None
        except httpx.InvalidURL as e:
            self.logger.log_error(
                f"Invalid URL: {str(e)}",
                error_type="invalid_url",
                url=url
            )
            return None

        if not response.is_success:
            self.logger.log_decision(
                decision="parse_error_response",
                reason="non_ok_status_body_still_read",
                url=url,
                status_code=response.status_code,
            )

        content_type = response.headers.get("content-type", "")
        if content_type and not self._is_text(content_type):
            self.logger.log_fallback(
                from_source="response_body",
                to_source="empty_document",
                reason="non_text_response",
                url=url,
                content_type=content_type,
            )
            return ""

        html = response.text
        self.logger.log_action(
            "fetch_page",
            "completed",
            url=url,
            status_code=response.status_code,
            content_length=len(html)
        )
        return html

    def _is_text(self, content_type: str) -> bool:
        """True if the declared content type is something we can parse as text."""
        content_type = content_type.lower()
        return any(marker in content_type for marker in TEXT_CONTENT_MARKERS)
