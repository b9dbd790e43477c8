"""
Tests for the HTTP endpoints.
The page fetch is served by httpx's mock transport; no network access.
"""
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from app.adapters.page_fetcher import PageFetcher
from app.main import app as api, extractor


PRODUCT_URL = "https://shop.example/product/1"

PRODUCT_PAGE = (
    "<html><head>"
    '<script type="application/ld+json">'
    + json.dumps({
        "@type": "Product",
        "name": "Widget",
        "image": "/img/widget.jpg",
        "offers": {"price": "1.234,56", "priceCurrency": "EUR"},
    })
    + "</script>"
    '<meta property="og:title" content="Other Title">'
    "</head><body></body></html>"
)


@pytest.fixture
def client():
    return TestClient(api)


@pytest.fixture
def serve_page(monkeypatch):
    """Route the extractor's fetches to a handler instead of the network."""
    requested = []

    def install(handler):
        def recording_handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return handler(request)

        monkeypatch.setattr(
            extractor, "fetcher", PageFetcher(transport=httpx.MockTransport(recording_handler))
        )
        return requested

    return install


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_product_details(client, serve_page):
    serve_page(lambda request: httpx.Response(200, html=PRODUCT_PAGE))

    response = client.post("/api/product/details", json={"url": PRODUCT_URL})

    assert response.status_code == 200
    assert response.headers["x-trace-id"]
    assert response.json() == {
        "details": {
            "name": "Widget",
            "imageUrl": "https://shop.example/img/widget.jpg",
            "price": 1234.56,
            "currency": "EUR",
        }
    }


def test_product_details_network_failure_is_all_null(client, serve_page):
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    serve_page(handler)

    response = client.post("/api/product/details", json={"url": PRODUCT_URL})

    assert response.status_code == 200
    assert response.json() == {
        "details": {"name": None, "imageUrl": None, "price": None, "currency": None}
    }


@pytest.mark.parametrize("body", [
    {},
    {"url": ""},
    {"url": 123},
    {"url": None},
    {"url": "not a url"},
    {"url": "/relative/path"},
    ["https://shop.example/product/1"],
])
def test_product_details_rejects_invalid_url(client, serve_page, body):
    requested = serve_page(lambda request: httpx.Response(200, html=PRODUCT_PAGE))

    response = client.post("/api/product/details", json=body)

    assert response.status_code == 400
    assert response.json() == {"details": None}
    assert requested == []


def test_product_details_rejects_malformed_json(client):
    response = client.post(
        "/api/product/details",
        content=b"{url: nope",
        headers={"content-type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json() == {"details": None}


def test_product_image(client, serve_page):
    serve_page(lambda request: httpx.Response(200, html=PRODUCT_PAGE))

    response = client.post("/api/product/image", json={"url": PRODUCT_URL})

    assert response.status_code == 200
    assert response.json() == {"imageUrl": "https://shop.example/img/widget.jpg"}


def test_product_image_rejects_missing_url(client):
    response = client.post("/api/product/image", json={})
    assert response.status_code == 400
    assert response.json() == {"imageUrl": None}


def test_product_details_overflowing_price_is_null(client, serve_page):
    page = (
        "<html><head>"
        '<meta property="og:title" content="Huge">'
        f'<meta name="price" content="{"9" * 400}">'
        "</head></html>"
    )
    serve_page(lambda request: httpx.Response(200, html=page))

    response = client.post("/api/product/details", json={"url": PRODUCT_URL})

    assert response.status_code == 200
    assert response.json()["details"]["name"] == "Huge"
    assert response.json()["details"]["price"] is None
