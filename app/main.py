"""
Wishlist Product Extractor - FastAPI Application
Main entry point with REST API endpoints used by the wishlist UI.
"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from app.config import config
from app.utils.logger import get_logger, set_trace_id
from app.utils.urls import is_fetchable_url
from app.layers.extraction import ProductExtractor
from app.models.product import (
    ProductUrlRequest,
    ProductDetailsResponse,
    ProductImageResponse,
)


APP_VERSION = "1.0.0"

# Initialize FastAPI app
app = FastAPI(
    title="Wishlist Product Extractor",
    description="Recovers product name, image, price and currency from arbitrary shop pages",
    version=APP_VERSION,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize layers
extractor = ProductExtractor()

logger = get_logger("main")


async def _read_product_url(request: Request) -> Optional[str]:
    """
    Pull a fetchable URL out of the request body.

    Returns None for a missing or malformed body, a missing or non-string
    url, or anything that is not an absolute http(s) URL.
    """
    try:
        body = await request.json()
    except ValueError:
        return None

    try:
        payload = ProductUrlRequest.model_validate(body)
    except ValidationError:
        return None

    url = payload.url.strip()
    return url if is_fetchable_url(url) else None


# API Routes
@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": APP_VERSION}


@app.post("/api/product/details")
async def product_details(request: Request):
    """
    Extract product details for a shop URL.

    Always answers 200 with whatever could be recovered; only an invalid
    request body is rejected with 400.
    """
    trace_id = set_trace_id()
    headers = {"X-Trace-Id": trace_id}

    url = await _read_product_url(request)
    if url is None:
        logger.warning("product_details_rejected", reason="invalid_url", trace_id=trace_id)
        return JSONResponse({"details": None}, status_code=400, headers=headers)

    logger.info("product_details_request", url=url, trace_id=trace_id)

    details = await extractor.fetch_and_extract(url)
    response = ProductDetailsResponse(details=details)
    return JSONResponse(response.model_dump(by_alias=True), headers=headers)


@app.post("/api/product/image")
async def product_image(request: Request):
    """Return only the product image URL for a shop URL."""
    trace_id = set_trace_id()
    headers = {"X-Trace-Id": trace_id}

    url = await _read_product_url(request)
    if url is None:
        logger.warning("product_image_rejected", reason="invalid_url", trace_id=trace_id)
        return JSONResponse({"imageUrl": None}, status_code=400, headers=headers)

    logger.info("product_image_request", url=url, trace_id=trace_id)

    details = await extractor.fetch_and_extract(url)
    response = ProductImageResponse(image_url=details.image_url)
    return JSONResponse(response.model_dump(by_alias=True), headers=headers)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)
