"""
Configuration management for the Wishlist Product Extractor.
Handles environment variables and application settings.
"""
import os
from typing import List
from dotenv import load_dotenv

load_dotenv()


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_6) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class Config:
    """Application configuration loaded from environment variables."""

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "json")  # json or console

    # Page fetching
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))
    USER_AGENT: str = os.getenv("USER_AGENT", DEFAULT_USER_AGENT)
    # English locale biases retailers toward en-US price formatting
    ACCEPT_LANGUAGE: str = os.getenv("ACCEPT_LANGUAGE", "en-US,en;q=0.9")

    # CORS
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    @classmethod
    def get_cors_origins(cls) -> List[str]:
        """Return allowed CORS origins as a list."""
        origins = [o.strip() for o in cls.CORS_ORIGINS.split(",")]
        return [o for o in origins if o] or ["*"]

    @classmethod
    def get_fetch_headers(cls) -> dict:
        """Request headers mimicking a browser."""
        return {
            "User-Agent": cls.USER_AGENT,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": cls.ACCEPT_LANGUAGE,
        }


config = Config()
