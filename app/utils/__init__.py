"""Utils package initialization."""
from app.utils.logger import get_logger, LayerLogger, set_trace_id, get_trace_id
from app.utils.price import normalize_price, infer_currency
from app.utils.urls import resolve_url, is_fetchable_url

__all__ = [
    "get_logger",
    "LayerLogger",
    "set_trace_id",
    "get_trace_id",
    "normalize_price",
    "infer_currency",
    "resolve_url",
    "is_fetchable_url",
]
