"""
Shared helpers: logging, text/price normalization and string similarity.
"""

from .logging_config import logger, setup_logging
from .normalization import normalize_item_name, normalize_price
from .similarity import levenshtein_distance, name_similarity

__all__ = [
    "logger",
    "setup_logging",
    "normalize_item_name",
    "normalize_price",
    "levenshtein_distance",
    "name_similarity",
]
