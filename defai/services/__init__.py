# Services package
from defai.services.mention_service import MentionService
from defai.services.tickers import (
    extract_tickers,
    filter_posts_with_ticker_mentions,
    normalize_token,
)
from defai.services.token_service import TokenService

__all__ = [
    "MentionService",
    "TokenService",
    "extract_tickers",
    "filter_posts_with_ticker_mentions",
    "normalize_token",
]
