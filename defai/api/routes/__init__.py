from defai.api.routes.health import router as health_router
from defai.api.routes.tokens import router as tokens_router
from defai.api.routes.tweets import router as tweets_router

__all__ = ["health_router", "tokens_router", "tweets_router"]
