from contextlib import asynccontextmanager

from fastapi import FastAPI

from defai.api.routes import health, tokens, tweets
from defai.core.config import settings
from defai.core.logging import get_logger


log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info(f"Starting application in {settings.ENV.upper()} mode")
    if settings.is_production:
        log.info("Production mode: Debug disabled, docs disabled, stricter logging")
    else:
        log.info("Development mode: Debug enabled, docs available")
    log.info(f"DexScreener: {settings.DEXSCREENER_BASE_URL} | Twitter: {settings.TWITTER_API_BASE_URL}")
    if not settings.TWITTER_BEARER_TOKEN:
        log.warning("TWITTER_BEARER_TOKEN is not set; tweet routes will be rejected upstream")

    yield

    log.info("Application shutdown complete")


app = FastAPI(
    title="deFAI Token Resolver",
    description="Resolves crypto tickers to canonical DexScreener token records and tracks ticker mentions in tweets",
    version="1.0.0",
    lifespan=lifespan,
    # Disable docs in production
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
    openapi_url="/openapi.json" if settings.docs_enabled else None,
    debug=settings.debug_enabled,
)


app.include_router(health.router)
app.include_router(tokens.router)
app.include_router(tweets.router)
