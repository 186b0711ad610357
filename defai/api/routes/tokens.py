"""Token routes - Resolve a ticker to its canonical token record."""

from fastapi import APIRouter, Depends, HTTPException

from defai.api.deps import get_artifact_store, get_token_service
from defai.core.artifacts import ArtifactStore, token_artifact_path
from defai.core.errors import NotFoundError, UpstreamError
from defai.core.logging import get_logger
from defai.schemas.api import TokenLookupResponse
from defai.services.tickers import normalize_token
from defai.services.token_service import TokenService

router = APIRouter(prefix="/tokens", tags=["tokens"])
log = get_logger("token_routes")


@router.post("/{token}", response_model=TokenLookupResponse)
async def find_token_informations(
    token: str,
    service: TokenService = Depends(get_token_service),
    store: ArtifactStore = Depends(get_artifact_store),
):
    """
    Retrieve token informations by ticker symbol or name and save them as JSON.

    Returns price, changes, liquidity, volumes, logo, links, socials and the
    deduplicated list of trading pairs. The record is also written to
    `crypto_<TICKER>.json`.
    """
    ticker = normalize_token(token)
    log.info(f"Retrieve {ticker} informations")

    try:
        data = await service.resolve(ticker)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except UpstreamError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    path = token_artifact_path(ticker)
    store.write_model(path, data)

    return TokenLookupResponse(
        token=ticker,
        path=path,
        website=data.website or "No website url found",
        message=(
            f"Comprehensive data about the crypto ticker {data.name} ({data.symbol}) "
            f"has been fetched and saved as a JSON file: {path}"
        ),
        data=data,
    )
