"""DexScreener source implementation."""

from __future__ import annotations

from typing import Any, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from defai.core.config import settings
from defai.core.errors import UpstreamError
from defai.core.logging import get_logger
from defai.schemas.dexscreener import DexScreenerPair, DexScreenerSearchResult
from .base import BaseSource

log = get_logger("ingestion.dexscreener")


class DexScreenerSource(BaseSource):
    """Searches trading pairs on DexScreener."""

    name = "DexScreener"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url or settings.DEXSCREENER_BASE_URL,
            timeout or settings.DEXSCREENER_TIMEOUT_SECONDS,
            transport,
        )

    async def search(self, query: str) -> DexScreenerSearchResult:
        data = await self.request("GET", "/latest/dex/search", params={"q": query})
        if not isinstance(data, dict):
            raise UpstreamError(self.name, f"{self.name} returned an unexpected payload for query {query}")

        pairs = self._parse_pairs(data.get("pairs"))
        log.info(f"Fetched {len(pairs)} pairs from DexScreener for query={query}")
        return DexScreenerSearchResult(schema_version=data.get("schemaVersion"), pairs=pairs)

    @staticmethod
    def _parse_pairs(items: Any) -> List[DexScreenerPair]:
        pairs: List[DexScreenerPair] = []
        for item in items or []:
            try:
                pairs.append(DexScreenerPair.model_validate(item))
            except PydanticValidationError as exc:
                log.warning(f"Skipping malformed pair {item.get('pairAddress') if isinstance(item, dict) else item!r}: {exc}")
        return pairs
