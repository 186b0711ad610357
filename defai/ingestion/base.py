"""Shared HTTP plumbing for external sources."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from defai.core.errors import UpstreamError
from defai.core.integration import check_integration_errors
from defai.core.logging import get_logger

log = get_logger("ingestion.base")


class BaseSource:
    """Base class for read/write access to one external API."""

    name: str

    def __init__(
        self,
        base_url: str,
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.transport = transport

    def headers(self) -> Dict[str, str]:
        return {}

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """Send one request and return its decoded JSON body.

        Transport failures, unreadable bodies and integration-reported errors
        all surface as UpstreamError.
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers=self.headers(),
            transport=self.transport,
        ) as client:
            try:
                resp = await client.request(method, path, **kwargs)
            except httpx.HTTPError as exc:
                log.error(f"{self.name} request {method} {path} failed: {exc}")
                raise UpstreamError(self.name, f"{self.name} request failed: {exc}") from exc

        try:
            body = resp.json()
        except ValueError:
            body = None

        check_integration_errors({"statusCode": resp.status_code, "output": body}, self.name)

        if body is None:
            raise UpstreamError(
                self.name,
                f"{self.name} returned a non-JSON response (status {resp.status_code})",
                status_code=resp.status_code,
            )
        return body
