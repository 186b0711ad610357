"""Lookup entrypoint - Standalone script for running lookups without the API.

Usage:
    python -m defai.lookup_entrypoint token SERV             # Resolve one ticker
    python -m defai.lookup_entrypoint token '$serv'          # Same, sigil form
    python -m defai.lookup_entrypoint mentions elonmusk      # Resolve tickers in a user's tweets
"""

import asyncio
import sys

from defai.core.artifacts import ArtifactStore, token_artifact_path
from defai.core.errors import DefaiError
from defai.core.logging import get_logger
from defai.services.mention_service import MentionService
from defai.services.tickers import normalize_token
from defai.services.token_service import TokenService

logger = get_logger("lookup_entrypoint")

COMMANDS = ("token", "mentions")


async def run_token_lookup(token: str) -> str:
    """Resolve one ticker and save it; returns the artifact path."""
    ticker = normalize_token(token)
    logger.info(f"Retrieve {ticker} informations")
    data = await TokenService().resolve(ticker)

    path = token_artifact_path(ticker)
    ArtifactStore().write_model(path, data)
    logger.info(f"{data.name} ({data.symbol}) saved to {path} | website={data.website or 'No website url found'}")
    return path


async def run_mentions(username: str) -> list:
    """Resolve the tickers mentioned by a user; returns the created artifact paths."""
    service = MentionService(TokenService(), ArtifactStore())
    result = await service.fetch_user_mentions(username=username)
    logger.info(result.message)
    return result.created_files


def main():
    """Main entry point for lookups."""
    if len(sys.argv) != 3 or sys.argv[1] not in COMMANDS:
        logger.error(f"Usage: python -m defai.lookup_entrypoint <{'|'.join(COMMANDS)}> <value>")
        sys.exit(2)

    command, value = sys.argv[1], sys.argv[2]
    try:
        if command == "token":
            result = asyncio.run(run_token_lookup(value))
        else:
            result = asyncio.run(run_mentions(value))
    except DefaiError as exc:
        logger.error(f"{command} lookup failed for {value}: {exc}")
        sys.exit(1)

    logger.info(f"Lookup completed: {result}")
    return result


if __name__ == "__main__":
    main()
