"""API dependencies"""

from fastapi import Depends

from defai.core.artifacts import ArtifactStore
from defai.ingestion.dexscreener import DexScreenerSource
from defai.ingestion.twitter import TwitterSource
from defai.services.mention_service import MentionService
from defai.services.token_service import TokenService


def get_artifact_store() -> ArtifactStore:
    return ArtifactStore()


def get_dexscreener_source() -> DexScreenerSource:
    return DexScreenerSource()


def get_twitter_source() -> TwitterSource:
    return TwitterSource()


def get_token_service(source: DexScreenerSource = Depends(get_dexscreener_source)) -> TokenService:
    return TokenService(source)


def get_mention_service(
    token_service: TokenService = Depends(get_token_service),
    artifact_store: ArtifactStore = Depends(get_artifact_store),
    twitter_source: TwitterSource = Depends(get_twitter_source),
) -> MentionService:
    return MentionService(token_service, artifact_store, twitter_source)
