"""Twitter v2 source implementation."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from defai.core.config import settings
from defai.core.errors import NotFoundError, UpstreamError
from defai.core.integration import clean_query_params
from defai.core.logging import get_logger
from defai.schemas.twitter import Post, TimelinePage, TimelineQuery
from .base import BaseSource

log = get_logger("ingestion.twitter")

TIMELINE_EXPANSIONS = [
    "article.cover_media",
    "article.media_entities",
    "attachments.media_keys",
    "attachments.media_source_tweet",
    "attachments.poll_ids",
    "author_id",
    "edit_history_tweet_ids",
    "entities.mentions.username",
    "geo.place_id",
    "in_reply_to_user_id",
    "entities.note.mentions.username",
    "referenced_tweets.id",
    "referenced_tweets.id.author_id",
]

TWEET_FIELDS = [
    "article",
    "attachments",
    "author_id",
    "card_uri",
    "community_id",
    "conversation_id",
    "created_at",
    "entities",
    "geo",
    "id",
    "in_reply_to_user_id",
    "lang",
    "media_metadata",
    "note_tweet",
    "public_metrics",
    "referenced_tweets",
    "reply_settings",
    "scopes",
    "source",
    "text",
    "withheld",
]

MEDIA_FIELDS = [
    "alt_text",
    "duration_ms",
    "height",
    "media_key",
    "non_public_metrics",
    "organic_metrics",
    "preview_image_url",
    "promoted_metrics",
    "public_metrics",
    "type",
    "url",
    "variants",
    "width",
]

POLL_FIELDS = ["duration_minutes", "end_datetime", "id", "options", "voting_status"]

USER_FIELDS = [
    "affiliation",
    "connection_status",
    "created_at",
    "description",
    "entities",
    "id",
    "is_identity_verified",
    "location",
    "most_recent_tweet_id",
    "name",
    "parody",
    "pinned_tweet_id",
    "profile_banner_url",
    "profile_image_url",
    "protected",
    "public_metrics",
    "receives_your_dm",
    "subscription",
    "subscription_type",
    "url",
    "username",
    "verified",
    "verified_followers_count",
    "verified_type",
    "withheld",
]

PLACE_FIELDS = [
    "contained_within",
    "country",
    "country_code",
    "full_name",
    "geo",
    "id",
    "name",
    "place_type",
]


class TwitterSource(BaseSource):
    """Reads user timelines and publishes posts through the Twitter v2 API."""

    name = "Twitter-v2"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        bearer_token: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url or settings.TWITTER_API_BASE_URL,
            timeout or settings.TWITTER_TIMEOUT_SECONDS,
            transport,
        )
        self.bearer_token = bearer_token or settings.TWITTER_BEARER_TOKEN

    def headers(self) -> Dict[str, str]:
        if not self.bearer_token:
            return {}
        return {"Authorization": f"Bearer {self.bearer_token}"}

    async def resolve_username(self, username: str) -> str:
        """Look up the user id behind a username (with or without a leading @)."""
        handle = username.lstrip("@")
        data = await self.request("GET", f"/2/users/by/username/{handle}")
        user_id = (data.get("data") or {}).get("id") if isinstance(data, dict) else None
        if not user_id:
            raise NotFoundError(f"Twitter user '{handle}' was not found")
        log.debug(f"Resolved username {handle} to user id {user_id}")
        return str(user_id)

    async def list_user_posts(self, user_id: str, query: Optional[TimelineQuery] = None) -> TimelinePage:
        """Fetch one page of posts authored by a user."""
        params = self.timeline_params(query or TimelineQuery())
        log.debug(f"Fetching timeline for user {user_id} with params {params}")
        data = await self.request("GET", f"/2/users/{user_id}/tweets", params=params)
        try:
            return TimelinePage.model_validate(data)
        except PydanticValidationError as exc:
            raise UpstreamError(self.name, f"{self.name} returned an unexpected timeline payload: {exc}") from exc

    async def create_post(self, text: str) -> Post:
        """Publish a post and return its id and text."""
        data = await self.request("POST", "/2/tweets", json={"text": text})
        created = data.get("data") if isinstance(data, dict) else None
        if not created or not created.get("id") or not created.get("text"):
            raise UpstreamError(self.name, f"{self.name} did not return the created tweet")
        post = Post.model_validate(created)
        log.info(f"Posted tweet {post.id}")
        return post

    @staticmethod
    def timeline_params(query: TimelineQuery) -> Dict[str, Any]:
        return clean_query_params(
            {
                "max_results": query.max_results,
                "pagination_token": query.pagination_token,
                "start_time": _format_time(query.start_time),
                "end_time": _format_time(query.end_time),
                "since_id": query.since_id,
                "until_id": query.until_id,
                "expansions": ",".join(TIMELINE_EXPANSIONS),
                "tweet.fields": ",".join(TWEET_FIELDS),
                "media.fields": ",".join(MEDIA_FIELDS),
                "poll.fields": ",".join(POLL_FIELDS),
                "user.fields": ",".join(USER_FIELDS),
                "place.fields": ",".join(PLACE_FIELDS),
            }
        )


def _format_time(value: Optional[datetime]) -> Optional[str]:
    # TimelineQuery already normalized the value to UTC
    return value.strftime("%Y-%m-%dT%H:%M:%SZ") if value else None
