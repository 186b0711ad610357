"""Twitter post and mention schemas"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from defai.schemas.base import CamelModel
from defai.schemas.token import TokenData


class Post(CamelModel):
    id: str
    text: str

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class TimelinePage(CamelModel):
    """One page of a user timeline. ``data`` is None when the user has no posts."""

    data: Optional[List[Post]] = None
    meta: Optional[dict] = None

    @property
    def next_token(self) -> Optional[str]:
        return (self.meta or {}).get("next_token")


class TimelineQuery(BaseModel):
    """Filters accepted by the user timeline endpoint, under their wire names."""

    model_config = ConfigDict(frozen=True)

    max_results: int = Field(100, ge=5, le=100)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    since_id: Optional[str] = None
    until_id: Optional[str] = None
    pagination_token: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def _as_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @model_validator(mode="after")
    def _check_window(self) -> "TimelineQuery":
        if self.start_time and self.end_time and self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self


class TickerMention(CamelModel):
    raw: str  # as written in the text, e.g. "$pepe"
    ticker: str  # normalized, e.g. "PEPE"


class PostWithTickers(CamelModel):
    """A post and every ticker it mentions, in order and with duplicates."""

    post: Post
    mentions: List[TickerMention]

    @property
    def tickers(self) -> List[str]:
        """Mentions as written in the post."""
        return [mention.raw for mention in self.mentions]


class CryptoData(CamelModel):
    ticker: str
    name: str
    website: Optional[str] = None
    summary: Optional[str] = None
    data: TokenData


class TweetTickerReport(CamelModel):
    """Resolved token data for one ticker of one post."""

    post: Post
    path: str
    tickers: List[str]
    crypto: CryptoData


class MentionsResult(CamelModel):
    user_id: Optional[str] = None
    reports: List[TweetTickerReport] = Field(default_factory=list)
    created_files: List[str] = Field(default_factory=list)
    tickers_found: List[str] = Field(default_factory=list)
    next_token: Optional[str] = None
    message: str = ""
