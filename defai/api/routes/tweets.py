"""Tweet routes - Post messages and resolve tickers mentioned in timelines."""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError as PydanticValidationError

from defai.api.deps import get_mention_service, get_twitter_source
from defai.core.errors import NotFoundError, UpstreamError, ValidationError
from defai.core.logging import get_logger
from defai.ingestion.twitter import TwitterSource
from defai.schemas.api import PostMessageRequest, PostMessageResponse
from defai.schemas.twitter import MentionsResult, TimelineQuery
from defai.services.mention_service import MentionService

router = APIRouter(prefix="/tweets", tags=["tweets"])
log = get_logger("tweet_routes")


@router.post("", response_model=PostMessageResponse)
async def post_message(
    request: PostMessageRequest,
    twitter: TwitterSource = Depends(get_twitter_source),
):
    """Post a tweet and return its id."""
    log.info(f"Posting message : {request.message}")
    try:
        post = await twitter.create_post(request.message)
    except UpstreamError as exc:
        raise HTTPException(status_code=502, detail=str(exc))

    return PostMessageResponse(id=post.id, text=post.text)


@router.get("/mentions", response_model=MentionsResult)
async def get_user_tweets_with_ticker_mentions(
    user_id: Optional[str] = Query(None, description="Twitter user ID to fetch tweets"),
    username: Optional[str] = Query(None, description="Twitter username to fetch tweets"),
    max_results: int = Query(100, ge=5, le=100, description="The maximum number of results (between 5 and 100)"),
    start_time: Optional[datetime] = Query(None, description="Oldest UTC timestamp of the returned posts"),
    end_time: Optional[datetime] = Query(None, description="Newest UTC timestamp of the returned posts"),
    since_id: Optional[str] = Query(None, description="Only posts with an ID greater than this one"),
    until_id: Optional[str] = Query(None, description="Only posts with an ID less than this one"),
    pagination_token: Optional[str] = Query(None, description="Token of the next page of results"),
    service: MentionService = Depends(get_mention_service),
):
    """
    Retrieve tweets mentioning ticker(s) from a Twitter user.

    Each (tweet, ticker) pair gets its own JSON file with the resolved token
    data. Files created by a previous call are not recomputed. Tickers that
    cannot be resolved are skipped.
    """
    try:
        query = TimelineQuery(
            max_results=max_results,
            start_time=start_time,
            end_time=end_time,
            since_id=since_id,
            until_id=until_id,
            pagination_token=pagination_token,
        )
    except PydanticValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail=exc.errors(include_url=False, include_context=False, include_input=False),
        )

    try:
        return await service.fetch_user_mentions(user_id=user_id, username=username, query=query)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc))
    except UpstreamError as exc:
        log.error(f"Tweets could not be retrieved for user {user_id or username}: {exc}")
        raise HTTPException(status_code=502, detail=str(exc))
