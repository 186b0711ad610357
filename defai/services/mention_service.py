"""Mention Service - resolves tickers mentioned in a user's tweets."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Set

from defai.core.artifacts import ArtifactStore, tweet_artifact_path
from defai.core.errors import ValidationError
from defai.core.logging import get_logger
from defai.ingestion.twitter import TwitterSource
from defai.schemas.twitter import (
    CryptoData,
    MentionsResult,
    Post,
    PostWithTickers,
    TimelineQuery,
    TweetTickerReport,
)
from defai.services.tickers import distinct_tickers, filter_posts_with_ticker_mentions
from defai.services.token_service import TokenService

log = get_logger("mention_service")

MISSING_USER_MESSAGE = "Please provide a valid Twitter username or user id."


class MentionService:
    """Turns tweets into one token report per (tweet, ticker).

    Reports already present in the artifact store are never recomputed, and
    a ticker that fails to resolve is logged and skipped without affecting
    the other tickers of the same tweet.
    """

    def __init__(
        self,
        token_service: TokenService,
        artifact_store: ArtifactStore,
        twitter_source: Optional[TwitterSource] = None,
    ):
        self.token_service = token_service
        self.artifact_store = artifact_store
        self.twitter_source = twitter_source or TwitterSource()

    async def fetch_user_mentions(
        self,
        user_id: Optional[str] = None,
        username: Optional[str] = None,
        query: Optional[TimelineQuery] = None,
    ) -> MentionsResult:
        """Fetch a user's latest tweets and resolve every ticker they mention."""
        if not user_id and not username:
            raise ValidationError(MISSING_USER_MESSAGE)

        query = query or TimelineQuery()
        if not user_id:
            user_id = await self.twitter_source.resolve_username(username)

        log.info(f"Retrieving the {query.max_results} latest tweets from the Twitter user with ID: {user_id}")
        page = await self.twitter_source.list_user_posts(user_id, query)

        if page.data is None:
            return MentionsResult(
                user_id=user_id,
                message=f'No tweets were found from Twitter user ID : "{user_id}"',
            )

        result = await self.process_posts(page.data)
        if result.created_files:
            message = (
                f'Tweets mentioning ticker(s) successfully retrieved from Twitter user ID : "{user_id}". '
                f"{len(result.created_files)} file(s) created, one per tweet and ticker."
            )
        else:
            message = f'Tweets successfully retrieved from Twitter user ID : "{user_id}" but no ticker(s) found.'

        return result.model_copy(update={"user_id": user_id, "next_token": page.next_token, "message": message})

    async def process_posts(
        self,
        posts: Sequence[Post],
        existing_paths: Optional[Iterable[str]] = None,
    ) -> MentionsResult:
        """Resolve the tickers of each post, skipping reports that already exist.

        ``existing_paths`` defaults to the artifacts currently in the store.
        """
        existing: Set[str] = set(
            self.artifact_store.list_paths() if existing_paths is None else existing_paths
        )
        items = filter_posts_with_ticker_mentions(posts)

        reports: List[TweetTickerReport] = []
        for item in items:
            reports.extend(await self.resolve_post(item, existing))

        tickers_found = list(dict.fromkeys(ticker for item in items for ticker in item.tickers))
        log.debug(f"Ticker(s) found: {tickers_found}")
        log.info(f"Processed {len(posts)} posts: with_tickers={len(items)} reports={len(reports)}")

        return MentionsResult(
            reports=reports,
            created_files=[report.path for report in reports],
            tickers_found=tickers_found,
        )

    async def resolve_post(self, item: PostWithTickers, existing: Set[str]) -> List[TweetTickerReport]:
        """Resolve each distinct ticker of one post, in extraction order.

        ``existing`` is updated with every report written.
        """
        reports: List[TweetTickerReport] = []
        for ticker in distinct_tickers(item.mentions):
            path = tweet_artifact_path(item.post.id, ticker)
            if path in existing:
                log.debug(f"Skipping {path}: already exists")
                continue

            log.info(f"Retrieve {ticker} informations")
            try:
                data = await self.token_service.find_token_by_symbol(ticker)
                if data is None:
                    log.warning(f"No data found for {ticker} mentioned in tweet {item.post.id}")
                    continue

                report = TweetTickerReport(
                    post=item.post,
                    path=path,
                    tickers=item.tickers,
                    crypto=CryptoData(ticker=ticker, name=data.name, website=data.website, data=data),
                )
                self.artifact_store.write_model(path, report)
            except Exception as exc:  # noqa: BLE001
                log.warning(f"Retrieve {ticker} informations error (tweet {item.post.id}): {exc}")
                continue

            existing.add(path)
            reports.append(report)
        return reports
