from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict

from bson import ObjectId
from flask import current_app, has_app_context

from common.enum.error_code import APIError
from common.exception.exceptions import NotFoundError
from common.query.pipeline_builder import FeedQuery
from common.store import get_document_store
from common.store.document_store import DocumentStore
from common.utils.id_utils import id_str, to_object_id
from common.utils.logging_utils import get_logger
from app.models.mongodb.like import LikeRepository
from app.models.mongodb.subscription import SubscriptionRepository
from app.models.mongodb.user import UserRepository
from app.models.mongodb.video import VideoRepository
from app.dto.dashboard import ChannelStatsDto
from app.dto.video import VideoFeedDto
from app.services.video_service import VideoService

logger = get_logger('dashboard_service')

DEFAULT_STATS_WORKERS = 4


def _first_value(rows, key: str) -> int:
    #NOTE: 빈 집계 결과 → 0
    if not rows:
        return 0
    return int(rows[0].get(key) or 0)


class StatsAggregator:
    """
    채널 통계
    네 집계는 서로 독립적인 읽기 전용 쿼리라 순서와 무관하게 병렬로 실행한다.
    """

    def __init__(self, store: DocumentStore, max_workers: int = DEFAULT_STATS_WORKERS):
        self.store = store
        self.max_workers = max_workers

    def subscriber_count(self, channel_oid: ObjectId) -> int:
        return SubscriptionRepository(self.store).count_by_channel(channel_oid)

    def video_count(self, channel_oid: ObjectId) -> int:
        return VideoRepository(self.store).count_by_owner(channel_oid)

    def total_views(self, channel_oid: ObjectId) -> int:
        rows = VideoRepository(self.store).aggregate([
            {'$match': {'owner': channel_oid}},
            {'$group': {'_id': None, 'total_views': {'$sum': '$views'}}}
        ])
        return _first_value(rows, 'total_views')

    def total_likes(self, channel_oid: ObjectId) -> int:
        rows = VideoRepository(self.store).aggregate([
            {'$match': {'owner': channel_oid}},
            {
                '$lookup': {
                    'from': LikeRepository.COLLECTION_NAME,
                    'localField': '_id',
                    'foreignField': 'video',
                    'as': 'likes'
                }
            },
            {'$unwind': '$likes'},
            {'$count': 'total_likes'}
        ])
        return _first_value(rows, 'total_likes')

    def collect(self, channel_oid: ObjectId) -> ChannelStatsDto:
        queries: Dict[str, Callable[[ObjectId], int]] = {
            'total_subscribers': self.subscriber_count,
            'total_videos': self.video_count,
            'total_views': self.total_views,
            'total_likes': self.total_likes,
        }

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {name: executor.submit(query, channel_oid) for name, query in queries.items()}
            #NOTE: 하나라도 실패하면 result() 에서 그대로 전파
            values = {name: future.result() for name, future in futures.items()}

        logger.debug(f"채널 통계: channel={channel_oid} {values}")
        return ChannelStatsDto(channel_id=id_str(channel_oid), **values)


class DashboardService:

    @staticmethod
    def get_channel_stats(channel_id: str) -> ChannelStatsDto:
        channel_oid = to_object_id(channel_id)

        store = get_document_store()
        if not UserRepository(store).exists(channel_oid):
            raise NotFoundError(APIError.CHANNEL_NOT_FOUND)

        max_workers = DEFAULT_STATS_WORKERS
        if has_app_context():
            max_workers = current_app.config.get('STATS_WORKERS', DEFAULT_STATS_WORKERS)

        return StatsAggregator(store, max_workers=max_workers).collect(channel_oid)

    @staticmethod
    def get_channel_videos(channel_id: str, feed_query: FeedQuery) -> VideoFeedDto:
        channel_oid = to_object_id(channel_id)
        if not UserRepository(get_document_store()).exists(channel_oid):
            raise NotFoundError(APIError.CHANNEL_NOT_FOUND)
        return VideoService.get_channel_videos(channel_id, feed_query)
