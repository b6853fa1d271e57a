from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from common.enum.error_code import APIError
from common.exception.exceptions import ValidationError
from common.query.join_resolver import JoinResolver, OWNER_FIELDS
from common.query.pagination import PageWindow
from common.utils.id_utils import to_object_id

# API 정렬 키 → 컬렉션 필드
SORT_FIELDS = {
    'title': 'title',
    'views': 'views',
    'createdAt': 'created_at',
    'created_at': 'created_at',
    'duration': 'duration',
}

SORT_DIRECTIONS = {
    'asc': 1,
    'desc': -1,
}

DEFAULT_SORT_BY = 'createdAt'
DEFAULT_SORT_TYPE = 'desc'


class FeedMode(str, Enum):
    PUBLIC = 'public'    # 공개 영상만
    CHANNEL = 'channel'  # 채널 주인이 자신의 비공개 영상까지 조회


@dataclass
class FeedQuery:
    page: int = 1
    limit: int = 10
    sort_by: Optional[str] = None
    sort_type: str = DEFAULT_SORT_TYPE
    query: Optional[str] = None
    owner_id: Optional[str] = None
    mode: FeedMode = FeedMode.PUBLIC

    @property
    def search_text(self) -> Optional[str]:
        if self.query is None:
            return None
        text = self.query.strip()
        return text or None


class QueryPipelineBuilder:
    """
    피드/스레드 조회용 aggregation 단계 조립기

    단계 순서 (고정):
      1. $text 검색 (query 가 있을 때)
      2. owner 동일성 필터
      3. is_published 필터 (public 모드)
      4. 정렬 + _id 오름차순 보조 정렬
      5. owner 조인
      6. $skip / $limit

    전체 개수는 1~3 단계에 $count 만 붙인 별도 파이프라인으로 계산한다.
    """

    def __init__(self, join_resolver: Optional[JoinResolver] = None):
        self.join_resolver = join_resolver or JoinResolver()

    def search_stages(self, feed_query: FeedQuery) -> List[Dict]:
        text = feed_query.search_text
        if text is None:
            return []
        return [{'$match': {'$text': {'$search': text}}}]

    def owner_stages(self, feed_query: FeedQuery) -> List[Dict]:
        if feed_query.owner_id is None:
            return []
        return [{'$match': {'owner': to_object_id(feed_query.owner_id)}}]

    def visibility_stages(self, feed_query: FeedQuery) -> List[Dict]:
        mode = FeedMode(feed_query.mode)
        if mode is FeedMode.CHANNEL:
            return []
        return [{'$match': {'is_published': True}}]

    def match_stages(self, feed_query: FeedQuery) -> List[Dict]:
        return (
            self.search_stages(feed_query)
            + self.owner_stages(feed_query)
            + self.visibility_stages(feed_query)
        )

    def sort_spec(self, feed_query: FeedQuery) -> Dict:
        direction = SORT_DIRECTIONS.get(feed_query.sort_type or DEFAULT_SORT_TYPE)
        if direction is None:
            raise ValidationError(message=f"지원하지 않는 정렬 방향입니다: {feed_query.sort_type}")

        if feed_query.sort_by is None and feed_query.search_text is not None:
            #NOTE: 검색어만 있고 정렬 기준이 없으면 관련도 순
            return {'score': {'$meta': 'textScore'}, '_id': 1}

        sort_by = feed_query.sort_by or DEFAULT_SORT_BY
        field = SORT_FIELDS.get(sort_by)
        if field is None:
            raise ValidationError(message=f"지원하지 않는 정렬 기준입니다: {sort_by}")

        return {field: direction, '_id': 1}

    def join_stages(self) -> List[Dict]:
        return self.join_resolver.lookup_one('owner', OWNER_FIELDS)

    @staticmethod
    def page_stages(window: PageWindow) -> List[Dict]:
        return [
            {'$skip': window.skip},
            {'$limit': window.limit}
        ]

    def build(self, feed_query: FeedQuery, window: PageWindow) -> List[Dict]:
        return (
            self.match_stages(feed_query)
            + [{'$sort': self.sort_spec(feed_query)}]
            + self.join_stages()
            + self.page_stages(window)
        )

    def count_stages(self, feed_query: FeedQuery) -> List[Dict]:
        return self.match_stages(feed_query) + [{'$count': 'total'}]

    def thread(
        self,
        match: Dict,
        window: PageWindow,
        sort: Dict,
        join_stages: List[Dict]
    ) -> List[Dict]:
        """댓글 등 단순 스레드 목록: 필터 → 정렬 → 조인 → 페이지"""
        sort = dict(sort)
        sort.setdefault('_id', 1)
        return (
            [{'$match': match}, {'$sort': sort}]
            + list(join_stages)
            + self.page_stages(window)
        )
