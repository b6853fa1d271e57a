from dataclasses import dataclass
from typing import Dict, List, Optional

from app.dto.common import UserSummaryDto, iso
from common.query.pagination import PageInfo
from common.utils.id_utils import id_str


@dataclass
class VideoDto:
    video_id: str
    title: str
    description: str
    video_file: str
    thumbnail: str
    duration: float
    views: int
    is_published: bool
    created_at: Optional[str]
    owner: Optional[UserSummaryDto] = None
    owner_id: Optional[str] = None

    @classmethod
    def from_doc(cls, doc: Dict) -> 'VideoDto':
        owner = doc.get('owner')
        if isinstance(owner, dict):
            owner_dto = UserSummaryDto.from_doc(owner)
            owner_id = owner_dto.user_id
        else:
            owner_dto = None
            owner_id = id_str(owner)

        return cls(
            video_id=id_str(doc['_id']),
            title=doc.get('title', ''),
            description=doc.get('description', ''),
            video_file=doc.get('video_file', ''),
            thumbnail=doc.get('thumbnail', ''),
            duration=doc.get('duration', 0),
            views=doc.get('views', 0),
            is_published=doc.get('is_published', True),
            created_at=iso(doc.get('created_at')),
            owner=owner_dto,
            owner_id=owner_id
        )

    def to_dict(self):
        return {
            'video_id': self.video_id,
            'title': self.title,
            'description': self.description,
            'video_file': self.video_file,
            'thumbnail': self.thumbnail,
            'duration': self.duration,
            'views': self.views,
            'is_published': self.is_published,
            'created_at': self.created_at,
            'owner_id': self.owner_id,
            'owner': self.owner.to_dict() if self.owner else None
        }


@dataclass
class VideoFeedDto:
    videos: List[VideoDto]
    total: int
    total_pages: int
    page: int
    limit: int
    has_next: bool

    @classmethod
    def of(cls, videos: List[VideoDto], page_info: PageInfo) -> 'VideoFeedDto':
        return cls(
            videos=videos,
            total=page_info.total,
            total_pages=page_info.total_pages,
            page=page_info.page,
            limit=page_info.limit,
            has_next=page_info.has_next
        )

    def to_dict(self):
        return {
            'videos': [v.to_dict() for v in self.videos],
            'total': self.total,
            'total_pages': self.total_pages,
            'page': self.page,
            'limit': self.limit,
            'has_next': self.has_next
        }


@dataclass
class PublishStatusDto:
    video_id: str
    is_published: bool

    def to_dict(self):
        return {
            'video_id': self.video_id,
            'is_published': self.is_published
        }
