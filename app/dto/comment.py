from dataclasses import dataclass
from typing import Dict, List, Optional

from app.dto.common import UserSummaryDto, iso
from common.query.pagination import PageInfo
from common.utils.id_utils import id_str


@dataclass
class CommentDto:
    comment_id: str
    video_id: str
    content: str
    created_at: Optional[str]
    updated_at: Optional[str]
    owner: Optional[UserSummaryDto] = None
    owner_id: Optional[str] = None

    @classmethod
    def from_doc(cls, doc: Dict) -> 'CommentDto':
        owner = doc.get('owner')
        if isinstance(owner, dict):
            owner_dto = UserSummaryDto.from_doc(owner)
            owner_id = owner_dto.user_id
        else:
            owner_dto = None
            owner_id = id_str(owner)

        return cls(
            comment_id=id_str(doc['_id']),
            video_id=id_str(doc.get('video')),
            content=doc.get('content', ''),
            created_at=iso(doc.get('created_at')),
            updated_at=iso(doc.get('updated_at')),
            owner=owner_dto,
            owner_id=owner_id
        )

    def to_dict(self):
        return {
            'comment_id': self.comment_id,
            'video_id': self.video_id,
            'content': self.content,
            'created_at': self.created_at,
            'updated_at': self.updated_at,
            'owner_id': self.owner_id,
            'owner': self.owner.to_dict() if self.owner else None
        }


@dataclass
class CommentListDto:
    comments: List[CommentDto]
    total: int
    total_pages: int
    page: int
    limit: int
    has_next: bool

    @classmethod
    def of(cls, comments: List[CommentDto], page_info: PageInfo) -> 'CommentListDto':
        return cls(
            comments=comments,
            total=page_info.total,
            total_pages=page_info.total_pages,
            page=page_info.page,
            limit=page_info.limit,
            has_next=page_info.has_next
        )

    def to_dict(self):
        return {
            'comments': [c.to_dict() for c in self.comments],
            'total': self.total,
            'total_pages': self.total_pages,
            'page': self.page,
            'limit': self.limit,
            'has_next': self.has_next
        }
