from datetime import datetime, timezone
from typing import Dict, List, Optional
from dataclasses import dataclass, field

import pymongo
from bson import ObjectId

from common.store.document_store import DocumentStore


def utcnow():
    return datetime.now(timezone.utc)


@dataclass
class Video:

    owner: ObjectId

    title: str

    description: str

    video_file: str

    thumbnail: str

    duration: float = 0.0

    video_public_id: Optional[str] = None

    thumbnail_public_id: Optional[str] = None

    # 조회수는 $inc 로만 증가
    views: int = 0

    is_published: bool = True

    id: Optional[ObjectId] = None

    created_at: datetime = field(default_factory=utcnow)

    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict:
        """MongoDB 도큐먼트로 변환"""
        doc = {
            'owner': self.owner,
            'title': self.title,
            'description': self.description,
            'video_file': self.video_file,
            'thumbnail': self.thumbnail,
            'video_public_id': self.video_public_id,
            'thumbnail_public_id': self.thumbnail_public_id,
            'duration': self.duration,
            'views': self.views,
            'is_published': self.is_published,
            'created_at': self.created_at,
            'updated_at': self.updated_at or self.created_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Video':
        """MongoDB 도큐먼트에서 객체 생성"""
        return cls(
            id=data.get('_id'),
            owner=data['owner'],
            title=data.get('title', ''),
            description=data.get('description', ''),
            video_file=data.get('video_file', ''),
            thumbnail=data.get('thumbnail', ''),
            duration=data.get('duration', 0.0),
            video_public_id=data.get('video_public_id'),
            thumbnail_public_id=data.get('thumbnail_public_id'),
            views=data.get('views', 0),
            is_published=data.get('is_published', True),
            created_at=data.get('created_at', utcnow()),
            updated_at=data.get('updated_at')
        )


class VideoRepository:

    COLLECTION_NAME = 'videos'

    def __init__(self, store: DocumentStore):
        self.store = store

    def ensure_indexes(self):
        self.store.create_index(
            self.COLLECTION_NAME,
            [('title', pymongo.TEXT), ('description', pymongo.TEXT)],
            name='video_text_search'
        )
        self.store.create_index(self.COLLECTION_NAME, [('owner', 1), ('created_at', -1)])
        self.store.create_index(self.COLLECTION_NAME, [('is_published', 1), ('created_at', -1)])

    def insert(self, video: Video) -> ObjectId:
        video.id = self.store.insert_one(self.COLLECTION_NAME, video.to_dict())
        return video.id

    def find_by_id(self, video_id: ObjectId) -> Optional[Video]:
        doc = self.store.find_one(self.COLLECTION_NAME, {'_id': video_id})
        return Video.from_dict(doc) if doc else None

    def exists(self, video_id: ObjectId) -> bool:
        return self.store.exists(self.COLLECTION_NAME, {'_id': video_id})

    def increment_views(self, video_id: ObjectId) -> Optional[Video]:
        doc = self.store.find_one_and_update(
            self.COLLECTION_NAME,
            {'_id': video_id},
            {'$inc': {'views': 1}}
        )
        return Video.from_dict(doc) if doc else None

    def update_fields(self, video_id: ObjectId, fields: Dict) -> Optional[Video]:
        fields = dict(fields, updated_at=utcnow())
        doc = self.store.find_one_and_update(
            self.COLLECTION_NAME,
            {'_id': video_id},
            {'$set': fields}
        )
        return Video.from_dict(doc) if doc else None

    def toggle_published(self, video_id: ObjectId) -> Optional[Video]:
        #NOTE: 파이프라인 업데이트로 읽기-쓰기를 한 번에 (원자적 반전)
        doc = self.store.find_one_and_update(
            self.COLLECTION_NAME,
            {'_id': video_id},
            [{'$set': {'is_published': {'$not': ['$is_published']}, 'updated_at': '$$NOW'}}]
        )
        return Video.from_dict(doc) if doc else None

    def delete(self, video_id: ObjectId) -> int:
        return self.store.delete_one(self.COLLECTION_NAME, {'_id': video_id})

    def aggregate(self, stages: List[Dict]) -> List[Dict]:
        return self.store.aggregate(self.COLLECTION_NAME, stages)

    def count_by_owner(self, owner_id: ObjectId) -> int:
        return self.store.count(self.COLLECTION_NAME, {'owner': owner_id})
