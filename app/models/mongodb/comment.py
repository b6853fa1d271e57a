from datetime import datetime, timezone
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from bson import ObjectId

from common.store.document_store import DocumentStore


def utcnow():
    return datetime.now(timezone.utc)


@dataclass
class Comment:

    content: str

    video: ObjectId

    owner: ObjectId

    id: Optional[ObjectId] = None

    created_at: datetime = field(default_factory=utcnow)

    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict:
        doc = {
            'content': self.content,
            'video': self.video,
            'owner': self.owner,
            'created_at': self.created_at,
            'updated_at': self.updated_at or self.created_at
        }
        if self.id is not None:
            doc['_id'] = self.id
        return doc

    @classmethod
    def from_dict(cls, data: Dict) -> 'Comment':
        return cls(
            id=data.get('_id'),
            content=data.get('content', ''),
            video=data['video'],
            owner=data['owner'],
            created_at=data.get('created_at', utcnow()),
            updated_at=data.get('updated_at')
        )


class CommentRepository:

    COLLECTION_NAME = 'comments'

    def __init__(self, store: DocumentStore):
        self.store = store

    def ensure_indexes(self):
        # 영상별 댓글 조회 최적화
        self.store.create_index(self.COLLECTION_NAME, [('video', 1), ('created_at', -1), ('_id', 1)])

    def insert(self, comment: Comment) -> ObjectId:
        comment.id = self.store.insert_one(self.COLLECTION_NAME, comment.to_dict())
        return comment.id

    def find_by_id(self, comment_id: ObjectId) -> Optional[Comment]:
        doc = self.store.find_one(self.COLLECTION_NAME, {'_id': comment_id})
        return Comment.from_dict(doc) if doc else None

    def exists(self, comment_id: ObjectId) -> bool:
        return self.store.exists(self.COLLECTION_NAME, {'_id': comment_id})

    def update_content(self, comment_id: ObjectId, content: str) -> Optional[Comment]:
        doc = self.store.find_one_and_update(
            self.COLLECTION_NAME,
            {'_id': comment_id},
            {'$set': {'content': content, 'updated_at': utcnow()}}
        )
        return Comment.from_dict(doc) if doc else None

    def delete(self, comment_id: ObjectId) -> int:
        return self.store.delete_one(self.COLLECTION_NAME, {'_id': comment_id})

    def find_ids_by_video(self, video_id: ObjectId) -> List[ObjectId]:
        docs = self.store.find(self.COLLECTION_NAME, {'video': video_id}, {'_id': 1})
        return [doc['_id'] for doc in docs]

    def delete_by_video(self, video_id: ObjectId) -> int:
        return self.store.delete_many(self.COLLECTION_NAME, {'video': video_id})

    def count(self, filter: Dict) -> int:
        return self.store.count(self.COLLECTION_NAME, filter)

    def aggregate(self, stages: List[Dict]) -> List[Dict]:
        return self.store.aggregate(self.COLLECTION_NAME, stages)
