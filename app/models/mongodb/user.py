from datetime import datetime
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from bson import ObjectId

from common.query.join_resolver import SECRET_USER_FIELDS
from common.store.document_store import DocumentStore


@dataclass
class User:
    """
    사용자 (채널). 생성/수정은 인증 서비스 담당이고 이 서비스는 watch_history 에만 추가한다.
    password/email/refresh_token 은 이 객체로 읽어 오지 않는다.
    """

    id: ObjectId

    username: str

    full_name: str = ''

    avatar: Optional[str] = None

    cover_image: Optional[str] = None

    watch_history: List[ObjectId] = field(default_factory=list)

    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict) -> 'User':
        return cls(
            id=data['_id'],
            username=data.get('username', ''),
            full_name=data.get('full_name', ''),
            avatar=data.get('avatar'),
            cover_image=data.get('cover_image'),
            watch_history=list(data.get('watch_history', [])),
            created_at=data.get('created_at')
        )


WATCH_HISTORY_LIMIT = 200


class UserRepository:

    COLLECTION_NAME = 'users'

    PUBLIC_PROJECTION = {name: 0 for name in sorted(SECRET_USER_FIELDS - {'watch_history'})}

    def __init__(self, store: DocumentStore):
        self.store = store

    def ensure_indexes(self):
        self.store.create_index(self.COLLECTION_NAME, 'username', unique=True)

    def find_by_id(self, user_id: ObjectId) -> Optional[User]:
        doc = self.store.find_one(self.COLLECTION_NAME, {'_id': user_id}, self.PUBLIC_PROJECTION)
        return User.from_dict(doc) if doc else None

    def exists(self, user_id: ObjectId) -> bool:
        return self.store.exists(self.COLLECTION_NAME, {'_id': user_id})

    def append_watch_history(self, user_id: ObjectId, video_id: ObjectId, limit: int = WATCH_HISTORY_LIMIT) -> bool:
        #NOTE: 최근 limit 개만 유지 (오래된 항목부터 잘림)
        return self.store.update_one(
            self.COLLECTION_NAME,
            {'_id': user_id},
            {'$push': {'watch_history': {'$each': [video_id], '$slice': -limit}}}
        ) > 0

    def find_watch_history_ids(self, user_id: ObjectId) -> Optional[List[ObjectId]]:
        doc = self.store.find_one(self.COLLECTION_NAME, {'_id': user_id}, {'watch_history': 1})
        if doc is None:
            return None
        return list(doc.get('watch_history', []))

    def find_projected(self, user_ids: List[ObjectId], projection: Dict) -> List[Dict]:
        if not user_ids:
            return []
        return self.store.find(self.COLLECTION_NAME, {'_id': {'$in': user_ids}}, projection)
