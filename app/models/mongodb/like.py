from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List

from bson import ObjectId

from common.store.document_store import DocumentStore
from common.toggle.toggle_engine import RelationSpec


class LikeTarget(str, Enum):
    VIDEO = 'video'
    COMMENT = 'comment'
    TWEET = 'tweet'

    @property
    def collection(self) -> str:
        return f'{self.value}s'


# 한 좋아요 행에는 video/comment/tweet 중 정확히 하나만 채워진다
LIKE_RELATION = RelationSpec(
    collection='likes',
    actor_field='liked_by',
    target_fields={target.value: target.value for target in LikeTarget}
)


class LikeRepository:

    COLLECTION_NAME = LIKE_RELATION.collection

    def __init__(self, store: DocumentStore):
        self.store = store

    def ensure_indexes(self):
        #NOTE: 비어 있는 대상 필드는 null 로 색인되므로 (liked_by, 종류, 대상) 당 최대 1행
        self.store.create_index(
            self.COLLECTION_NAME,
            [('liked_by', 1), ('video', 1), ('comment', 1), ('tweet', 1)],
            unique=True,
            name='uk_like_user_target'
        )
        self.store.create_index(self.COLLECTION_NAME, [('video', 1)])

    @staticmethod
    def created_at_field() -> Dict:
        return {'created_at': datetime.now(timezone.utc)}

    def count_for(self, target: LikeTarget, target_id: ObjectId) -> int:
        return self.store.count(self.COLLECTION_NAME, {target.value: target_id})

    def delete_for(self, target: LikeTarget, target_ids: List[ObjectId]) -> int:
        if not target_ids:
            return 0
        return self.store.delete_many(self.COLLECTION_NAME, {target.value: {'$in': target_ids}})

    def aggregate(self, stages: List[Dict]) -> List[Dict]:
        return self.store.aggregate(self.COLLECTION_NAME, stages)
