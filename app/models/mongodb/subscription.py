from datetime import datetime, timezone
from typing import Dict, List, Set

from bson import ObjectId

from common.store.document_store import DocumentStore
from common.toggle.toggle_engine import RelationSpec

CHANNEL_TARGET = 'channel'

SUBSCRIPTION_RELATION = RelationSpec(
    collection='subscriptions',
    actor_field='subscriber',
    target_fields={CHANNEL_TARGET: 'channel'}
)


class SubscriptionRepository:

    COLLECTION_NAME = SUBSCRIPTION_RELATION.collection

    def __init__(self, store: DocumentStore):
        self.store = store

    def ensure_indexes(self):
        self.store.create_index(
            self.COLLECTION_NAME,
            [('subscriber', 1), ('channel', 1)],
            unique=True,
            name='uk_subscription_subscriber_channel'
        )
        self.store.create_index(self.COLLECTION_NAME, [('channel', 1), ('subscriber', 1)])

    @staticmethod
    def created_at_field() -> Dict:
        return {'created_at': datetime.now(timezone.utc)}

    def count_by_channel(self, channel_id: ObjectId) -> int:
        return self.store.count(self.COLLECTION_NAME, {'channel': channel_id})

    def find_subscriber_ids(self, channel_id: ObjectId) -> List[ObjectId]:
        docs = self.store.find(
            self.COLLECTION_NAME,
            {'channel': channel_id},
            {'subscriber': 1},
            sort=[('_id', 1)]
        )
        return [doc['subscriber'] for doc in docs]

    def find_channels_followed_by(self, subscriber_id: ObjectId, channel_ids: List[ObjectId]) -> Set[ObjectId]:
        if not channel_ids:
            return set()
        docs = self.store.find(
            self.COLLECTION_NAME,
            {'subscriber': subscriber_id, 'channel': {'$in': channel_ids}},
            {'channel': 1}
        )
        return {doc['channel'] for doc in docs}

    def count_by_channels(self, channel_ids: List[ObjectId]) -> Dict[ObjectId, int]:
        if not channel_ids:
            return {}
        rows = self.store.aggregate(self.COLLECTION_NAME, [
            {'$match': {'channel': {'$in': channel_ids}}},
            {'$group': {'_id': '$channel', 'count': {'$sum': 1}}}
        ])
        return {row['_id']: row['count'] for row in rows}

    def aggregate(self, stages: List[Dict]) -> List[Dict]:
        return self.store.aggregate(self.COLLECTION_NAME, stages)
