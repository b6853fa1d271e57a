from typing import Dict, List

from bson import ObjectId
from flask import current_app, has_app_context

from common.enum.error_code import APIError
from common.exception.exceptions import NotFoundError, ValidationError
from common.query.join_resolver import CHANNEL_FIELDS, JoinResolver
from common.store import get_document_store
from common.toggle.toggle_engine import RelationKey, ToggleEngine
from common.utils.id_utils import id_str, to_object_id
from common.utils.logging_utils import get_logger
from app.models.mongodb.subscription import CHANNEL_TARGET, SUBSCRIPTION_RELATION, SubscriptionRepository
from app.models.mongodb.user import UserRepository
from app.dto.common import iso
from app.dto.subscription import (
    ChannelDto,
    SubscribedChannelListDto,
    SubscriberDto,
    SubscriberListDto,
    ToggleSubscriptionResponseDto
)

logger = get_logger('subscription_service')


def _nested_join_enabled() -> bool:
    if has_app_context():
        return bool(current_app.config.get('GRAPH_NESTED_JOIN', True))
    return True


class SubscriptionService:

    @staticmethod
    def toggle_subscription(subscriber_id: str, channel_id: str) -> ToggleSubscriptionResponseDto:
        subscriber_oid = to_object_id(subscriber_id)
        channel_oid = to_object_id(channel_id)

        if subscriber_oid == channel_oid:
            raise ValidationError(APIError.SUBSCRIPTION_SELF)

        store = get_document_store()
        if not UserRepository(store).exists(channel_oid):
            raise NotFoundError(APIError.CHANNEL_NOT_FOUND)

        engine = ToggleEngine(store, SUBSCRIPTION_RELATION, extra_fields=SubscriptionRepository.created_at_field)
        result = engine.toggle(RelationKey(actor_id=subscriber_oid, target_id=channel_oid, target_kind=CHANNEL_TARGET))

        return ToggleSubscriptionResponseDto(
            channel_id=id_str(channel_oid),
            is_subscribed=result.active,
            message='구독되었습니다.' if result.active else '구독이 취소되었습니다.'
        )

    @staticmethod
    def get_subscribers(channel_id: str) -> SubscriberListDto:
        """
        채널 구독자 목록
        각 구독자에 대해
          - is_subscribed_back: 채널이 그 구독자를 구독 중인지
          - subscribers_count: 그 구독자 자신의 구독자 수
        를 구독자 수와 무관한 고정 횟수의 쿼리로 계산한다.
        """
        channel_oid = to_object_id(channel_id)

        store = get_document_store()
        if not UserRepository(store).exists(channel_oid):
            raise NotFoundError(APIError.CHANNEL_NOT_FOUND)

        if _nested_join_enabled():
            docs = SubscriptionService._subscribers_nested(channel_oid)
        else:
            docs = SubscriptionService._subscribers_batched(channel_oid)

        subscribers = [SubscriberDto.from_doc(doc) for doc in docs]
        return SubscriberListDto(channel_id=id_str(channel_oid), subscribers=subscribers, total=len(subscribers))

    @staticmethod
    def subscriber_pipeline(channel_oid: ObjectId) -> List[Dict]:
        resolver = JoinResolver()
        projection = resolver.projection(CHANNEL_FIELDS)
        projection.update({
            'subscribers_count': {'$size': '$followers'},
            'is_subscribed_back': {'$in': [channel_oid, '$followers.subscriber']}
        })

        return [
            {'$match': {'channel': channel_oid}},
            {'$sort': {'_id': 1}},
            {
                '$lookup': {
                    'from': UserRepository.COLLECTION_NAME,
                    'localField': 'subscriber',
                    'foreignField': '_id',
                    'as': 'subscriber',
                    'pipeline': [
                        {
                            '$lookup': {
                                'from': SubscriptionRepository.COLLECTION_NAME,
                                'localField': '_id',
                                'foreignField': 'channel',
                                'as': 'followers',
                                'pipeline': [{'$project': {'_id': 0, 'subscriber': 1}}]
                            }
                        },
                        {'$project': projection}
                    ]
                }
            },
            {'$unwind': '$subscriber'},
            {'$replaceRoot': {'newRoot': '$subscriber'}}
        ]

    @staticmethod
    def _subscribers_nested(channel_oid: ObjectId) -> List[Dict]:
        return SubscriptionRepository(get_document_store()).aggregate(
            SubscriptionService.subscriber_pipeline(channel_oid)
        )

    @staticmethod
    def _subscribers_batched(channel_oid: ObjectId) -> List[Dict]:
        #NOTE: 구독자 id 일괄 조회 → 사용자 일괄 조회 → 맞구독/구독자 수 일괄 조회 후 메모리에서 조립
        store = get_document_store()
        subscription_repo = SubscriptionRepository(store)

        subscriber_ids = subscription_repo.find_subscriber_ids(channel_oid)
        if not subscriber_ids:
            return []

        resolver = JoinResolver()
        users = UserRepository(store).find_projected(subscriber_ids, resolver.projection(CHANNEL_FIELDS))
        users_by_id = {user['_id']: user for user in users}

        followed_back = subscription_repo.find_channels_followed_by(channel_oid, subscriber_ids)
        follower_counts = subscription_repo.count_by_channels(subscriber_ids)

        docs = []
        for subscriber_oid in subscriber_ids:
            user = users_by_id.get(subscriber_oid)
            if user is None:
                continue
            doc = resolver.project_document(user, CHANNEL_FIELDS)
            doc['is_subscribed_back'] = subscriber_oid in followed_back
            doc['subscribers_count'] = follower_counts.get(subscriber_oid, 0)
            docs.append(doc)
        return docs

    @staticmethod
    def get_subscribed_channels(subscriber_id: str) -> SubscribedChannelListDto:
        subscriber_oid = to_object_id(subscriber_id)

        store = get_document_store()
        if not UserRepository(store).exists(subscriber_oid):
            raise NotFoundError(APIError.USER_NOT_FOUND)

        stages = (
            [{'$match': {'subscriber': subscriber_oid}}, {'$sort': {'_id': 1}}]
            + JoinResolver().lookup_unwound('channel', CHANNEL_FIELDS)
        )
        docs = SubscriptionRepository(store).aggregate(stages)

        channels = [
            ChannelDto(
                channel_id=id_str(doc['channel']['_id']),
                username=doc['channel'].get('username', ''),
                full_name=doc['channel'].get('full_name'),
                avatar=doc['channel'].get('avatar'),
                subscribed_at=iso(doc.get('created_at'))
            )
            for doc in docs
        ]
        return SubscribedChannelListDto(subscriber_id=id_str(subscriber_oid), channels=channels, total=len(channels))
