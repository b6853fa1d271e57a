from dataclasses import dataclass
from typing import Dict, List, Optional

from common.utils.id_utils import id_str


@dataclass
class SubscriberDto:
    user_id: str
    username: str
    full_name: Optional[str]
    avatar: Optional[str]
    is_subscribed_back: bool  # 채널도 이 구독자를 구독 중인지 (맞구독)
    subscribers_count: int    # 이 구독자 자신의 구독자 수

    @classmethod
    def from_doc(cls, doc: Dict) -> 'SubscriberDto':
        return cls(
            user_id=id_str(doc['_id']),
            username=doc.get('username', ''),
            full_name=doc.get('full_name'),
            avatar=doc.get('avatar'),
            is_subscribed_back=bool(doc.get('is_subscribed_back', False)),
            subscribers_count=int(doc.get('subscribers_count') or 0)
        )

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'username': self.username,
            'full_name': self.full_name,
            'avatar': self.avatar,
            'is_subscribed_back': self.is_subscribed_back,
            'subscribers_count': self.subscribers_count
        }


@dataclass
class SubscriberListDto:
    channel_id: str
    subscribers: List[SubscriberDto]
    total: int

    def to_dict(self):
        return {
            'channel_id': self.channel_id,
            'subscribers': [s.to_dict() for s in self.subscribers],
            'total': self.total
        }


@dataclass
class ChannelDto:
    channel_id: str
    username: str
    full_name: Optional[str]
    avatar: Optional[str]
    subscribed_at: Optional[str] = None

    def to_dict(self):
        return {
            'channel_id': self.channel_id,
            'username': self.username,
            'full_name': self.full_name,
            'avatar': self.avatar,
            'subscribed_at': self.subscribed_at
        }


@dataclass
class SubscribedChannelListDto:
    subscriber_id: str
    channels: List[ChannelDto]
    total: int

    def to_dict(self):
        return {
            'subscriber_id': self.subscriber_id,
            'channels': [c.to_dict() for c in self.channels],
            'total': self.total
        }


@dataclass
class ToggleSubscriptionResponseDto:
    channel_id: str
    is_subscribed: bool
    message: str

    def to_dict(self):
        return {
            'channel_id': self.channel_id,
            'is_subscribed': self.is_subscribed,
            'message': self.message
        }
