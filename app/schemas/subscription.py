from marshmallow import Schema, fields


class ToggleSubscriptionResponseSchema(Schema):
    channel_id = fields.String(metadata={'description': '채널 ID'})
    is_subscribed = fields.Boolean(metadata={'description': '토글 후 구독 여부'})
    message = fields.String(metadata={'description': '안내 메시지'})


class SubscriberSchema(Schema):
    user_id = fields.String(metadata={'description': '구독자 ID'})
    username = fields.String(metadata={'description': '사용자명'})
    full_name = fields.String(allow_none=True, metadata={'description': '이름'})
    avatar = fields.String(allow_none=True, metadata={'description': '프로필 이미지 URL'})
    is_subscribed_back = fields.Boolean(metadata={'description': '채널이 이 구독자를 구독 중인지'})
    subscribers_count = fields.Integer(metadata={'description': '이 구독자의 구독자 수'})


class SubscriberListResponseSchema(Schema):
    channel_id = fields.String(metadata={'description': '채널 ID'})
    subscribers = fields.List(fields.Nested(SubscriberSchema), metadata={'description': '구독자 목록'})
    total = fields.Integer(metadata={'description': '구독자 수'})


class ChannelSchema(Schema):
    channel_id = fields.String(metadata={'description': '채널 ID'})
    username = fields.String(metadata={'description': '사용자명'})
    full_name = fields.String(allow_none=True, metadata={'description': '이름'})
    avatar = fields.String(allow_none=True, metadata={'description': '프로필 이미지 URL'})
    subscribed_at = fields.String(allow_none=True, metadata={'description': '구독 시각'})


class SubscribedChannelListResponseSchema(Schema):
    subscriber_id = fields.String(metadata={'description': '구독자 ID'})
    channels = fields.List(fields.Nested(ChannelSchema), metadata={'description': '구독 중인 채널 목록'})
    total = fields.Integer(metadata={'description': '채널 수'})
