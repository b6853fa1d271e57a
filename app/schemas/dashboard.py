from marshmallow import Schema, fields


class ChannelStatsResponseSchema(Schema):
    channel_id = fields.String(metadata={'description': '채널 ID'})
    total_subscribers = fields.Integer(metadata={'description': '구독자 수'})
    total_videos = fields.Integer(metadata={'description': '영상 수'})
    total_views = fields.Integer(metadata={'description': '총 조회수'})
    total_likes = fields.Integer(metadata={'description': '영상 좋아요 총합'})
