from marshmallow import Schema, fields

from app.schemas.video import VideoSchema


class ToggleLikeResponseSchema(Schema):
    target_id = fields.String(metadata={'description': '대상 ID'})
    target_type = fields.String(metadata={'description': '대상 종류 (video/comment/tweet)'})
    is_liked = fields.Boolean(metadata={'description': '토글 후 좋아요 여부'})
    message = fields.String(metadata={'description': '안내 메시지'})


class LikedVideoSchema(Schema):
    like_id = fields.String(metadata={'description': '좋아요 ID'})
    liked_at = fields.String(allow_none=True, metadata={'description': '좋아요 시각'})
    video = fields.Nested(VideoSchema, metadata={'description': '영상 정보'})


class LikedVideoListResponseSchema(Schema):
    videos = fields.List(fields.Nested(LikedVideoSchema), metadata={'description': '좋아요한 영상 목록 (최근순)'})
    total = fields.Integer(metadata={'description': '전체 개수'})
