from marshmallow import Schema, fields, validate

from app.schemas.common_schema import PageInfoSchema, PageRequestSchema, UserSummarySchema


class VideoFeedRequestSchema(PageRequestSchema):
    query = fields.String(
        load_default=None,
        metadata={'description': '제목/설명 검색어'}
    )
    sort_by = fields.String(
        data_key='sortBy',
        load_default=None,
        validate=validate.OneOf(['title', 'views', 'createdAt', 'duration']),
        metadata={'description': '정렬 기준 (검색어만 있으면 관련도 순)'}
    )
    sort_type = fields.String(
        data_key='sortType',
        load_default='desc',
        validate=validate.OneOf(['asc', 'desc']),
        metadata={'description': '정렬 방향'}
    )
    user_id = fields.String(
        data_key='userId',
        load_default=None,
        metadata={'description': '특정 채널의 영상만 조회'}
    )


class ChannelVideoRequestSchema(PageRequestSchema):
    sort_by = fields.String(
        data_key='sortBy',
        load_default=None,
        validate=validate.OneOf(['title', 'views', 'createdAt', 'duration']),
        metadata={'description': '정렬 기준'}
    )
    sort_type = fields.String(
        data_key='sortType',
        load_default='desc',
        validate=validate.OneOf(['asc', 'desc']),
        metadata={'description': '정렬 방향'}
    )


class VideoSchema(Schema):
    video_id = fields.String(metadata={'description': '영상 ID'})
    title = fields.String(metadata={'description': '영상 제목'})
    description = fields.String(metadata={'description': '영상 설명'})
    video_file = fields.String(metadata={'description': '영상 파일 URL'})
    thumbnail = fields.String(metadata={'description': '썸네일 URL'})
    duration = fields.Float(metadata={'description': '영상 길이 (초)'})
    views = fields.Integer(metadata={'description': '조회수'})
    is_published = fields.Boolean(metadata={'description': '공개 여부'})
    created_at = fields.String(allow_none=True, metadata={'description': '게시 시각 (ISO 8601)'})
    owner_id = fields.String(allow_none=True, metadata={'description': '채널 ID'})
    owner = fields.Nested(UserSummarySchema, allow_none=True, metadata={'description': '채널 정보'})


class VideoFeedResponseSchema(PageInfoSchema):
    videos = fields.List(fields.Nested(VideoSchema), metadata={'description': '영상 목록'})


class VideoListResponseSchema(Schema):
    videos = fields.List(fields.Nested(VideoSchema), metadata={'description': '영상 목록'})
    total = fields.Integer(metadata={'description': '전체 개수'})


class PublishVideoFormSchema(Schema):
    title = fields.String(
        required=True,
        validate=validate.Length(min=1, max=200),
        metadata={'description': '영상 제목'}
    )
    description = fields.String(
        load_default='',
        metadata={'description': '영상 설명'}
    )


class UpdateVideoFormSchema(Schema):
    title = fields.String(
        load_default=None,
        validate=validate.Length(min=1, max=200),
        metadata={'description': '변경할 제목'}
    )
    description = fields.String(
        load_default=None,
        metadata={'description': '변경할 설명'}
    )


class PublishStatusResponseSchema(Schema):
    video_id = fields.String(metadata={'description': '영상 ID'})
    is_published = fields.Boolean(metadata={'description': '변경된 공개 여부'})
