from marshmallow import Schema, fields, validate

from app.schemas.common_schema import PageInfoSchema, UserSummarySchema


class CommentSchema(Schema):
    comment_id = fields.String(metadata={'description': '댓글 ID'})
    video_id = fields.String(metadata={'description': '영상 ID'})
    content = fields.String(metadata={'description': '댓글 내용'})
    created_at = fields.String(allow_none=True, metadata={'description': '작성 시각'})
    updated_at = fields.String(allow_none=True, metadata={'description': '수정 시각'})
    owner_id = fields.String(allow_none=True, metadata={'description': '작성자 ID'})
    owner = fields.Nested(UserSummarySchema, allow_none=True, metadata={'description': '작성자 정보'})


class CommentListResponseSchema(PageInfoSchema):
    comments = fields.List(fields.Nested(CommentSchema), metadata={'description': '댓글 목록 (최신순)'})


class CommentContentSchema(Schema):
    content = fields.String(
        required=True,
        validate=validate.Length(min=1, max=1000),
        metadata={'description': '댓글 내용'}
    )
