from marshmallow import Schema, fields, validate

class SuccessResponseSchema(Schema):
    result = fields.String(dump_default="success", metadata={'description': '성공 여부'})
    message = fields.String(metadata={'description': '안내 메시지'})


class UserSummarySchema(Schema):
    user_id = fields.String(metadata={'description': '사용자 ID'})
    username = fields.String(metadata={'description': '사용자명'})
    full_name = fields.String(allow_none=True, metadata={'description': '이름'})
    avatar = fields.String(allow_none=True, metadata={'description': '프로필 이미지 URL'})


class PageRequestSchema(Schema):
    page = fields.Integer(
        load_default=1,
        validate=validate.Range(min=1),
        metadata={'description': '페이지 번호 (1부터 시작)'}
    )
    limit = fields.Integer(
        load_default=10,
        validate=validate.Range(min=1, max=100),
        metadata={'description': '페이지 크기 (1~100)'}
    )


class PageInfoSchema(Schema):
    total = fields.Integer(metadata={'description': '전체 개수'})
    total_pages = fields.Integer(metadata={'description': '전체 페이지 수'})
    page = fields.Integer(metadata={'description': '현재 페이지'})
    limit = fields.Integer(metadata={'description': '페이지 크기'})
    has_next = fields.Boolean(metadata={'description': '다음 페이지 존재 여부'})
