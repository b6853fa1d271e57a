from flask import g
from flask_smorest import Blueprint

from app.schemas.common_schema import PageRequestSchema, SuccessResponseSchema
from app.schemas.comment import CommentContentSchema, CommentListResponseSchema, CommentSchema
from app.services.comment_service import CommentService
from common.decorator.auth_decorators import login_required, login_optional
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError

comment_blueprint = Blueprint(
    'comment',
    __name__,
    url_prefix='/api/v1/comments',
    description='영상 댓글 API'
)


def _ensure_comment_owner(comment_id):
    comment = CommentService.get_comment(comment_id)
    if str(comment.owner) != g.user_id:
        raise BusinessError(APIError.COMMENT_FORBIDDEN)
    return comment


@comment_blueprint.route('/<video_id>', methods=['GET'])
@login_optional
@comment_blueprint.arguments(PageRequestSchema, location='query')
@comment_blueprint.response(200, CommentListResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def get_comment_list(data, video_id):
    return CommentService.get_comment_list(video_id, data['page'], data['limit'])


@comment_blueprint.route('/<video_id>', methods=['POST'])
@login_required
@comment_blueprint.arguments(CommentContentSchema)
@comment_blueprint.response(201, CommentSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def add_comment(data, video_id):
    return CommentService.add_comment(video_id, g.user_id, data['content'])


@comment_blueprint.route('/c/<comment_id>', methods=['PATCH'])
@login_required
@comment_blueprint.arguments(CommentContentSchema)
@comment_blueprint.response(200, CommentSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def update_comment(data, comment_id):
    _ensure_comment_owner(comment_id)
    return CommentService.update_comment(comment_id, data['content'])


@comment_blueprint.route('/c/<comment_id>', methods=['DELETE'])
@login_required
@comment_blueprint.response(200, SuccessResponseSchema)
@comment_blueprint.doc(security=[{"BearerAuth": []}])
def delete_comment(comment_id):
    _ensure_comment_owner(comment_id)
    result = CommentService.delete_comment(comment_id)

    return {
        "result": "success",
        'message': result.message
    }
