from flask import g
from flask_smorest import Blueprint

from app.models.mongodb.like import LikeTarget
from app.schemas.like import LikedVideoListResponseSchema, ToggleLikeResponseSchema
from app.services.like_service import LikeService
from common.decorator.auth_decorators import login_required

like_blueprint = Blueprint(
    'like',
    __name__,
    url_prefix='/api/v1/likes',
    description='좋아요 토글 API'
)


@like_blueprint.route('/toggle/v/<video_id>', methods=['POST'])
@login_required
@like_blueprint.response(200, ToggleLikeResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_video_like(video_id):
    return LikeService.toggle_like(LikeTarget.VIDEO, video_id, g.user_id)


@like_blueprint.route('/toggle/c/<comment_id>', methods=['POST'])
@login_required
@like_blueprint.response(200, ToggleLikeResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_comment_like(comment_id):
    return LikeService.toggle_like(LikeTarget.COMMENT, comment_id, g.user_id)


@like_blueprint.route('/toggle/t/<tweet_id>', methods=['POST'])
@login_required
@like_blueprint.response(200, ToggleLikeResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_tweet_like(tweet_id):
    return LikeService.toggle_like(LikeTarget.TWEET, tweet_id, g.user_id)


@like_blueprint.route('/videos', methods=['GET'])
@login_required
@like_blueprint.response(200, LikedVideoListResponseSchema)
@like_blueprint.doc(security=[{"BearerAuth": []}])
def get_liked_videos():
    return LikeService.get_liked_videos(g.user_id)
