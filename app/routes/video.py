import os
import uuid

from flask import current_app, g, request
from flask_smorest import Blueprint
from werkzeug.utils import secure_filename

from app.schemas.common_schema import SuccessResponseSchema
from app.schemas.video import (
    VideoFeedRequestSchema, VideoFeedResponseSchema,
    VideoSchema, VideoListResponseSchema,
    PublishVideoFormSchema, UpdateVideoFormSchema,
    PublishStatusResponseSchema
)
from app.services.video_service import VideoService
from common.decorator.auth_decorators import login_required, login_optional
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.query.pipeline_builder import FeedQuery

video_blueprint = Blueprint(
    'video',
    __name__,
    url_prefix='/api/v1/videos',
    description='영상 피드, 상세, 게시 API'
)


def _save_upload(field_name):
    file = request.files.get(field_name)
    if not file or not file.filename:
        return None

    upload_folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(upload_folder, exist_ok=True)

    filename = f"{uuid.uuid4().hex}_{secure_filename(file.filename)}"
    path = os.path.join(upload_folder, filename)
    file.save(path)
    return path


def _discard_uploads(*paths):
    #NOTE: MediaStorage 가 이미 지운 파일은 건너뜀
    for path in paths:
        if not path:
            continue
        try:
            os.remove(path)
        except FileNotFoundError:
            pass


def _ensure_video_owner(video_id):
    video = VideoService.get_video(video_id)
    if str(video.owner) != g.user_id:
        raise BusinessError(APIError.VIDEO_FORBIDDEN)
    return video


@video_blueprint.route('', methods=['GET'])
@login_optional
@video_blueprint.arguments(VideoFeedRequestSchema, location='query')
@video_blueprint.response(200, VideoFeedResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def get_video_feed(data):
    feed_query = FeedQuery(
        page=data['page'],
        limit=data['limit'],
        sort_by=data.get('sort_by'),
        sort_type=data.get('sort_type'),
        query=data.get('query'),
        owner_id=data.get('user_id')
    )
    return VideoService.get_video_feed(feed_query)


@video_blueprint.route('', methods=['POST'])
@login_required
@video_blueprint.arguments(PublishVideoFormSchema, location='form')
@video_blueprint.response(201, VideoSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def publish_video(data):
    video_path = thumbnail_path = None
    try:
        video_path = _save_upload('videoFile')
        thumbnail_path = _save_upload('thumbnail')
        return VideoService.publish_video(
            g.user_id,
            data['title'],
            data.get('description'),
            video_path,
            thumbnail_path
        )
    finally:
        _discard_uploads(video_path, thumbnail_path)


@video_blueprint.route('/history', methods=['GET'])
@login_required
@video_blueprint.response(200, VideoListResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def get_watch_history():
    videos = VideoService.get_watch_history(g.user_id)
    return {
        'videos': videos,
        'total': len(videos)
    }


@video_blueprint.route('/<video_id>', methods=['GET'])
@login_optional
@video_blueprint.response(200, VideoSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def get_video_detail(video_id):
    return VideoService.get_video_detail(video_id, g.user_id)


@video_blueprint.route('/<video_id>', methods=['PATCH'])
@login_required
@video_blueprint.arguments(UpdateVideoFormSchema, location='form')
@video_blueprint.response(200, VideoSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def update_video(data, video_id):
    _ensure_video_owner(video_id)
    thumbnail_path = None
    try:
        thumbnail_path = _save_upload('thumbnail')
        return VideoService.update_video(
            video_id,
            title=data.get('title'),
            description=data.get('description'),
            thumbnail_path=thumbnail_path
        )
    finally:
        _discard_uploads(thumbnail_path)


@video_blueprint.route('/<video_id>', methods=['DELETE'])
@login_required
@video_blueprint.response(200, SuccessResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def delete_video(video_id):
    _ensure_video_owner(video_id)
    result = VideoService.delete_video(video_id)

    return {
        "result": "success",
        'message': result.message
    }


@video_blueprint.route('/toggle/publish/<video_id>', methods=['PATCH'])
@login_required
@video_blueprint.response(200, PublishStatusResponseSchema)
@video_blueprint.doc(security=[{"BearerAuth": []}])
def toggle_publish_status(video_id):
    _ensure_video_owner(video_id)
    return VideoService.toggle_publish_status(video_id)
