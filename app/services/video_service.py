from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from pymongo.errors import PyMongoError

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError, NotFoundError, ValidationError
from common.query import get_pagination_calculator
from common.query.pipeline_builder import FeedMode, FeedQuery, QueryPipelineBuilder
from common.storage import get_media_storage
from common.store import get_document_store
from common.utils.id_utils import to_object_id
from common.utils.logging_utils import get_logger
from app.models.mongodb.comment import CommentRepository
from app.models.mongodb.like import LikeRepository, LikeTarget
from app.models.mongodb.user import UserRepository
from app.models.mongodb.video import Video, VideoRepository
from app.dto.common import EmptyResultDto
from app.dto.video import PublishStatusDto, VideoDto, VideoFeedDto

logger = get_logger('video_service')


def _discard_assets(media, assets: Sequence[Tuple[str, str]]):
    """후속 단계 실패로 쓸모없어진 업로드 파일 삭제. 삭제 실패는 기록만 하고 원래 오류를 우선한다."""
    for public_id, kind in assets:
        try:
            media.delete(public_id, kind)
        except BusinessError as e:
            logger.error(f"업로드 파일 정리 실패 ({kind}:{public_id}): {e.message}")


class VideoService:

    @staticmethod
    def get_video_feed(feed_query: FeedQuery) -> VideoFeedDto:
        """
        공개 피드 / 채널 피드 공통

        목록과 total 은 별도 쿼리라 동시 쓰기가 있으면 total_pages 가 잠시 어긋날 수 있다.
        (허용된 최종 일관성)
        """
        pagination = get_pagination_calculator()
        window = pagination.window(feed_query.page, feed_query.limit)

        builder = QueryPipelineBuilder()
        stages = builder.build(feed_query, window)
        count_stages = builder.count_stages(feed_query)

        video_repo = VideoRepository(get_document_store())
        docs = video_repo.aggregate(stages)
        count_rows = video_repo.aggregate(count_stages)
        total = count_rows[0]['total'] if count_rows else 0

        page_info = pagination.page_info(window, total)
        return VideoFeedDto.of([VideoDto.from_doc(doc) for doc in docs], page_info)

    @staticmethod
    def get_channel_videos(owner_id: str, feed_query: FeedQuery) -> VideoFeedDto:
        #NOTE: 채널 주인 본인 조회 → 비공개 영상 포함
        return VideoService.get_video_feed(replace(feed_query, owner_id=owner_id, mode=FeedMode.CHANNEL))

    @staticmethod
    def get_video(video_id: str) -> Video:
        video = VideoRepository(get_document_store()).find_by_id(to_object_id(video_id))
        if not video:
            raise NotFoundError(APIError.VIDEO_NOT_FOUND)
        return video

    @staticmethod
    def get_video_detail(video_id: str, viewer_id: Optional[str] = None) -> VideoDto:
        video_oid = to_object_id(video_id)
        viewer_oid = to_object_id(viewer_id) if viewer_id else None

        store = get_document_store()
        video_repo = VideoRepository(store)

        builder = QueryPipelineBuilder()
        docs = video_repo.aggregate([{'$match': {'_id': video_oid}}] + builder.join_stages())
        if not docs:
            raise NotFoundError(APIError.VIDEO_NOT_FOUND)

        doc = docs[0]
        owner = doc.get('owner') or {}
        if not doc.get('is_published', True) and owner.get('_id') != viewer_oid:
            raise NotFoundError(APIError.VIDEO_NOT_FOUND)

        updated = video_repo.increment_views(video_oid)
        if updated:
            doc['views'] = updated.views

        if viewer_oid:
            UserRepository(store).append_watch_history(viewer_oid, video_oid)

        return VideoDto.from_doc(doc)

    @staticmethod
    def get_watch_history(user_id: str) -> List[VideoDto]:
        user_oid = to_object_id(user_id)

        store = get_document_store()
        history_ids = UserRepository(store).find_watch_history_ids(user_oid)
        if history_ids is None:
            raise NotFoundError(APIError.USER_NOT_FOUND)

        #NOTE: 최근 시청 순, 중복 제거
        ordered_ids = []
        seen = set()
        for video_oid in reversed(history_ids):
            if video_oid not in seen:
                seen.add(video_oid)
                ordered_ids.append(video_oid)

        if not ordered_ids:
            return []

        builder = QueryPipelineBuilder()
        docs = VideoRepository(store).aggregate(
            [{'$match': {'_id': {'$in': ordered_ids}}}] + builder.join_stages()
        )
        docs_by_id = {doc['_id']: doc for doc in docs}

        result = []
        for video_oid in ordered_ids:
            doc = docs_by_id.get(video_oid)
            if not doc:
                continue
            owner = doc.get('owner') or {}
            if not doc.get('is_published', True) and owner.get('_id') != user_oid:
                continue
            result.append(VideoDto.from_doc(doc))

        return result

    @staticmethod
    def publish_video(owner_id: str, title: str, description: str,
                      video_path: Optional[str], thumbnail_path: Optional[str]) -> VideoDto:
        owner_oid = to_object_id(owner_id)
        if not title or not title.strip():
            raise ValidationError(message='영상 제목이 비어 있습니다.')
        if not video_path or not thumbnail_path:
            raise ValidationError(APIError.VIDEO_FILE_REQUIRED)

        media = get_media_storage()
        video_asset = media.upload(video_path, resource_type='video')
        try:
            thumbnail_asset = media.upload(thumbnail_path, resource_type='image')
        except BusinessError:
            #NOTE: 썸네일 실패 시 먼저 올라간 영상 파일 정리
            media.delete(video_asset.public_id, 'video')
            raise

        video = Video(
            owner=owner_oid,
            title=title.strip(),
            description=(description or '').strip(),
            video_file=video_asset.url,
            thumbnail=thumbnail_asset.url,
            video_public_id=video_asset.public_id,
            thumbnail_public_id=thumbnail_asset.public_id,
            duration=video_asset.duration_seconds,
            is_published=True
        )
        try:
            VideoRepository(get_document_store()).insert(video)
        except (BusinessError, PyMongoError):
            #NOTE: 저장 실패 시 업로드된 두 파일 정리 후 원래 오류 전파
            _discard_assets(media, [(video_asset.public_id, 'video'), (thumbnail_asset.public_id, 'image')])
            raise

        logger.info(f"영상 게시: video={video.id} owner={owner_oid}")
        return VideoDto.from_doc(video.to_dict())

    @staticmethod
    def update_video(video_id: str, title: Optional[str] = None, description: Optional[str] = None,
                     thumbnail_path: Optional[str] = None) -> VideoDto:
        video_oid = to_object_id(video_id)

        fields = {}
        if title is not None:
            if not title.strip():
                raise ValidationError(message='영상 제목이 비어 있습니다.')
            fields['title'] = title.strip()
        if description is not None:
            fields['description'] = description.strip()
        if not fields and not thumbnail_path:
            raise ValidationError(message='수정할 항목이 없습니다.')

        video_repo = VideoRepository(get_document_store())
        video = video_repo.find_by_id(video_oid)
        if not video:
            raise NotFoundError(APIError.VIDEO_NOT_FOUND)

        new_assets = []
        if thumbnail_path:
            thumbnail_asset = get_media_storage().upload(thumbnail_path, resource_type='image')
            fields['thumbnail'] = thumbnail_asset.url
            fields['thumbnail_public_id'] = thumbnail_asset.public_id
            new_assets.append((thumbnail_asset.public_id, 'image'))

        try:
            updated = video_repo.update_fields(video_oid, fields)
            if not updated:
                raise NotFoundError(APIError.VIDEO_NOT_FOUND)
        except (BusinessError, PyMongoError):
            if new_assets:
                _discard_assets(get_media_storage(), new_assets)
            raise

        if thumbnail_path and video.thumbnail_public_id:
            get_media_storage().delete(video.thumbnail_public_id, 'image')

        return VideoDto.from_doc(updated.to_dict())

    @staticmethod
    def delete_video(video_id: str) -> EmptyResultDto:
        video_oid = to_object_id(video_id)

        store = get_document_store()
        video_repo = VideoRepository(store)
        video = video_repo.find_by_id(video_oid)
        if not video:
            raise NotFoundError(APIError.VIDEO_NOT_FOUND)

        media = get_media_storage()
        media.delete(video.video_public_id, 'video')
        media.delete(video.thumbnail_public_id, 'image')

        video_repo.delete(video_oid)

        comment_repo = CommentRepository(store)
        like_repo = LikeRepository(store)
        like_repo.delete_for(LikeTarget.COMMENT, comment_repo.find_ids_by_video(video_oid))
        comment_repo.delete_by_video(video_oid)
        like_repo.delete_for(LikeTarget.VIDEO, [video_oid])

        logger.info(f"영상 삭제: video={video_oid}")
        return EmptyResultDto(message='영상이 삭제되었습니다.')

    @staticmethod
    def toggle_publish_status(video_id: str) -> PublishStatusDto:
        video_oid = to_object_id(video_id)

        video = VideoRepository(get_document_store()).toggle_published(video_oid)
        if not video:
            raise NotFoundError(APIError.VIDEO_NOT_FOUND)

        return PublishStatusDto(video_id=str(video.id), is_published=video.is_published)
