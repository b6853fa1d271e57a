from common.enum.error_code import APIError
from common.exception.exceptions import NotFoundError
from common.query.pipeline_builder import QueryPipelineBuilder
from common.store import get_document_store
from common.toggle.toggle_engine import RelationKey, ToggleEngine
from common.utils.id_utils import id_str, to_object_id
from common.utils.logging_utils import get_logger
from app.models.mongodb.like import LIKE_RELATION, LikeRepository, LikeTarget
from app.models.mongodb.video import VideoRepository
from app.dto.common import iso
from app.dto.like import LikedVideoDto, LikedVideoListDto, ToggleLikeResponseDto
from app.dto.video import VideoDto

logger = get_logger('like_service')

TARGET_NOT_FOUND = {
    LikeTarget.VIDEO: APIError.VIDEO_NOT_FOUND,
    LikeTarget.COMMENT: APIError.COMMENT_NOT_FOUND,
    LikeTarget.TWEET: APIError.TWEET_NOT_FOUND,
}


class LikeService:

    @staticmethod
    def toggle_like(target: LikeTarget, target_id: str, user_id: str) -> ToggleLikeResponseDto:
        target = LikeTarget(target)
        target_oid = to_object_id(target_id)
        user_oid = to_object_id(user_id)

        store = get_document_store()
        if not store.exists(target.collection, {'_id': target_oid}):
            raise NotFoundError(TARGET_NOT_FOUND[target])

        engine = ToggleEngine(store, LIKE_RELATION, extra_fields=LikeRepository.created_at_field)
        result = engine.toggle(RelationKey(actor_id=user_oid, target_id=target_oid, target_kind=target.value))

        return ToggleLikeResponseDto(
            target_id=id_str(result.target_id),
            target_type=target.value,
            is_liked=result.active,
            message='좋아요가 추가되었습니다.' if result.active else '좋아요가 취소되었습니다.'
        )

    @staticmethod
    def get_liked_videos(user_id: str) -> LikedVideoListDto:
        user_oid = to_object_id(user_id)

        builder = QueryPipelineBuilder()
        stages = [
            {'$match': {'liked_by': user_oid, 'video': {'$exists': True, '$ne': None}}},
            {'$sort': {'_id': -1}},
            {
                '$lookup': {
                    'from': VideoRepository.COLLECTION_NAME,
                    'localField': 'video',
                    'foreignField': '_id',
                    'as': 'video',
                    'pipeline': builder.join_stages()
                }
            },
            {'$unwind': '$video'},
            #NOTE: 좋아요 후 비공개 전환된 영상은 본인 영상일 때만 노출
            {'$match': {'$or': [{'video.is_published': True}, {'video.owner._id': user_oid}]}}
        ]
        docs = LikeRepository(get_document_store()).aggregate(stages)

        videos = [
            LikedVideoDto(
                like_id=id_str(doc['_id']),
                liked_at=iso(doc.get('created_at')),
                video=VideoDto.from_doc(doc['video'])
            )
            for doc in docs
        ]
        return LikedVideoListDto(videos=videos, total=len(videos))
