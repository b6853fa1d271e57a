from common.enum.error_code import APIError
from common.exception.exceptions import NotFoundError, ValidationError
from common.query import get_pagination_calculator
from common.query.join_resolver import JoinResolver, COMMENT_OWNER_FIELDS
from common.query.pipeline_builder import QueryPipelineBuilder
from common.store import get_document_store
from common.utils.id_utils import to_object_id
from common.utils.logging_utils import get_logger
from app.models.mongodb.comment import Comment, CommentRepository
from app.models.mongodb.like import LikeRepository, LikeTarget
from app.models.mongodb.video import VideoRepository
from app.dto.comment import CommentDto, CommentListDto
from app.dto.common import EmptyResultDto

logger = get_logger('comment_service')


def _normalize_content(text) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError(APIError.COMMENT_EMPTY)
    return text.strip()


class CommentService:
    """
    영상 댓글 스레드
    작성자 본인 여부 검사는 라우트 계층에서 수행한다.
    """

    @staticmethod
    def get_comment_list(video_id: str, page: int = None, limit: int = None) -> CommentListDto:
        video_oid = to_object_id(video_id)
        pagination = get_pagination_calculator()
        window = pagination.window(page, limit)

        store = get_document_store()
        if not VideoRepository(store).exists(video_oid):
            raise NotFoundError(APIError.VIDEO_NOT_FOUND)

        comment_repo = CommentRepository(store)
        match = {'video': video_oid}

        stages = QueryPipelineBuilder().thread(
            match,
            window,
            sort={'created_at': -1},
            join_stages=JoinResolver().lookup_one('owner', COMMENT_OWNER_FIELDS)
        )
        docs = comment_repo.aggregate(stages)

        #NOTE: 같은 필터로 별도 count (skip/limit/정렬 없음). 목록과 트랜잭션으로 묶이지 않음
        total = comment_repo.count(match)
        page_info = pagination.page_info(window, total)

        return CommentListDto.of([CommentDto.from_doc(doc) for doc in docs], page_info)

    @staticmethod
    def get_comment(comment_id: str) -> Comment:
        comment = CommentRepository(get_document_store()).find_by_id(to_object_id(comment_id))
        if not comment:
            raise NotFoundError(APIError.COMMENT_NOT_FOUND)
        return comment

    @staticmethod
    def add_comment(video_id: str, author_id: str, text: str) -> CommentDto:
        video_oid = to_object_id(video_id)
        author_oid = to_object_id(author_id)
        content = _normalize_content(text)

        store = get_document_store()
        if not VideoRepository(store).exists(video_oid):
            raise NotFoundError(APIError.VIDEO_NOT_FOUND)

        comment = Comment(content=content, video=video_oid, owner=author_oid)
        CommentRepository(store).insert(comment)

        logger.info(f"댓글 작성: comment={comment.id} video={video_oid}")
        return CommentDto.from_doc(comment.to_dict())

    @staticmethod
    def update_comment(comment_id: str, text: str) -> CommentDto:
        comment_oid = to_object_id(comment_id)
        content = _normalize_content(text)

        comment = CommentRepository(get_document_store()).update_content(comment_oid, content)
        if not comment:
            raise NotFoundError(APIError.COMMENT_NOT_FOUND)

        return CommentDto.from_doc(comment.to_dict())

    @staticmethod
    def delete_comment(comment_id: str) -> EmptyResultDto:
        comment_oid = to_object_id(comment_id)

        store = get_document_store()
        if CommentRepository(store).delete(comment_oid) == 0:
            raise NotFoundError(APIError.COMMENT_NOT_FOUND)

        LikeRepository(store).delete_for(LikeTarget.COMMENT, [comment_oid])

        logger.info(f"댓글 삭제: comment={comment_oid}")
        return EmptyResultDto(message='댓글이 삭제되었습니다.')
