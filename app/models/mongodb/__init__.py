"""
MongoDB Collections Models
MongoDB 콜렉션용 데이터 모델 및 Repository
"""

from .user import User, UserRepository
from .video import Video, VideoRepository
from .comment import Comment, CommentRepository
from .like import LikeTarget, LikeRepository, LIKE_RELATION
from .subscription import SubscriptionRepository, SUBSCRIPTION_RELATION, CHANNEL_TARGET

REPOSITORIES = (
    UserRepository,
    VideoRepository,
    CommentRepository,
    LikeRepository,
    SubscriptionRepository,
)


def ensure_indexes(store):
    """앱 시작 시 1회: 토글의 유니크 인덱스와 검색용 텍스트 인덱스 생성"""
    for repository_class in REPOSITORIES:
        repository_class(store).ensure_indexes()


__all__ = [
    'User',
    'UserRepository',
    'Video',
    'VideoRepository',
    'Comment',
    'CommentRepository',
    'LikeTarget',
    'LikeRepository',
    'LIKE_RELATION',
    'SubscriptionRepository',
    'SUBSCRIPTION_RELATION',
    'CHANNEL_TARGET',
    'ensure_indexes'
]
