"""
Models package
MongoDB 도큐먼트 모델 및 Repository

MongoDB Collections:
- users: 사용자(채널) 정보 (watch_history 만 이 서비스에서 변경)
- videos: 영상 정보
- comments: 댓글
- likes: 좋아요 (video/comment/tweet 중 하나)
- subscriptions: 구독 관계
"""

from app.models.mongodb import (
    User,
    UserRepository,
    Video,
    VideoRepository,
    Comment,
    CommentRepository,
    LikeTarget,
    LikeRepository,
    SubscriptionRepository,
    ensure_indexes
)

__all__ = [
    'User',
    'UserRepository',
    'Video',
    'VideoRepository',
    'Comment',
    'CommentRepository',
    'LikeTarget',
    'LikeRepository',
    'SubscriptionRepository',
    'ensure_indexes'
]
