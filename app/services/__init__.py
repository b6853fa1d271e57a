"""
Services package
비즈니스 로직을 처리하는 서비스 레이어

- video_service: 영상 피드, 상세, 게시/수정/삭제
- comment_service: 영상 댓글 스레드
- like_service: 영상/댓글/트윗 좋아요 토글
- subscription_service: 구독 토글, 구독자 그래프
- dashboard_service: 채널 통계
"""

__all__ = []
