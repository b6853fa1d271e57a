from dataclasses import dataclass
from typing import List, Optional

from app.dto.video import VideoDto


@dataclass
class ToggleLikeResponseDto:
    target_id: str
    target_type: str
    is_liked: bool
    message: str

    def to_dict(self):
        return {
            'target_id': self.target_id,
            'target_type': self.target_type,
            'is_liked': self.is_liked,
            'message': self.message
        }


@dataclass
class LikedVideoDto:
    like_id: str
    liked_at: Optional[str]
    video: VideoDto

    def to_dict(self):
        return {
            'like_id': self.like_id,
            'liked_at': self.liked_at,
            'video': self.video.to_dict()
        }


@dataclass
class LikedVideoListDto:
    videos: List[LikedVideoDto]
    total: int

    def to_dict(self):
        return {
            'videos': [v.to_dict() for v in self.videos],
            'total': self.total
        }
