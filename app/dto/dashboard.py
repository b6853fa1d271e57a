from dataclasses import dataclass


@dataclass
class ChannelStatsDto:
    channel_id: str
    total_subscribers: int = 0
    total_videos: int = 0
    total_views: int = 0
    total_likes: int = 0

    def to_dict(self):
        return {
            'channel_id': self.channel_id,
            'total_subscribers': self.total_subscribers,
            'total_videos': self.total_videos,
            'total_views': self.total_views,
            'total_likes': self.total_likes
        }
