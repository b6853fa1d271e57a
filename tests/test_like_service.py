from unittest.mock import patch

import pytest
from bson import ObjectId

from common.enum.error_code import APIError
from common.exception.exceptions import NotFoundError, ValidationError
from app.models.mongodb.like import LikeTarget
from app.services.like_service import LikeService


class TestToggleLike:

    def test_video_like_toggles(self, store, make_user, make_video):
        owner = make_user('owner')
        fan = make_user('fan')
        video = make_video(owner)

        liked = LikeService.toggle_like(LikeTarget.VIDEO, str(video), str(fan))
        assert liked.is_liked is True
        assert liked.target_type == 'video'
        assert liked.target_id == str(video)
        assert store.count('likes', {'video': video, 'liked_by': fan}) == 1

        unliked = LikeService.toggle_like(LikeTarget.VIDEO, str(video), str(fan))
        assert unliked.is_liked is False
        assert store.count('likes') == 0

    def test_comment_and_tweet_targets(self, store, make_user):
        fan = make_user('fan')
        comment = store.insert_one('comments', {'content': 'hi', 'video': ObjectId(), 'owner': fan})
        tweet = store.insert_one('tweets', {'content': 'hello', 'owner': fan})

        assert LikeService.toggle_like(LikeTarget.COMMENT, str(comment), str(fan)).is_liked
        assert LikeService.toggle_like('tweet', str(tweet), str(fan)).is_liked
        assert store.count('likes', {'liked_by': fan}) == 2

    @pytest.mark.parametrize('target, error', [
        (LikeTarget.VIDEO, APIError.VIDEO_NOT_FOUND),
        (LikeTarget.COMMENT, APIError.COMMENT_NOT_FOUND),
        (LikeTarget.TWEET, APIError.TWEET_NOT_FOUND),
    ])
    def test_missing_target(self, store, make_user, target, error):
        fan = make_user('fan')

        with pytest.raises(NotFoundError) as exc_info:
            LikeService.toggle_like(target, str(ObjectId()), str(fan))

        assert exc_info.value.error_enum is error
        assert store.count('likes') == 0

    def test_invalid_target_id(self, store, make_user):
        fan = make_user('fan')
        with pytest.raises(ValidationError):
            LikeService.toggle_like(LikeTarget.VIDEO, '12345', str(fan))


class TestLikedVideos:

    def test_pipeline_and_mapping(self, store):
        user = ObjectId()
        video = ObjectId()
        rows = [{
            '_id': ObjectId(),
            'liked_by': user,
            'video': {
                '_id': video,
                'title': 'liked',
                'owner': {'_id': ObjectId(), 'username': 'creator', 'avatar': None},
                'is_published': True,
            },
        }]

        with patch('app.models.mongodb.like.LikeRepository.aggregate', return_value=rows) as aggregate:
            result = LikeService.get_liked_videos(str(user))

        stages = aggregate.call_args[0][0]
        assert stages[0]['$match']['liked_by'] == user
        assert stages[1] == {'$sort': {'_id': -1}}
        assert stages[2]['$lookup']['from'] == 'videos'
        assert stages[2]['$lookup']['pipeline'][0]['$lookup']['from'] == 'users'

        assert result.total == 1
        assert result.videos[0].video.video_id == str(video)
        assert result.videos[0].video.owner.username == 'creator'
