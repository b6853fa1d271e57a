from unittest.mock import MagicMock, patch

import pytest
from bson import ObjectId

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError, NotFoundError, StoreUnavailableError, ValidationError
from common.query.pipeline_builder import FeedQuery
from common.storage.media_storage import MediaAsset
from app.models.mongodb.user import UserRepository
from app.models.mongodb.video import VideoRepository
from app.services.video_service import VideoService

AGGREGATE = 'app.models.mongodb.video.VideoRepository.aggregate'


def _joined(doc, owner_name='creator'):
    joined = dict(doc)
    joined['owner'] = {'_id': doc['owner'], 'username': owner_name, 'avatar': None}
    return joined


class TestVideoFeed:

    def test_page_metadata(self, store):
        rows = [{'_id': ObjectId(), 'title': f'v{i}', 'owner': {'_id': ObjectId(), 'username': 'u'}}
                for i in range(10)]

        with patch(AGGREGATE, side_effect=[rows, [{'total': 23}]]) as aggregate:
            feed = VideoService.get_video_feed(FeedQuery(page=1, limit=10))

        page_stages, count_stages = (call[0][0] for call in aggregate.call_args_list)
        assert page_stages[-1] == {'$limit': 10}
        assert count_stages[-1] == {'$count': 'total'}

        assert len(feed.videos) == 10
        assert feed.total == 23
        assert feed.total_pages == 3
        assert feed.has_next is True
        assert feed.videos[0].owner.username == 'u'

    def test_empty_feed(self, store):
        with patch(AGGREGATE, side_effect=[[], []]):
            feed = VideoService.get_video_feed(FeedQuery(query='nothing matches'))

        assert feed.videos == []
        assert feed.total == 0
        assert feed.total_pages == 0
        assert feed.has_next is False

    def test_channel_videos_include_unpublished(self, store):
        owner = ObjectId()
        with patch(AGGREGATE, side_effect=[[], [{'total': 0}]]) as aggregate:
            VideoService.get_channel_videos(str(owner), FeedQuery())

        page_stages = aggregate.call_args_list[0][0][0]
        assert {'$match': {'owner': owner}} in page_stages
        assert {'$match': {'is_published': True}} not in page_stages

    def test_invalid_limit(self, store):
        with pytest.raises(ValidationError):
            VideoService.get_video_feed(FeedQuery(limit=1000))


class TestVideoDetail:

    def test_increments_views_and_records_history(self, store, make_user, make_video):
        owner = make_user('creator')
        viewer = make_user('viewer')
        video = make_video(owner, views=4)
        doc = store.find_one('videos', {'_id': video})

        with patch(AGGREGATE, return_value=[_joined(doc)]):
            detail = VideoService.get_video_detail(str(video), str(viewer))

        assert detail.views == 5
        assert store.find_one('videos', {'_id': video})['views'] == 5
        assert store.find_one('users', {'_id': viewer})['watch_history'] == [video]

    def test_guest_view_has_no_history(self, store, make_user, make_video):
        owner = make_user('creator')
        video = make_video(owner)
        doc = store.find_one('videos', {'_id': video})

        with patch(AGGREGATE, return_value=[_joined(doc)]):
            detail = VideoService.get_video_detail(str(video))

        assert detail.views == 1

    def test_unpublished_hidden_from_others(self, store, make_user, make_video):
        owner = make_user('creator')
        viewer = make_user('viewer')
        video = make_video(owner, is_published=False)
        doc = store.find_one('videos', {'_id': video})

        with patch(AGGREGATE, return_value=[_joined(doc)]):
            with pytest.raises(NotFoundError):
                VideoService.get_video_detail(str(video), str(viewer))
            assert VideoService.get_video_detail(str(video), str(owner)).video_id == str(video)

    def test_missing_video(self, store):
        with patch(AGGREGATE, return_value=[]):
            with pytest.raises(NotFoundError):
                VideoService.get_video_detail(str(ObjectId()))


class TestWatchHistory:

    def test_recent_first_without_duplicates(self, store, make_user, make_video):
        owner = make_user('creator')
        first = make_video(owner, title='first')
        second = make_video(owner, title='second')
        viewer = make_user('viewer', watch_history=[first, second, first])

        docs = [_joined(store.find_one('videos', {'_id': vid})) for vid in (second, first)]
        with patch(AGGREGATE, return_value=docs):
            history = VideoService.get_watch_history(str(viewer))

        assert [video.title for video in history] == ['first', 'second']

    def test_empty_history(self, store, make_user):
        viewer = make_user('viewer')
        assert VideoService.get_watch_history(str(viewer)) == []

    def test_unknown_user(self, store):
        with pytest.raises(NotFoundError):
            VideoService.get_watch_history(str(ObjectId()))

    def test_history_keeps_only_latest_entries(self, store, make_user):
        viewer = make_user('viewer')
        watched = [ObjectId() for _ in range(5)]

        for video_id in watched:
            UserRepository(store).append_watch_history(viewer, video_id, limit=3)

        assert store.find_one('users', {'_id': viewer})['watch_history'] == watched[-3:]


class TestPublishLifecycle:

    def test_publish(self, store, media, make_user):
        owner = make_user('creator')
        media.upload.side_effect = [
            MediaAsset(url='https://cdn/v.mp4', public_id='videos/v', duration_seconds=12.5),
            MediaAsset(url='https://cdn/t.jpg', public_id='thumbnails/t'),
        ]

        video = VideoService.publish_video(str(owner), ' My video ', 'desc', '/tmp/v.mp4', '/tmp/t.jpg')

        assert video.title == 'My video'
        assert video.duration == 12.5
        assert video.is_published is True
        assert store.count('videos', {'owner': owner}) == 1

    def test_thumbnail_failure_cleans_up_video_asset(self, store, media, make_user):
        owner = make_user('creator')
        media.upload.side_effect = [
            MediaAsset(url='https://cdn/v.mp4', public_id='videos/v'),
            BusinessError(APIError.VIDEO_UPLOAD_FAIL),
        ]

        with pytest.raises(BusinessError):
            VideoService.publish_video(str(owner), 'title', '', '/tmp/v.mp4', '/tmp/t.jpg')

        media.delete.assert_called_once_with('videos/v', 'video')
        assert store.count('videos') == 0

    def test_files_required(self, store, media, make_user):
        owner = make_user('creator')
        with pytest.raises(ValidationError) as exc_info:
            VideoService.publish_video(str(owner), 'title', '', None, '/tmp/t.jpg')
        assert exc_info.value.error_enum is APIError.VIDEO_FILE_REQUIRED
        media.upload.assert_not_called()

    def test_update_title(self, store, media, make_user, make_video):
        video = make_video(make_user('creator'), title='old')

        updated = VideoService.update_video(str(video), title='new')

        assert updated.title == 'new'
        media.upload.assert_not_called()

    def test_delete_cascades(self, store, media, make_user, make_video):
        owner = make_user('creator')
        fan = make_user('fan')
        video = make_video(owner, title='doomed')
        keep = make_video(owner, title='keep')
        comment = store.insert_one('comments', {'content': 'c', 'video': video, 'owner': fan})
        store.insert_one('comments', {'content': 'k', 'video': keep, 'owner': fan})
        store.insert_one('likes', {'liked_by': fan, 'video': video})
        store.insert_one('likes', {'liked_by': fan, 'comment': comment})
        store.insert_one('likes', {'liked_by': fan, 'video': keep})

        VideoService.delete_video(str(video))

        assert store.count('videos') == 1
        assert store.count('comments') == 1
        assert store.count('likes') == 1
        media.delete.assert_any_call('videos/doomed', 'video')
        media.delete.assert_any_call('thumbnails/doomed', 'image')

    def test_store_failure_after_upload_cleans_up_assets(self, store, media, make_user):
        owner = make_user('creator')
        media.upload.side_effect = [
            MediaAsset(url='https://cdn/v.mp4', public_id='videos/v'),
            MediaAsset(url='https://cdn/t.jpg', public_id='thumbnails/t'),
        ]

        with patch.object(VideoRepository, 'insert', side_effect=StoreUnavailableError()):
            with pytest.raises(StoreUnavailableError):
                VideoService.publish_video(str(owner), 'title', '', '/tmp/v.mp4', '/tmp/t.jpg')

        assert media.delete.call_count == 2
        media.delete.assert_any_call('videos/v', 'video')
        media.delete.assert_any_call('thumbnails/t', 'image')

    def test_cleanup_failure_keeps_original_error(self, store, media, make_user):
        owner = make_user('creator')
        media.upload.side_effect = [
            MediaAsset(url='https://cdn/v.mp4', public_id='videos/v'),
            MediaAsset(url='https://cdn/t.jpg', public_id='thumbnails/t'),
        ]
        media.delete.side_effect = BusinessError(APIError.VIDEO_DELETE_FAIL)

        with patch.object(VideoRepository, 'insert', side_effect=StoreUnavailableError()):
            with pytest.raises(StoreUnavailableError):
                VideoService.publish_video(str(owner), 'title', '', '/tmp/v.mp4', '/tmp/t.jpg')

        assert media.delete.call_count == 2

    def test_update_failure_cleans_up_new_thumbnail(self, store, media, make_user, make_video):
        video = make_video(make_user('creator'), title='old')
        media.upload.return_value = MediaAsset(url='https://cdn/new.jpg', public_id='thumbnails/new')

        with patch.object(VideoRepository, 'update_fields', side_effect=StoreUnavailableError()):
            with pytest.raises(StoreUnavailableError):
                VideoService.update_video(str(video), thumbnail_path='/tmp/new.jpg')

        media.delete.assert_called_once_with('thumbnails/new', 'image')
        assert store.find_one('videos', {'_id': video})['thumbnail_public_id'] == 'thumbnails/old'

    def test_update_of_vanished_video_cleans_up_new_thumbnail(self, store, media, make_user, make_video):
        video = make_video(make_user('creator'), title='old')
        media.upload.return_value = MediaAsset(url='https://cdn/new.jpg', public_id='thumbnails/new')

        with patch.object(VideoRepository, 'update_fields', return_value=None):
            with pytest.raises(NotFoundError):
                VideoService.update_video(str(video), thumbnail_path='/tmp/new.jpg')

        media.delete.assert_called_once_with('thumbnails/new', 'image')


class TestTogglePublished:

    def test_single_atomic_update(self):
        video_id = ObjectId()
        store = MagicMock()
        store.find_one_and_update.return_value = {'_id': video_id, 'owner': ObjectId(), 'is_published': False}

        video = VideoRepository(store).toggle_published(video_id)

        name, filter, update = store.find_one_and_update.call_args[0]
        assert filter == {'_id': video_id}
        assert update[0]['$set']['is_published'] == {'$not': ['$is_published']}
        assert video.is_published is False

    def test_missing_video(self, store):
        with patch.object(VideoRepository, 'toggle_published', return_value=None):
            with pytest.raises(NotFoundError):
                VideoService.toggle_publish_status(str(ObjectId()))
