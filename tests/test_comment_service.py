from datetime import datetime, timedelta
from unittest.mock import patch

import pytest
from bson import ObjectId

from common.enum.error_code import APIError
from common.exception.exceptions import NotFoundError, ValidationError
from app.models.mongodb.like import LikeTarget
from app.services.comment_service import CommentService
from app.services.like_service import LikeService


@pytest.fixture
def video(make_user, make_video):
    return make_video(make_user('creator'))


class TestAddComment:

    def test_content_is_trimmed(self, store, video, make_user):
        author = make_user('author')

        comment = CommentService.add_comment(str(video), str(author), '  first!  ')

        assert comment.content == 'first!'
        assert comment.owner_id == str(author)
        assert store.count('comments', {'video': video}) == 1

    @pytest.mark.parametrize('content', ['', '   ', None])
    def test_empty_content(self, store, video, make_user, content):
        author = make_user('author')

        with pytest.raises(ValidationError) as exc_info:
            CommentService.add_comment(str(video), str(author), content)

        assert exc_info.value.error_enum is APIError.COMMENT_EMPTY

    def test_missing_video(self, store, make_user):
        author = make_user('author')
        with pytest.raises(NotFoundError):
            CommentService.add_comment(str(ObjectId()), str(author), 'hello')


class TestCommentList:

    def test_page_and_total(self, store, video, make_user):
        author = make_user('author')
        base = datetime(2024, 1, 1)
        for i in range(12):
            store.insert_one('comments', {
                'content': f'comment {i}', 'video': video, 'owner': author,
                'created_at': base + timedelta(minutes=i), 'updated_at': base + timedelta(minutes=i)
            })
        store.insert_one('comments', {'content': 'elsewhere', 'video': ObjectId(), 'owner': author})

        rows = [{'_id': ObjectId(), 'content': 'comment 6', 'video': video,
                 'owner': {'_id': author, 'username': 'author', 'full_name': 'Author', 'avatar': None}}]
        with patch('app.models.mongodb.comment.CommentRepository.aggregate', return_value=rows) as aggregate:
            result = CommentService.get_comment_list(str(video), page=2, limit=5)

        stages = aggregate.call_args[0][0]
        assert stages[0] == {'$match': {'video': video}}
        assert stages[1] == {'$sort': {'created_at': -1, '_id': 1}}
        assert stages[-2:] == [{'$skip': 5}, {'$limit': 5}]

        assert result.total == 12
        assert result.total_pages == 3
        assert result.has_next is True
        assert result.comments[0].owner.username == 'author'

    def test_missing_video(self, store):
        with pytest.raises(NotFoundError):
            CommentService.get_comment_list(str(ObjectId()))

    def test_invalid_pagination(self, store, video):
        with pytest.raises(ValidationError) as exc_info:
            CommentService.get_comment_list(str(video), page=0)
        assert exc_info.value.error_enum is APIError.INVALID_PAGINATION


class TestUpdateAndDelete:

    def test_update_content(self, store, video, make_user):
        author = make_user('author')
        comment = CommentService.add_comment(str(video), str(author), 'before')

        updated = CommentService.update_comment(comment.comment_id, ' after ')

        assert updated.content == 'after'

    def test_update_missing(self, store):
        with pytest.raises(NotFoundError):
            CommentService.update_comment(str(ObjectId()), 'text')

    def test_delete_removes_comment_likes(self, store, video, make_user):
        author = make_user('author')
        fan = make_user('fan')
        comment = CommentService.add_comment(str(video), str(author), 'like me')
        LikeService.toggle_like(LikeTarget.COMMENT, comment.comment_id, str(fan))

        CommentService.delete_comment(comment.comment_id)

        assert store.count('comments') == 0
        assert store.count('likes') == 0

    def test_delete_missing(self, store):
        with pytest.raises(NotFoundError):
            CommentService.delete_comment(str(ObjectId()))
