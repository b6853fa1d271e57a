import pytest
from bson import ObjectId

from common.query.join_resolver import (
    CHANNEL_FIELDS,
    COMMENT_OWNER_FIELDS,
    OWNER_FIELDS,
    SECRET_USER_FIELDS,
    JoinResolver,
)


class TestProjection:

    def test_always_includes_id(self):
        assert JoinResolver().projection(OWNER_FIELDS) == {'_id': 1, 'username': 1, 'avatar': 1}

    @pytest.mark.parametrize('field', sorted(SECRET_USER_FIELDS) + ['watch_history.0'])
    def test_secret_fields_rejected(self, field):
        with pytest.raises(ValueError):
            JoinResolver().projection(['username', field])

    def test_declared_field_sets_are_safe(self):
        resolver = JoinResolver()
        for fields in (OWNER_FIELDS, COMMENT_OWNER_FIELDS, CHANNEL_FIELDS):
            assert not set(resolver.projection(fields)) & SECRET_USER_FIELDS


class TestLookupStages:

    def test_lookup_one_replaces_id_with_single_document(self):
        stages = JoinResolver().lookup_one('owner', OWNER_FIELDS)

        lookup = stages[0]['$lookup']
        assert lookup['from'] == 'users'
        assert lookup['localField'] == 'owner'
        assert lookup['foreignField'] == '_id'
        assert lookup['as'] == 'owner'
        assert lookup['pipeline'][-1] == {'$project': {'_id': 1, 'username': 1, 'avatar': 1}}
        assert stages[1] == {'$addFields': {'owner': {'$first': '$owner'}}}

    def test_lookup_one_keeps_extra_stages_before_projection(self):
        extra = [{'$match': {'is_active': True}}]
        stages = JoinResolver().lookup_one('owner', OWNER_FIELDS, as_field='author', extra_stages=extra)

        lookup = stages[0]['$lookup']
        assert lookup['as'] == 'author'
        assert lookup['pipeline'][0] == {'$match': {'is_active': True}}
        assert '$project' in lookup['pipeline'][-1]

    def test_lookup_unwound_drops_missing_targets(self):
        stages = JoinResolver().lookup_unwound('channel', CHANNEL_FIELDS)

        assert len(stages) == 2
        assert stages[0]['$lookup']['localField'] == 'channel'
        assert stages[1] == {'$unwind': '$channel'}


class TestProjectDocument:

    def test_strips_secret_and_unrequested_fields(self):
        user_id = ObjectId()
        document = {
            '_id': user_id,
            'username': 'alice',
            'full_name': 'Alice',
            'avatar': 'a.png',
            'email': 'alice@example.com',
            'password': 'hash',
            'watch_history': [ObjectId()],
        }

        projected = JoinResolver().project_document(document, CHANNEL_FIELDS)

        assert projected == {'_id': user_id, 'username': 'alice', 'full_name': 'Alice', 'avatar': 'a.png'}

    def test_missing_document(self):
        assert JoinResolver().project_document(None, OWNER_FIELDS) is None
