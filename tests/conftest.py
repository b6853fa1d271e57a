"""
Pytest 공용 fixture
- mongomock 기반 DocumentStore (테스트마다 새 DB)
- testing 설정의 Flask 앱 / 클라이언트
- 사용자·영상 시드 헬퍼, 액세스 토큰 헬퍼
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import jwt
import mongomock
import pytest
from bson import ObjectId

from app import create_app
from common import extensions
from common.storage.media_storage import MediaStorage
from common.store.document_store import DocumentStore
from app.models.mongodb import ensure_indexes


@pytest.fixture(scope="session")
def app():
    #NOTE: flask-smorest Api 가 모듈 전역이므로 앱은 세션당 한 번만 생성
    return create_app('testing')


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def store(app_ctx):
    """
    빈 mongomock DB 를 감싼 DocumentStore
    토글이 의존하는 유니크 인덱스는 실제 앱과 같은 정의로 생성한다.
    """
    database = mongomock.MongoClient()['engagement_test']
    document_store = DocumentStore(database, timeout_seconds=2.0)

    ensure_indexes(document_store)

    extensions.document_store = document_store
    yield document_store
    extensions.document_store = None


@pytest.fixture
def media():
    media_storage = MagicMock(spec=MediaStorage)
    extensions.media_storage = media_storage
    yield media_storage
    extensions.media_storage = None


@pytest.fixture
def client(app, store):
    return app.test_client()


@pytest.fixture
def upload_folder(app, tmp_path, monkeypatch):
    monkeypatch.setitem(app.config, 'UPLOAD_FOLDER', str(tmp_path))
    return tmp_path


@pytest.fixture
def make_user(store):
    def _make_user(username, **fields):
        doc = {
            '_id': ObjectId(),
            'username': username,
            'full_name': fields.pop('full_name', username.title()),
            'avatar': fields.pop('avatar', f'https://cdn.example.com/{username}.png'),
            'email': f'{username}@example.com',
            'password': 'hashed-password',
            'refresh_token': 'refresh-token',
            'watch_history': [],
            'created_at': datetime.now(timezone.utc),
        }
        doc.update(fields)
        store.insert_one('users', doc)
        return doc['_id']
    return _make_user


@pytest.fixture
def make_video(store):
    base_time = datetime(2024, 1, 1)

    def _make_video(owner, title='video', offset_minutes=0, **fields):
        created_at = base_time + timedelta(minutes=offset_minutes)
        doc = {
            '_id': ObjectId(),
            'owner': owner,
            'title': title,
            'description': f'{title} description',
            'video_file': f'https://cdn.example.com/{title}.mp4',
            'thumbnail': f'https://cdn.example.com/{title}.jpg',
            'video_public_id': f'videos/{title}',
            'thumbnail_public_id': f'thumbnails/{title}',
            'duration': 60.0,
            'views': 0,
            'is_published': True,
            'created_at': created_at,
            'updated_at': created_at,
        }
        doc.update(fields)
        store.insert_one('videos', doc)
        return doc['_id']
    return _make_video


@pytest.fixture
def auth_header(app):
    """인증 서비스가 발급하는 것과 같은 형태의 액세스 토큰"""
    def _auth_header(user_id, token_type='access'):
        now = datetime.now(timezone.utc)
        payload = {
            'sub': str(user_id),
            'iat': now,
            'exp': now + timedelta(hours=1),
            'type': token_type
        }
        token = jwt.encode(payload, app.config['JWT_SECRET_KEY'], algorithm=app.config['JWT_ALGORITHM'])
        return {'Authorization': f'Bearer {token}'}
    return _auth_header
