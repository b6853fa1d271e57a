"""
Engagement Application
Flask 기반 영상 플랫폼 참여(좋아요/구독/댓글/피드) API
"""

from flask import Flask
from flask_cors import CORS
from pymongo import MongoClient
from pymongo.errors import PyMongoError
import redis
import logging
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.redis import RedisIntegration
from common.extensions import api
import common.extensions as extensions
from common.utils.logging_utils import setup_logger


def create_app(config_name='default'):
    """
    Application Factory Pattern
    """
    app = Flask(__name__)

    from common.config.config import config
    config_class = config.get(config_name, config['default'])
    app.config.from_object(config_class)

    app.json.ensure_ascii = False

    if app.config.get('SENTRY_DSN'):
        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[
                FlaskIntegration(),
                RedisIntegration(),
            ],
            environment=app.config.get('SENTRY_ENVIRONMENT', 'development'),
            traces_sample_rate=app.config.get('SENTRY_TRACES_SAMPLE_RATE', 1.0),
            send_default_pii=False,
            attach_stacktrace=True,
        )

    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'))
    logger = setup_logger(app, log_level, app.config.get('LOG_DIR'))

    app.config['API_TITLE'] = 'Engagement API'
    app.config['API_VERSION'] = 'v1'
    app.config['OPENAPI_VERSION'] = '3.0.3'
    app.config['OPENAPI_URL_PREFIX'] = '/'
    app.config['OPENAPI_SWAGGER_UI_PATH'] = '/swagger'
    app.config['OPENAPI_SWAGGER_UI_URL'] = 'https://cdn.jsdelivr.net/npm/swagger-ui-dist/'
    app.config['OPENAPI_REDOC_PATH'] = '/redoc'
    app.config['OPENAPI_REDOC_URL'] = 'https://cdn.jsdelivr.net/npm/redoc@latest/bundles/redoc.standalone.js'

    # JWT Bearer 토큰 인증을 위한 보안 스킴 설정
    app.config['API_SPEC_OPTIONS'] = {
        'components': {
            'securitySchemes': {
                'BearerAuth': {
                    'type': 'http',
                    'scheme': 'bearer',
                    'bearerFormat': 'JWT',
                    'description': 'JWT 액세스 토큰을 입력하세요 (Bearer 접두어 없이)'
                }
            }
        }
    }

    CORS(app,
         supports_credentials=True,
         origins=app.config.get('CORS_ORIGINS', ["http://localhost:3000", "http://localhost:5173"]),
         allow_headers=["Content-Type", "Authorization", "Accept", "X-Requested-With"],
         expose_headers=["Authorization", "Content-Type"],
         methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         max_age=3600)

    api.init_app(app)

    #NOTE: 테스트에서는 conftest 가 mongomock 저장소를 주입
    if not app.config.get('TESTING'):
        _init_mongo(app, logger)
        _init_redis(app, logger)
        _init_media_storage(app)

    from app.routes.base import base_blueprint
    from app.routes.video import video_blueprint
    from app.routes.comment import comment_blueprint
    from app.routes.like import like_blueprint
    from app.routes.subscription import subscription_blueprint
    from app.routes.dashboard import dashboard_blueprint

    api.register_blueprint(base_blueprint)
    api.register_blueprint(video_blueprint)
    api.register_blueprint(comment_blueprint)
    api.register_blueprint(like_blueprint)
    api.register_blueprint(subscription_blueprint)
    api.register_blueprint(dashboard_blueprint)

    from common.exception.error_handler import register_error_handlers
    register_error_handlers(app)
    @app.route('/health')
    def health_check():
        return {
            'status': 'healthy',
            'service': 'engagement'
        }, 200

    return app


def _init_mongo(app, logger):
    from common.store.document_store import DocumentStore
    from app.models.mongodb import ensure_indexes

    mongo_host = app.config.get('MONGO_HOST', 'localhost')
    mongo_port = app.config.get('MONGO_PORT', 27017)
    mongo_username = app.config.get('MONGO_USERNAME')
    mongo_password = app.config.get('MONGO_PASSWORD')

    if mongo_username and mongo_password:
        from urllib.parse import quote_plus
        mongo_uri = f"mongodb://{quote_plus(mongo_username)}:{quote_plus(mongo_password)}@{mongo_host}:{mongo_port}/"
    else:
        mongo_uri = f"mongodb://{mongo_host}:{mongo_port}/"

    logger.info(f"MongoDB 연결 시도: {mongo_host}:{mongo_port}")

    try:
        mongo_connection = MongoClient(
            mongo_uri,
            serverSelectionTimeoutMS=app.config['MONGO_CONNECT_TIMEOUT_MS'],
            connectTimeoutMS=app.config['MONGO_CONNECT_TIMEOUT_MS'],
            socketTimeoutMS=app.config['MONGO_SOCKET_TIMEOUT_MS']
        )
        mongo_connection.admin.command('ping')
        logger.info(f"MongoDB 연결 성공: {mongo_host}:{mongo_port}")

    except PyMongoError as e:
        logger.error(f"MongoDB 연결 실패: {e}")
        logger.error(f"MongoDB URI (마스킹): mongodb://{mongo_host}:{mongo_port}/")
        raise

    extensions.mongo_client = mongo_connection
    extensions.mongo_db = mongo_connection[app.config['MONGO_DB_NAME']]
    extensions.document_store = DocumentStore(
        extensions.mongo_db,
        timeout_seconds=app.config['STORE_TIMEOUT_SECONDS']
    )

    #NOTE: 토글 원자성은 유니크 인덱스에 의존하므로 기동 시 반드시 생성
    ensure_indexes(extensions.document_store)


def _init_redis(app, logger):
    try:
        if app.config.get('REDIS_URL'):
            logger.info("Redis 연결 시도: REDIS_URL 사용")
            extensions.redis_client = redis.from_url(
                app.config['REDIS_URL'],
                decode_responses=True,
                socket_connect_timeout=5
            )
        else:
            redis_host = app.config.get('REDIS_HOST', 'localhost')
            redis_port = app.config.get('REDIS_PORT', 6379)
            redis_db = app.config.get('REDIS_DB', 0)
            redis_password = app.config.get('REDIS_PASSWORD') or None

            logger.info(f"Redis 연결 시도: {redis_host}:{redis_port} (db={redis_db}, 인증={'설정됨' if redis_password else '없음'})")

            extensions.redis_client = redis.Redis(
                host=redis_host,
                port=redis_port,
                db=redis_db,
                password=redis_password,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5
            )

        extensions.redis_client.ping()
        logger.info("Redis 연결 성공")

    except redis.AuthenticationError as e:
        logger.warning(f"Redis 인증 실패: {e}")
        logger.warning("Redis 설정에서 REDIS_PASSWORD를 확인하세요")
        extensions.redis_client = None
    except redis.RedisError as e:
        logger.warning(f"Redis 연결 실패: {e}")
        logger.warning("토큰 블랙리스트 검사가 비활성화됩니다")
        extensions.redis_client = None


def _init_media_storage(app):
    from common.storage.media_storage import MediaStorage

    extensions.media_storage = MediaStorage(
        cloud_name=app.config.get('CLOUDINARY_CLOUD_NAME'),
        api_key=app.config.get('CLOUDINARY_API_KEY'),
        api_secret=app.config.get('CLOUDINARY_API_SECRET')
    )
