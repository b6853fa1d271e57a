from functools import wraps
from flask import request, g

from common import extensions
from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.jwt_utils import decode_token

BLACKLIST_KEY_PREFIX = 'engagement:blacklist:'


def _authenticate(auth_header):
    if not auth_header.startswith("Bearer "):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    token = auth_header.split(" ")[1]

    redis_client = extensions.redis_client
    if redis_client and redis_client.exists(f"{BLACKLIST_KEY_PREFIX}{token}"):
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    payload = decode_token(token)

    if payload.get('type') != 'access':
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)

    g.user_id = payload['sub']
    g.is_guest = False


def login_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            raise BusinessError(APIError.AUTH_INVALID_TOKEN)

        _authenticate(auth_header)
        return f(*args, **kwargs)
    return decorated_function


def login_optional(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get('Authorization')

        if not auth_header:
            g.user_id = None
            g.is_guest = True
            return f(*args, **kwargs)

        _authenticate(auth_header)
        return f(*args, **kwargs)
    return decorated_function


def current_user_id():
    """Identity 협력자: 인증 데코레이터가 설정한 요청 사용자 ID (비로그인 시 None)"""
    return g.get('user_id')
