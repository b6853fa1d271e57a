import jwt
from flask import current_app
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from common.exception.exceptions import BusinessError
from common.enum.error_code import APIError

#NOTE: 토큰 발급은 인증 서비스 담당. 이 서비스는 액세스 토큰 검증만 한다.


def _signing_key():
    secret_key = current_app.config.get('JWT_SECRET_KEY')
    if not secret_key:
        raise BusinessError(APIError.INTERNAL_SERVER_ERROR, "JWT KEY가 설정되지 않았습니다.")
    return secret_key, current_app.config.get('JWT_ALGORITHM', 'HS256')


def decode_token(encoded_token):
    """서명/만료 검증 후 payload(sub, type, exp ...) 반환"""
    secret_key, algorithm = _signing_key()

    try:
        return jwt.decode(encoded_token, secret_key, algorithms=[algorithm])

    except ExpiredSignatureError:
        raise BusinessError(APIError.AUTH_TOKEN_EXPIRED)

    except InvalidTokenError:
        raise BusinessError(APIError.AUTH_INVALID_TOKEN)
