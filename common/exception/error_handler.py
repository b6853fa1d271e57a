from flask import jsonify
from pymongo.errors import DuplicateKeyError, PyMongoError
from werkzeug.exceptions import HTTPException

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError, StoreUnavailableError
from common.utils.logging_utils import get_logger

logger = get_logger('error_handler')


def register_error_handlers(app):
    @app.errorhandler(BusinessError)
    def handle_business_error(e):
        if isinstance(e, StoreUnavailableError):
            logger.error(f"저장소 오류 응답: {e.error_enum.code} {e.message}")

        return jsonify({
            "result": "fail",
            "message": e.message,
            "code": e.error_enum.code,
            "data": None
        }), e.error_enum.status

    @app.errorhandler(DuplicateKeyError)
    def handle_duplicate_key_error(e):
        return jsonify({
            "result": "fail",
            "message": APIError.DUPLICATE_RELATION.message,
            "code": APIError.DUPLICATE_RELATION.code,
            "data": None
        }), APIError.DUPLICATE_RELATION.status

    @app.errorhandler(PyMongoError)
    def handle_db_error(e):
        logger.error(f"MongoDB 작업 실패: {e}")
        return jsonify({
            "result": "fail",
            "message": "데이터베이스 작업 중 오류가 발생했습니다.",
            "code": APIError.DB_ERROR.code,
            "data": None
        }), APIError.DB_ERROR.status

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        #NOTE: 요청 파싱 실패(422), 없는 경로(404) 등은 상태 코드 유지
        data = getattr(e, "data", None) or {}
        return jsonify({
            "result": "fail",
            "message": e.description,
            "code": APIError.INVALID_INPUT_VALUE.code if e.code in (400, 422) else str(e.code),
            "data": data.get("messages")
        }), e.code

    @app.errorhandler(Exception)
    def handle_internal_error(e):
        logger.exception(f"처리되지 않은 예외: {e}")
        return jsonify({
            "result": "fail",
            "message": "서버 내부 오류가 발생했습니다.",
            "code": APIError.INTERNAL_SERVER_ERROR.code,
            "data": None
        }), 500
