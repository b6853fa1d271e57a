from functools import wraps

import pymongo
from pymongo.errors import (
    ConnectionFailure,
    DuplicateKeyError,
    PyMongoError,
    ServerSelectionTimeoutError,
)

from common.exception.exceptions import StoreTimeoutError, StoreUnavailableError
from common.utils.logging_utils import get_logger

logger = get_logger('db_decorators')


def store_operation(func):
    """
    DocumentStore 메서드용 데코레이터
    - pymongo.timeout 으로 호출 전체에 상한 시간을 적용
    - 연결 불가/시간 초과를 StoreUnavailableError/StoreTimeoutError 로 변환 (재시도 없음)
    - DuplicateKeyError 는 호출자가 해석하도록 그대로 전파
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            with pymongo.timeout(self.timeout_seconds):
                return func(self, *args, **kwargs)

        except DuplicateKeyError:
            raise

        except ServerSelectionTimeoutError as e:
            logger.error(f"MongoDB 서버 선택 실패 ({func.__name__}): {e}")
            raise StoreUnavailableError() from e

        except PyMongoError as e:
            if e.timeout:
                logger.error(f"MongoDB 호출 시간 초과 ({func.__name__}, {self.timeout_seconds}s): {e}")
                raise StoreTimeoutError() from e

            if isinstance(e, ConnectionFailure):
                logger.error(f"MongoDB 연결 실패 ({func.__name__}): {e}")
                raise StoreUnavailableError() from e

            logger.error(f"MongoDB 작업 실패 ({func.__name__}): {e}")
            raise

    return wrapper
