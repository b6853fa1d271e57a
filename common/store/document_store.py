from typing import Any, Dict, List, Optional, Sequence

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.decorator.db_decorators import store_operation
from common.exception.exceptions import StoreUnavailableError
from common.utils.logging_utils import get_logger

logger = get_logger('document_store')

DEFAULT_TIMEOUT_SECONDS = 5.0


class DocumentStore:
    """
    MongoDB Database 래퍼

    모든 호출은 store_operation 으로 감싸져 timeout_seconds 안에 끝나거나
    StoreTimeoutError / StoreUnavailableError 로 실패한다.
    """

    def __init__(self, database, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS):
        self.database = database
        self.timeout_seconds = timeout_seconds

    def collection(self, name: str):
        return self.database[name]

    @store_operation
    def find(
        self,
        name: str,
        filter: Optional[Dict] = None,
        projection: Optional[Dict] = None,
        sort: Optional[List] = None,
        skip: int = 0,
        limit: int = 0
    ) -> List[Dict]:
        cursor = self.collection(name).find(filter or {}, projection)
        if sort:
            cursor = cursor.sort(sort)
        if skip:
            cursor = cursor.skip(skip)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    @store_operation
    def find_one(self, name: str, filter: Dict, projection: Optional[Dict] = None) -> Optional[Dict]:
        return self.collection(name).find_one(filter, projection)

    @store_operation
    def exists(self, name: str, filter: Dict) -> bool:
        return self.collection(name).find_one(filter, {'_id': 1}) is not None

    @store_operation
    def aggregate(self, name: str, stages: Sequence[Dict]) -> List[Dict]:
        return list(self.collection(name).aggregate(list(stages)))

    @store_operation
    def count(self, name: str, filter: Optional[Dict] = None) -> int:
        return self.collection(name).count_documents(filter or {})

    @store_operation
    def insert_one(self, name: str, document: Dict) -> Any:
        return self.collection(name).insert_one(document).inserted_id

    @store_operation
    def update_one(self, name: str, filter: Dict, update: Any) -> int:
        return self.collection(name).update_one(filter, update).matched_count

    @store_operation
    def find_one_and_update(
        self,
        name: str,
        filter: Dict,
        update: Any,
        projection: Optional[Dict] = None
    ) -> Optional[Dict]:
        return self.collection(name).find_one_and_update(
            filter,
            update,
            projection=projection,
            return_document=ReturnDocument.AFTER
        )

    @store_operation
    def delete_one(self, name: str, filter: Dict) -> int:
        return self.collection(name).delete_one(filter).deleted_count

    @store_operation
    def delete_many(self, name: str, filter: Dict) -> int:
        return self.collection(name).delete_many(filter).deleted_count

    @store_operation
    def insert_or_delete(self, name: str, key: Dict, extra_fields: Optional[Dict] = None) -> bool:
        """
        유니크 인덱스 기반 토글
        - 삽입 성공 → True (새로 활성화)
        - DuplicateKeyError → 이미 존재하는 행을 삭제하고 False (비활성화)

        존재 여부를 먼저 조회하지 않는다. 동시에 들어온 토글이 먼저 삽입한 경우에도
        유니크 인덱스가 충돌을 내므로 같은 키의 행은 항상 0개 또는 1개다.
        """
        collection = self.collection(name)
        try:
            collection.insert_one({**key, **(extra_fields or {})})
            return True
        except DuplicateKeyError:
            #NOTE: 이미 활성 상태 → 해제. 동시 요청이 먼저 지웠다면 삭제 결과가 None 이어도 최종 상태는 비활성
            removed = collection.find_one_and_delete(key, projection={'_id': 1})
            if removed is None:
                logger.debug(f"{name} 토글 충돌 후 이미 삭제된 행: {key}")
            return False

    @store_operation
    def create_index(self, collection_name: str, keys, **kwargs) -> str:
        #NOTE: kwargs(name, unique 등)는 pymongo 로 그대로 전달
        return self.collection(collection_name).create_index(keys, **kwargs)


def get_document_store() -> DocumentStore:
    from common import extensions

    if extensions.document_store is None:
        raise StoreUnavailableError()
    return extensions.document_store
