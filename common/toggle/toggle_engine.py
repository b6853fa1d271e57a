from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

from bson import ObjectId

from common.store.document_store import DocumentStore
from common.utils.logging_utils import get_logger

logger = get_logger('toggle_engine')


class RelationState(str, Enum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'


@dataclass(frozen=True)
class RelationKey:
    actor_id: ObjectId
    target_id: ObjectId
    target_kind: str


@dataclass(frozen=True)
class RelationSpec:
    """
    토글 대상 관계 정의
    - collection: 관계 행이 저장되는 컬렉션 (유니크 인덱스 필수)
    - actor_field: 행위자 필드 (liked_by, subscriber)
    - target_fields: target_kind → 대상 필드명
    """
    collection: str
    actor_field: str
    target_fields: Dict[str, str]

    def key_document(self, key: RelationKey) -> Dict:
        target_field = self.target_fields.get(key.target_kind)
        if target_field is None:
            raise ValueError(f"{self.collection} 에 정의되지 않은 대상 종류입니다: {key.target_kind}")
        return {
            self.actor_field: key.actor_id,
            target_field: key.target_id
        }


@dataclass(frozen=True)
class ToggleResult:
    target_id: ObjectId
    state: RelationState

    @property
    def active(self) -> bool:
        return self.state is RelationState.ACTIVE


class ToggleEngine:
    """
    (actor, target) 이진 관계 토글

    존재 확인 후 삽입/삭제하는 두 단계 호출 대신 DocumentStore.insert_or_delete 한 번으로
    처리한다. 같은 키에 대한 동시 토글에서도 유니크 인덱스가 행 수를 0 또는 1 로 제한한다.
    """

    def __init__(self, store: DocumentStore, spec: RelationSpec, extra_fields: Optional[Callable[[], Dict]] = None):
        self.store = store
        self.spec = spec
        self.extra_fields = extra_fields

    def toggle(self, key: RelationKey) -> ToggleResult:
        document = self.spec.key_document(key)
        #NOTE: created_at 같은 부가 필드는 유니크 키에 포함되지 않음
        extra = self.extra_fields() if self.extra_fields else None
        inserted = self.store.insert_or_delete(self.spec.collection, document, extra_fields=extra)

        state = RelationState.ACTIVE if inserted else RelationState.INACTIVE
        logger.debug(f"{self.spec.collection} 토글: {document} → {state.value}")
        return ToggleResult(target_id=key.target_id, state=state)

    def is_active(self, key: RelationKey) -> bool:
        return self.store.exists(self.spec.collection, self.spec.key_document(key))
