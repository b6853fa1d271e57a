"""
Utils package
유틸리티 함수들을 모아둔 패키지

- jwt_utils: JWT 토큰 검증 (Identity)
- id_utils: ObjectId 변환/검증
- logging_utils: 로거 설정
"""

from common.utils.jwt_utils import decode_token
from common.utils.id_utils import to_object_id, to_object_ids, id_str

__all__ = [
    'decode_token',
    'to_object_id',
    'to_object_ids',
    'id_str'
]
