from typing import Dict, Iterable, List, Optional

USERS_COLLECTION = 'users'

# 어떤 조인에서도 노출되면 안 되는 사용자 필드
SECRET_USER_FIELDS = frozenset({
    'password',
    'email',
    'refresh_token',
    'watch_history',
})

OWNER_FIELDS = ('username', 'avatar')
COMMENT_OWNER_FIELDS = ('full_name', 'username', 'avatar')
CHANNEL_FIELDS = ('username', 'full_name', 'avatar')


class JoinResolver:
    """
    관련 엔티티(주로 users)를 $lookup 으로 붙이고 허용된 필드만 projection 한다.
    _id 는 항상 포함되고, SECRET_USER_FIELDS 는 요청되더라도 거부한다.
    """

    def __init__(self, from_collection: str = USERS_COLLECTION, forbidden_fields=SECRET_USER_FIELDS):
        self.from_collection = from_collection
        self.forbidden_fields = frozenset(forbidden_fields)

    def projection(self, fields: Iterable[str]) -> Dict[str, int]:
        fields = list(fields)
        leaked = [f for f in fields if f.split('.')[0] in self.forbidden_fields]
        if leaked:
            raise ValueError(f"projection 에 민감한 필드가 포함되었습니다: {leaked}")

        spec = {'_id': 1}
        for field in fields:
            spec[field] = 1
        return spec

    def lookup_one(
        self,
        local_field: str,
        fields: Iterable[str],
        as_field: Optional[str] = None,
        extra_stages: Optional[List[Dict]] = None
    ) -> List[Dict]:
        """local_field 의 id 를 하나의 projection 문서로 치환 (없으면 null)"""
        as_field = as_field or local_field
        pipeline = list(extra_stages or [])
        pipeline.append({'$project': self.projection(fields)})

        return [
            {
                '$lookup': {
                    'from': self.from_collection,
                    'localField': local_field,
                    'foreignField': '_id',
                    'as': as_field,
                    'pipeline': pipeline
                }
            },
            {
                '$addFields': {
                    as_field: {'$first': f'${as_field}'}
                }
            }
        ]

    def lookup_unwound(
        self,
        local_field: str,
        fields: Iterable[str],
        as_field: Optional[str] = None,
        extra_stages: Optional[List[Dict]] = None
    ) -> List[Dict]:
        """대상이 없는 행은 결과에서 제외 (삭제된 사용자 등)"""
        as_field = as_field or local_field
        stages = self.lookup_one(local_field, fields, as_field, extra_stages)[:1]
        stages.append({'$unwind': f'${as_field}'})
        return stages

    def project_document(self, document: Optional[Dict], fields: Iterable[str]) -> Optional[Dict]:
        """이미 메모리에 있는 문서를 같은 규칙으로 축소 (일괄 조회 경로용)"""
        if document is None:
            return None
        spec = self.projection(fields)
        return {key: document[key] for key in spec if key in document}
