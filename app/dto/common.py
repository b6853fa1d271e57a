from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from common.utils.id_utils import id_str


def iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass
class UserSummaryDto:
    """조인된 사용자 projection (민감 정보 없음)"""
    user_id: str
    username: str
    full_name: Optional[str] = None
    avatar: Optional[str] = None

    @classmethod
    def from_doc(cls, doc: Optional[Dict]) -> Optional['UserSummaryDto']:
        if not doc:
            return None
        return cls(
            user_id=id_str(doc.get('_id')),
            username=doc.get('username', ''),
            full_name=doc.get('full_name'),
            avatar=doc.get('avatar')
        )

    def to_dict(self):
        return {
            'user_id': self.user_id,
            'username': self.username,
            'full_name': self.full_name,
            'avatar': self.avatar
        }


@dataclass
class EmptyResultDto:
    message: str

    def to_dict(self):
        return {
            'message': self.message
        }
