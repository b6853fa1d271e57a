import os
from dataclasses import dataclass
from typing import Optional

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.utils.logging_utils import get_logger

logger = get_logger('media_storage')


@dataclass
class MediaAsset:
    url: str
    public_id: str
    duration_seconds: float = 0.0


class MediaStorage:
    """
    Cloudinary 기반 미디어 저장소
    로컬에 임시 저장된 파일을 업로드하고, 업로드가 끝나면(성공/실패 무관) 로컬 파일을 지운다.
    """

    def __init__(self, cloud_name=None, api_key=None, api_secret=None):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True
        )

    def upload(self, local_path: Optional[str], resource_type: str = 'auto') -> MediaAsset:
        if not local_path:
            raise BusinessError(APIError.VIDEO_FILE_REQUIRED)

        try:
            response = cloudinary.uploader.upload(local_path, resource_type=resource_type)
        except CloudinaryError as e:
            logger.error(f"미디어 업로드 실패 ({local_path}): {e}")
            raise BusinessError(APIError.VIDEO_UPLOAD_FAIL) from e
        finally:
            _remove_local_file(local_path)

        logger.info(f"미디어 업로드 성공: {response.get('public_id')}")

        return MediaAsset(
            url=response['secure_url'],
            public_id=response['public_id'],
            duration_seconds=float(response.get('duration') or 0.0)
        )

    def delete(self, public_id: Optional[str], kind: str = 'image'):
        if not public_id:
            return

        try:
            result = cloudinary.uploader.destroy(public_id, resource_type=kind)
        except CloudinaryError as e:
            logger.error(f"미디어 삭제 실패 ({kind}:{public_id}): {e}")
            raise BusinessError(APIError.VIDEO_DELETE_FAIL) from e

        #NOTE: 이미 없는 파일(not found)은 삭제된 것으로 간주
        if result.get('result') not in ('ok', 'not found'):
            logger.error(f"미디어 삭제 응답 이상 ({kind}:{public_id}): {result}")
            raise BusinessError(APIError.VIDEO_DELETE_FAIL)


def _remove_local_file(local_path: str):
    try:
        os.remove(local_path)
    except FileNotFoundError:
        pass
