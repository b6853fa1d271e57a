"""
Media Storage package
영상/썸네일 바이너리 업로드·삭제 (Cloudinary)
"""

from common.storage.media_storage import MediaAsset, MediaStorage


def get_media_storage() -> MediaStorage:
    from common import extensions

    if extensions.media_storage is None:
        raise RuntimeError("MediaStorage 가 초기화되지 않았습니다.")
    return extensions.media_storage


__all__ = [
    'MediaAsset',
    'MediaStorage',
    'get_media_storage'
]
