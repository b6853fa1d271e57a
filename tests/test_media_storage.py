from unittest.mock import patch

import pytest
from cloudinary.exceptions import Error as CloudinaryError

from common.enum.error_code import APIError
from common.exception.exceptions import BusinessError
from common.storage.media_storage import MediaStorage


@pytest.fixture
def media_storage():
    return MediaStorage(cloud_name='demo', api_key='key', api_secret='secret')


class TestUpload:

    def test_success_removes_local_file(self, media_storage, tmp_path):
        local_file = tmp_path / 'clip.mp4'
        local_file.write_bytes(b'data')
        response = {'secure_url': 'https://cdn/clip.mp4', 'public_id': 'videos/clip', 'duration': 31.2}

        with patch('cloudinary.uploader.upload', return_value=response) as upload:
            asset = media_storage.upload(str(local_file), resource_type='video')

        upload.assert_called_once_with(str(local_file), resource_type='video')
        assert asset.url == 'https://cdn/clip.mp4'
        assert asset.public_id == 'videos/clip'
        assert asset.duration_seconds == 31.2
        assert not local_file.exists()

    def test_failure_still_removes_local_file(self, media_storage, tmp_path):
        local_file = tmp_path / 'thumb.jpg'
        local_file.write_bytes(b'data')

        with patch('cloudinary.uploader.upload', side_effect=CloudinaryError('boom')):
            with pytest.raises(BusinessError) as exc_info:
                media_storage.upload(str(local_file), resource_type='image')

        assert exc_info.value.error_enum is APIError.VIDEO_UPLOAD_FAIL
        assert not local_file.exists()

    def test_missing_path(self, media_storage):
        with pytest.raises(BusinessError) as exc_info:
            media_storage.upload(None)
        assert exc_info.value.error_enum is APIError.VIDEO_FILE_REQUIRED


class TestDelete:

    @pytest.mark.parametrize('result', ['ok', 'not found'])
    def test_accepted_results(self, media_storage, result):
        with patch('cloudinary.uploader.destroy', return_value={'result': result}) as destroy:
            media_storage.delete('videos/clip', 'video')
        destroy.assert_called_once_with('videos/clip', resource_type='video')

    def test_empty_public_id_is_noop(self, media_storage):
        with patch('cloudinary.uploader.destroy') as destroy:
            media_storage.delete(None)
        destroy.assert_not_called()

    def test_unexpected_result(self, media_storage):
        with patch('cloudinary.uploader.destroy', return_value={'result': 'error'}):
            with pytest.raises(BusinessError) as exc_info:
                media_storage.delete('videos/clip', 'video')
        assert exc_info.value.error_enum is APIError.VIDEO_DELETE_FAIL
