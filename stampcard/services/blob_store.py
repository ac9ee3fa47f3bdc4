"""
Blob storage for establishment logos.

The service only needs two calls: put bytes under a path and get back a
public URL, and delete by URL. LocalBlobStore keeps files under
UPLOAD_FOLDER and serves them from /uploads/.
"""
import logging
import os

from werkzeug.utils import secure_filename

from ..utils.exceptions import TransientInfraError, ValidationError

logger = logging.getLogger(__name__)

URL_PREFIX = '/uploads'


class LocalBlobStore:
    """Filesystem-backed blob store."""

    def __init__(self, root: str, url_prefix: str = URL_PREFIX):
        self.root = os.path.abspath(root)
        self.url_prefix = url_prefix.rstrip('/')

    def put(self, path: str, data: bytes, content_type: str = None) -> str:
        """
        Store data under a relative path and return its public URL.

        Raises:
            TransientInfraError: the file could not be written
        """
        relative = self._safe_relative(path)
        full_path = os.path.join(self.root, relative)
        try:
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
            with open(full_path, 'wb') as f:
                f.write(data)
        except OSError as e:
            logger.error(f'Blob write failed path={relative}: {e}')
            raise TransientInfraError('Failed to store file', original_error=e)

        logger.debug(f'Stored blob path={relative} type={content_type} size={len(data)}')
        return f'{self.url_prefix}/{relative}'

    def delete(self, url: str) -> None:
        """
        Delete a blob by URL. Missing blobs are ignored.

        Raises:
            TransientInfraError: the file exists but could not be removed
        """
        if not url or not url.startswith(self.url_prefix + '/'):
            return
        relative = self._safe_relative(url[len(self.url_prefix) + 1:])
        full_path = os.path.join(self.root, relative)
        try:
            os.remove(full_path)
        except FileNotFoundError:
            return
        except OSError as e:
            logger.error(f'Blob delete failed path={relative}: {e}')
            raise TransientInfraError('Failed to delete file', original_error=e)

    def path_for(self, relative: str) -> str:
        """Absolute filesystem path of a stored blob."""
        return os.path.join(self.root, self._safe_relative(relative))

    @staticmethod
    def _safe_relative(path: str) -> str:
        parts = [secure_filename(part) for part in path.split('/')]
        parts = [part for part in parts if part]
        if not parts:
            raise ValidationError('Invalid file path')
        return '/'.join(parts)
