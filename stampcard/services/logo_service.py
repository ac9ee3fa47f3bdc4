"""
Logo Service

Validates logo uploads and swaps the stored blob for an establishment.
"""
import logging
import os
import uuid

from ..extensions import db
from ..utils.exceptions import ValidationError, TransientInfraError
from .establishment_service import EstablishmentService, EstablishmentUpdate

logger = logging.getLogger(__name__)

MAX_LOGO_BYTES = 250 * 1024


class LogoService:
    """Upload and remove establishment logos."""

    def __init__(self, blob_store, session=None, max_bytes: int = MAX_LOGO_BYTES):
        self.blob_store = blob_store
        self.session = session if session is not None else db.session
        self.max_bytes = max_bytes
        self.establishments = EstablishmentService(self.session)

    def upload_logo(self, establishment_id: str, filename: str, content_type: str, data: bytes) -> str:
        """
        Replace the establishment logo and return the new URL.

        Raises:
            EstablishmentNotFoundError: establishment does not exist
            ValidationError: file too large or not an image
            TransientInfraError: blob store failure
        """
        establishment = self.establishments.get_establishment(establishment_id)

        if len(data) > self.max_bytes:
            raise ValidationError(
                f'File too large. Maximum size is {self.max_bytes // 1024}KB.', 'file'
            )
        if not content_type or not content_type.startswith('image/'):
            raise ValidationError('File must be an image', 'file')

        old_url = establishment.logo_url

        ext = os.path.splitext(filename or '')[1].lower() or '.img'
        path = f'logos/{establishment_id}/{uuid.uuid4().hex[:12]}{ext}'
        url = self.blob_store.put(path, data, content_type)

        try:
            self.establishments.update_establishment(
                establishment_id, EstablishmentUpdate(logo_url=url)
            )
        except Exception:
            # The row still points at the old logo, so drop the orphaned new blob
            self._delete_quietly(url)
            raise

        # Old blob goes only once the new URL is committed
        if old_url:
            self._delete_quietly(old_url)
        logger.info(f'Logo uploaded establishment={establishment_id} size={len(data)}')
        return url

    def delete_logo(self, establishment_id: str) -> None:
        """Remove the establishment logo, if any."""
        establishment = self.establishments.get_establishment(establishment_id)
        old_url = establishment.logo_url
        self.establishments.update_establishment(
            establishment_id, EstablishmentUpdate(logo_url=None)
        )
        if old_url:
            self._delete_quietly(old_url)

    def _delete_quietly(self, url: str) -> None:
        # A stale blob must not block replacing or clearing the logo
        try:
            self.blob_store.delete(url)
        except TransientInfraError as e:
            logger.warning(f'Could not delete old logo {url}: {e.message}')
