"""
Profile image storage backed by a Supabase Storage bucket.

Takes a file that has already been written to local disk and returns a
publicly resolvable URL for it.
"""

import asyncio
import logging
import mimetypes
import uuid
from pathlib import Path

from supabase import Client

from .exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class ProfileImageStorage:
    """Uploads profile images into a public bucket."""

    def __init__(self, db: Client, bucket: str, prefix: str = "profile-images"):
        self._db = db
        self._bucket = bucket
        self._prefix = prefix

    def object_key(self, original_name: str) -> str:
        """Build a collision-free object key that keeps the original extension."""
        suffix = Path(original_name).suffix.lower()
        return f"{self._prefix}/{uuid.uuid4().hex}{suffix}"

    def _put(self, local_path: str, key: str, content_type: str) -> str:
        """Blocking read and upload; runs in a worker thread."""
        data = Path(local_path).read_bytes()
        bucket = self._db.storage.from_(self._bucket)
        bucket.upload(key, data, {"content-type": content_type})
        return bucket.get_public_url(key)

    async def upload(self, local_path: str, original_name: str) -> str:
        """
        Upload a local file and return its public URL.

        Args:
            local_path: Path of the file on local disk
            original_name: Filename as sent by the client

        Returns:
            Public URL of the stored object

        Raises:
            ExternalServiceError: If the file cannot be read or stored
        """
        key = self.object_key(original_name)
        content_type = mimetypes.guess_type(original_name)[0] or "application/octet-stream"

        try:
            url = await asyncio.to_thread(self._put, local_path, key, content_type)
        except Exception as e:
            logger.exception("Profile image upload failed for %s", original_name)
            raise ExternalServiceError(
                "Profile image upload failed",
                service="storage",
                code="UPLOAD_FAILED",
            ) from e

        logger.info("Uploaded profile image to %s/%s", self._bucket, key)
        return url
