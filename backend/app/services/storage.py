"""
Avatar image storage on the local filesystem.

Files are written under MEDIA_DIR with a random name and served back as
static files from MEDIA_URL.
"""

import logging
import os
import uuid
from pathlib import Path

from app.core.config import settings
from app.core.errors import BadRequestError

logger = logging.getLogger("storage")

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


def _human_size(num_bytes: int) -> str:
    if num_bytes >= 1024 * 1024:
        return f"{num_bytes // (1024 * 1024)}MB"
    return f"{num_bytes // 1024}KB"


class LocalImageStorage:
    def __init__(
        self,
        media_dir: str = settings.MEDIA_DIR,
        media_url: str = settings.MEDIA_URL,
        max_bytes: int = settings.MAX_AVATAR_BYTES,
    ):
        self.media_dir = Path(media_dir)
        self.media_url = media_url.rstrip("/")
        self.max_bytes = max_bytes

    def upload_image(self, filename: str, content: bytes, folder: str = "avatars") -> str:
        """
        Store an image and return its public URL.

        Raises:
            BadRequestError: empty file, unsupported extension or too large
        """
        extension = os.path.splitext(filename or "")[1].lower()
        if extension not in ALLOWED_IMAGE_EXTENSIONS:
            raise BadRequestError(
                f"Unsupported image type. Allowed: {', '.join(sorted(ALLOWED_IMAGE_EXTENSIONS))}"
            )
        if not content:
            raise BadRequestError("Uploaded file is empty")
        if len(content) > self.max_bytes:
            raise BadRequestError(f"Image too large. Maximum size is {_human_size(self.max_bytes)}")

        target_dir = self.media_dir / folder
        target_dir.mkdir(parents=True, exist_ok=True)
        stored_name = f"{uuid.uuid4().hex}{extension}"
        (target_dir / stored_name).write_bytes(content)

        logger.info("Stored image %s (%d bytes)", stored_name, len(content))
        return f"{self.media_url}/{folder}/{stored_name}"


def get_storage() -> LocalImageStorage:
    return LocalImageStorage()
