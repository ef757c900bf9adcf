"""Disk storage for uploaded profile pictures."""

from __future__ import annotations

import logging
import shutil
import time
from pathlib import Path

from fastapi import UploadFile

from pulse_feed.core.errors import InternalError, ValidationError
from pulse_feed.core.settings import settings

logger = logging.getLogger(__name__)

MAX_NAME_ATTEMPTS = 100


class AvatarStorage:
    """Writes uploads into ``directory`` and maps them to public URLs."""

    def __init__(self, directory: str | Path, url_prefix: str) -> None:
        self.directory = Path(directory)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, user_id: int, upload: UploadFile) -> str:
        """Persist ``upload`` for ``user_id`` and return its public URL.

        The filename is ``<user_id>-<epoch_ms><ext>``. Files are created
        exclusively; when that name is taken the millisecond stamp is bumped,
        so an earlier upload is never overwritten.

        Raises:
            ValidationError: If the upload is not an image.
            InternalError: If the file cannot be written.
        """
        content_type = upload.content_type or ""
        if not content_type.startswith("image/"):
            raise ValidationError("Only image files are allowed")

        suffix = Path(upload.filename or "").suffix.lower()
        stamp = int(time.time() * 1000)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            upload.file.seek(0)
            for attempt in range(MAX_NAME_ATTEMPTS):
                target = self.directory / f"{user_id}-{stamp + attempt}{suffix}"
                try:
                    with target.open("xb") as out:
                        shutil.copyfileobj(upload.file, out)
                except FileExistsError:
                    continue
                break
            else:
                raise InternalError("Could not pick a free file name for the upload")
        except OSError as exc:
            logger.error("Failed to store profile picture for user %d: %s", user_id, exc)
            raise InternalError("Could not store uploaded file") from exc

        logger.info("Stored profile picture for user %d at %s", user_id, target)
        return f"{self.url_prefix}/{target.name}"

    def discard(self, url: str) -> None:
        """Remove a file previously returned by :meth:`save`, if it is still there."""
        target = self.directory / url.rsplit("/", 1)[-1]
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove profile picture %s: %s", target, exc)


def get_avatar_storage() -> AvatarStorage:
    """Return avatar storage configured from settings."""
    return AvatarStorage(settings.upload_dir, settings.upload_url_prefix)
