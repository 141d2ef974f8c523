from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Protocol

from ..common.datetime_utils import epoch_millis
from ..core.enums import CaptureAction
from ..core.exceptions import UploadFailed, ValidationError

logger = logging.getLogger(__name__)


def selfie_path(employee_id: int, action: CaptureAction, taken_at: datetime) -> str:
    """Object key convention: ``{employee_id}/{checkin|checkout}-{epochMillis}.jpg``."""
    return f"{employee_id}/{action.value}-{epoch_millis(taken_at)}.jpg"


class PhotoStore(Protocol):
    def upload(self, path: str, blob: bytes) -> str:
        """Store the blob and return its public URL. Raises ``UploadFailed``."""

        raise NotImplementedError


class LocalPhotoStore:
    """Writes selfies under a directory served as static files."""

    def __init__(self, root_dir: str | Path, base_url: str):
        self._root = Path(root_dir)
        self._base_url = base_url.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    @property
    def base_url(self) -> str:
        return self._base_url

    def upload(self, path: str, blob: bytes) -> str:
        target = (self._root / path).resolve()
        if self._root.resolve() not in target.parents:
            raise ValidationError("Invalid photo path")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(blob)
        except OSError as e:
            logger.error("Selfie upload to %s failed: %s", target, e)
            raise UploadFailed() from e

        return f"{self._base_url}/{path}"
