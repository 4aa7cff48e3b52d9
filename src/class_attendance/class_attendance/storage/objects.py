"""Blob storage for student photos.

The core only keeps an opaque object path (``/objects/...``) on the student;
this module issues upload locations, turns uploaded URLs into those paths and
opens stored objects for download.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import Protocol
from urllib.parse import urlparse

from werkzeug.security import safe_join

from ..common.validators import FieldViolation
from ..core.exceptions import ObjectNotFoundError, ValidationError

logger = logging.getLogger(__name__)

OBJECT_PREFIX = "/objects/"
UPLOAD_DIR = "uploads"


class ObjectStorage(Protocol):
    def create_upload_url(self) -> str:
        raise NotImplementedError

    def save_upload(self, object_id: str, data: bytes) -> str:
        """Store bytes under uploads/<object_id> and return its object path."""

        raise NotImplementedError

    def normalize_object_path(self, raw_url: str) -> str:
        raise NotImplementedError

    def open_object(self, object_path: str) -> Path:
        """Resolve an object path to a readable file or raise ObjectNotFoundError."""

        raise NotImplementedError


class LocalObjectStorage(ObjectStorage):
    """Filesystem-backed storage; upload URLs point back at this app."""

    def __init__(self, root: str | Path, *, public_base_url: str = ""):
        self._root = Path(root).resolve()
        self._public_base_url = public_base_url.rstrip("/")

    @staticmethod
    def _check_object_id(object_id: str) -> str:
        try:
            return str(uuid.UUID(object_id))
        except (TypeError, ValueError):
            raise ValidationError([FieldViolation(path=("objectId",), message="Invalid object id")])

    def create_upload_url(self) -> str:
        return f"{self._public_base_url}{OBJECT_PREFIX}{UPLOAD_DIR}/{uuid.uuid4()}"

    def save_upload(self, object_id: str, data: bytes) -> str:
        object_id = self._check_object_id(object_id)
        target = self._root / UPLOAD_DIR / object_id
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
        logger.info("Stored object %s (%d bytes)", object_id, len(data))
        return f"{OBJECT_PREFIX}{UPLOAD_DIR}/{object_id}"

    def normalize_object_path(self, raw_url: str) -> str:
        if raw_url.startswith(OBJECT_PREFIX):
            return raw_url
        if self._public_base_url and raw_url.startswith(self._public_base_url + OBJECT_PREFIX):
            return raw_url[len(self._public_base_url):]
        if not self._public_base_url:
            path = urlparse(raw_url).path
            if path.startswith(OBJECT_PREFIX):
                return path
        # Not one of ours: keep the URL as given.
        return raw_url

    def open_object(self, object_path: str) -> Path:
        if not object_path.startswith(OBJECT_PREFIX):
            raise ObjectNotFoundError("Object not found")

        relative = object_path[len(OBJECT_PREFIX):]
        joined = safe_join(str(self._root), relative)
        if joined is None or not Path(joined).is_file():
            raise ObjectNotFoundError("Object not found")
        return Path(joined)
