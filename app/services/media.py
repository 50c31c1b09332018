"""
Media ingestion and inline encoding.

Uploads are read into memory up to a ceiling and rejected (never truncated)
above it. Stored media is returned to clients as a self-contained
``data:<contentType>;base64,<payload>`` URI. Encoded URIs are cached by
content digest so unchanged media is not re-encoded on every read.
"""

import base64
import hashlib
import logging
import threading
from collections import OrderedDict
from typing import NamedTuple, Optional, Sequence

from fastapi import UploadFile

from app.core.config import settings
from app.core.constants import BusinessLimits, ErrorMessages
from app.core.exception import InvalidArgument, MediaTooLarge

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class MediaPayload(NamedTuple):
    data: bytes
    content_type: str
    digest: str


def digest_of(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _read_capped(upload: UploadFile, max_bytes: int) -> bytes:
    chunks = []
    total = 0
    while True:
        chunk = upload.file.read(CHUNK_SIZE)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise MediaTooLarge(
                details={"max_bytes": max_bytes, "filename": upload.filename},
            )
        chunks.append(chunk)
    return b"".join(chunks)


def ingest_upload(
    upload: Optional[UploadFile],
    *,
    max_bytes: int,
    allowed_prefixes: Sequence[str],
) -> Optional[MediaPayload]:
    """Turn a multipart file into (bytes, content type, digest), or None if no file was sent."""
    if upload is None or not upload.filename:
        return None

    content_type = (upload.content_type or "").lower()
    if not content_type.startswith(tuple(allowed_prefixes)):
        logger.warning(f"Rejected upload '{upload.filename}' with content type '{content_type}'")
        raise InvalidArgument(
            ErrorMessages.UNSUPPORTED_MEDIA,
            details={"content_type": content_type, "allowed": list(allowed_prefixes)},
        )

    data = _read_capped(upload, max_bytes)
    if not data:
        return None

    logger.info(f"Ingested upload '{upload.filename}': {len(data)} bytes, {content_type}")
    return MediaPayload(data=data, content_type=content_type, digest=digest_of(data))


def ingest_post_media(upload: Optional[UploadFile]) -> Optional[MediaPayload]:
    return ingest_upload(
        upload,
        max_bytes=settings.MAX_POST_MEDIA_BYTES,
        allowed_prefixes=BusinessLimits.POST_MEDIA_PREFIXES,
    )


def ingest_profile_picture(upload: Optional[UploadFile]) -> Optional[MediaPayload]:
    return ingest_upload(
        upload,
        max_bytes=settings.MAX_PROFILE_PICTURE_BYTES,
        allowed_prefixes=BusinessLimits.PROFILE_PICTURE_PREFIXES,
    )


def encode_data_uri(data: bytes, content_type: str) -> str:
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{payload}"


class DataUriCache:
    """Bounded LRU of encoded data URIs keyed by (digest, content type).

    Bounded both by entry count and by the total length of the cached URIs.
    A URI longer than the whole byte budget is returned but never cached.
    """

    def __init__(self, max_entries: int, max_bytes: Optional[int] = None):
        self.max_entries = max_entries
        self.max_bytes = max_bytes
        self._entries = OrderedDict()
        self._size = 0
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def _over_budget(self) -> bool:
        if len(self._entries) > self.max_entries:
            return True
        return self.max_bytes is not None and self._size > self.max_bytes

    def get_or_encode(self, data: bytes, content_type: str, digest: Optional[str] = None) -> str:
        key = (digest or digest_of(data), content_type)
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self.hits += 1
                return cached
            self.misses += 1

        encoded = encode_data_uri(data, content_type)
        if self.max_entries <= 0:
            return encoded
        if self.max_bytes is not None and len(encoded) > self.max_bytes:
            logger.debug(f"Data URI of {len(encoded)} chars exceeds cache budget, not cached")
            return encoded

        with self._lock:
            previous = self._entries.pop(key, None)
            if previous is not None:
                self._size -= len(previous)
            self._entries[key] = encoded
            self._size += len(encoded)
            while self._over_budget():
                _, evicted = self._entries.popitem(last=False)
                self._size -= len(evicted)
        return encoded

    @property
    def size(self) -> int:
        """Total length of the cached URIs."""
        return self._size

    def clear(self):
        with self._lock:
            self._entries.clear()
            self._size = 0
            self.hits = 0
            self.misses = 0

    def __len__(self):
        return len(self._entries)


data_uri_cache = DataUriCache(settings.MEDIA_URI_CACHE_SIZE, settings.MEDIA_URI_CACHE_MAX_BYTES)


def media_url(data: Optional[bytes], content_type: Optional[str], digest: Optional[str] = None) -> Optional[str]:
    """Data URI for stored media, or None when no bytes are stored."""
    if not data:
        return None
    return data_uri_cache.get_or_encode(data, content_type or "application/octet-stream", digest)
