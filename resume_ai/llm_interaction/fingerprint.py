from __future__ import annotations

import base64
import hashlib
import logging
import zlib

logger = logging.getLogger(__name__)


def _sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def hash_key(text: str) -> str:
    """
    Stable cache key for `text`: SHA-256, URL-safe base64 without padding.

    If SHA-256 cannot be used (restricted OpenSSL builds), falls back to a
    CRC32 hex digest prefixed with "crc32-". That key is far weaker, so the
    fallback is logged every time.
    """
    data = text.encode("utf-8")
    try:
        digest = _sha256(data)
    except (ValueError, AttributeError) as exc:
        logger.warning("sha256 unavailable (%s); using weaker crc32 cache key", exc)
        return "crc32-%08x" % zlib.crc32(data)
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


__all__ = ["hash_key"]
