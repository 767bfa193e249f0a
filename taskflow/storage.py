"""Durable storage for uploaded files on the local filesystem."""

from __future__ import annotations

import logging
import re
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

from taskflow.errors import ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024  # 1 MiB
# Leaves room for the timestamp prefix under the 255-byte filename limit
MAX_SAFE_NAME_LENGTH = 200
URL_PREFIX = "/uploads"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def truncate_name(name: str, limit: int) -> str:
    """Shorten ``name`` to at most ``limit`` characters, keeping a short extension."""
    if len(name) <= limit:
        return name
    stem, dot, ext = name.rpartition(".")
    if stem and dot and len(ext) < limit // 2:
        return f"{stem[: limit - len(ext) - 1]}.{ext}"
    return name[:limit]


class LocalFileStorage:
    """Writes uploads under a single root directory, keyed by stored name."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    def stored_name(self, original: str) -> str:
        """Collision-resistant name: ``<epoch-ms>-<9 random digits>-<original>``."""
        safe = _UNSAFE_CHARS.sub("_", Path(original).name).strip("._") or "file"
        safe = truncate_name(safe, MAX_SAFE_NAME_LENGTH)
        suffix = secrets.randbelow(10**9)
        return f"{int(time.time() * 1000)}-{suffix:09d}-{safe}"

    def url_for(self, stored_name: str) -> str:
        return f"{URL_PREFIX}/{stored_name}"

    def path_for(self, stored_name: str) -> Path | None:
        """Absolute path of a stored file, or None if absent or outside the root."""
        candidate = (self.root / stored_name).resolve()
        if candidate.parent != self.root or not candidate.is_file():
            return None
        return candidate

    async def save(self, upload: UploadFile, stored_name: str, max_bytes: int) -> int:
        """Stream ``upload`` to disk in chunks. Returns the number of bytes written.

        Raises ValidationError (and deletes the partial file) once the stream
        exceeds ``max_bytes``.
        """
        self.ensure_root()
        target = self.root / stored_name
        total = 0
        try:
            with open(target, "wb") as fh:
                while True:
                    chunk = await upload.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    total += len(chunk)
                    if total > max_bytes:
                        raise ValidationError(
                            f"File too large. Maximum size is {max_bytes} bytes"
                        )
                    fh.write(chunk)
        except Exception:
            target.unlink(missing_ok=True)
            raise
        finally:
            await upload.close()
        return total

    def remove(self, stored_name: str) -> None:
        (self.root / stored_name).unlink(missing_ok=True)
