"""
EarthSafe API - File Storage Service

Local file storage for uploaded documents (receipts, licenses, permits).
Files are served back by the /uploads static mount.

Layout: <storage_local_path>/<org_id>/<category>/<year>/<month>/<id>_<name>
"""

import hashlib
import logging
import uuid
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import UploadFile

from app.config import settings
from app.utils.error_handling import BadRequestException, PayloadTooLargeException

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


class FileCategory(str, Enum):
    """File category types."""
    RECEIPT = "receipts"
    COMPLIANCE = "compliance"
    INCIDENT = "incidents"
    OTHER = "other"


class FileStorageService:
    """Stores uploads on the local filesystem and returns their public URL."""

    def __init__(self, base_path: Optional[str] = None):
        self.local_storage_path = Path(base_path or settings.storage_local_path)
        self.local_storage_path.mkdir(parents=True, exist_ok=True)
        self.max_bytes = settings.max_upload_size_bytes

    @staticmethod
    def sanitize_filename(filename: str) -> str:
        """Keep alphanumerics and .-_ only; never returns an empty name."""
        safe = "".join(c if c.isalnum() or c in ".-_" else "_" for c in filename)
        safe = safe.lstrip(".")
        return safe or "upload"

    def _generate_blob_name(
        self,
        org_id: uuid.UUID,
        category: FileCategory,
        original_filename: str,
    ) -> str:
        now = datetime.now(timezone.utc)
        file_id = uuid.uuid4().hex[:12]
        safe_filename = self.sanitize_filename(original_filename)
        return f"{org_id}/{category.value}/{now.year}/{now.month:02d}/{file_id}_{safe_filename}"

    async def read_upload(self, file: UploadFile, chunk_size: int = CHUNK_SIZE) -> bytes:
        """
        Read an incoming upload, stopping as soon as it passes the size limit.

        Raises:
            PayloadTooLargeException: file over max_upload_size_mb
        """
        if file.size is not None and file.size > self.max_bytes:
            raise PayloadTooLargeException(self.max_bytes)

        buffer = bytearray()
        while True:
            chunk = await file.read(chunk_size)
            if not chunk:
                break
            buffer.extend(chunk)
            if len(buffer) > self.max_bytes:
                raise PayloadTooLargeException(self.max_bytes)
        return bytes(buffer)

    async def upload_file(
        self,
        org_id: uuid.UUID,
        file_content: bytes,
        filename: str,
        content_type: Optional[str],
        category: FileCategory = FileCategory.OTHER,
    ) -> Dict[str, Any]:
        """
        Save a file and return its metadata.

        Raises:
            BadRequestException: empty file
            PayloadTooLargeException: file over max_upload_size_mb
        """
        if not file_content:
            raise BadRequestException("Uploaded file is empty")
        if len(file_content) > self.max_bytes:
            raise PayloadTooLargeException(self.max_bytes)

        blob_name = self._generate_blob_name(org_id, category, filename)
        file_path = self.local_storage_path / blob_name
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "wb") as f:
            f.write(file_content)

        url = f"{settings.uploads_url_prefix.rstrip('/')}/{blob_name}"
        logger.info(f"Stored upload {blob_name} ({len(file_content)} bytes)")

        return {
            "file_id": blob_name,
            "url": url,
            "filename": filename,
            "content_type": content_type,
            "size": len(file_content),
            "hash": hashlib.md5(file_content).hexdigest(),
            "category": category.value,
        }

    def delete_file(self, file_id: str) -> bool:
        """Delete a stored file by its blob name. Returns False if absent."""
        file_path = (self.local_storage_path / file_id).resolve()
        if self.local_storage_path.resolve() not in file_path.parents:
            raise BadRequestException("Invalid file path")
        if not file_path.exists():
            return False
        file_path.unlink()
        return True

    def file_id_from_url(self, url: Optional[str]) -> Optional[str]:
        """Map a stored URL back to its blob name, or None for external URLs."""
        prefix = settings.uploads_url_prefix.rstrip("/") + "/"
        if url and url.startswith(prefix):
            return url[len(prefix):]
        return None
