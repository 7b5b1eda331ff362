import logging
import re
import secrets
import time

from starlette.concurrency import run_in_threadpool

from onboarding.core.exceptions import UploadRejectedError
from onboarding.core.storage import Storage
from onboarding.schemas.upload_schema import DocumentType

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPE = "application/pdf"

_unsafe_chars = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = _unsafe_chars.sub("_", name).strip("._")
    return name[:120] or "document.pdf"


def build_object_key(document_type: DocumentType, filename: str, now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{document_type.value}-{secrets.token_hex(4)}-{safe_filename(filename)}"


class UploadService:
    """Validates customer documents and relays them to object storage."""

    def __init__(self, storage: Storage, max_bytes: int):
        self.storage = storage
        self.max_bytes = max_bytes

    def validate(self, content_type: str | None, size: int) -> None:
        if (content_type or "").split(";")[0].strip().lower() != ALLOWED_CONTENT_TYPE:
            raise UploadRejectedError("Please select a PDF file", details={"reason": "INVALID_TYPE"})
        if size > self.max_bytes:
            limit_mb = self.max_bytes / (1024 * 1024)
            raise UploadRejectedError(
                f"File size must be less than {limit_mb:g}MB", details={"reason": "TOO_LARGE"}
            )

    async def upload(self, data: bytes, filename: str, content_type: str | None, document_type: DocumentType) -> str:
        self.validate(content_type, len(data))
        key = build_object_key(document_type, filename)
        await run_in_threadpool(self.storage.put_bytes, key, data, content_type=ALLOWED_CONTENT_TYPE)
        url = self.storage.public_url(key)
        logger.info("Stored %s document as %s (%d bytes)", document_type.value, key, len(data))
        return url
