"""
Resume upload validation.

Accepted formats: PDF (.pdf), Word (.doc, .docx). Max file size: 5MB.
Files are only inspected for metadata; contents are never parsed or stored.
"""
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import UploadFile

from resume_scanner.core.config import settings
from resume_scanner.core.exceptions import UploadRejectedError

INVALID_TYPE_MESSAGE = "Please upload a PDF or DOC/DOCX file"
TOO_LARGE_MESSAGE = "File size should be less than 5MB"


def validate_upload(filename: str, content_type: str, size: int) -> None:
    if not filename:
        raise UploadRejectedError("No resume file provided")
    if content_type not in settings.uploads.allowed_content_types:
        raise UploadRejectedError(INVALID_TYPE_MESSAGE)
    if size > settings.uploads.max_bytes:
        raise UploadRejectedError(TOO_LARGE_MESSAGE)


async def read_resume_upload(file: UploadFile) -> Dict[str, Any]:
    """
    Validate an uploaded resume and return its metadata.

    Raises:
        UploadRejectedError on a missing file, disallowed type or oversize file
    """
    content_type = (file.content_type or "").split(";")[0].strip().lower()
    # Read one byte past the limit so oversize files are caught without buffering them whole
    content = await file.read(settings.uploads.max_bytes + 1)
    validate_upload(file.filename or "", content_type, len(content))

    return {
        "fileName": file.filename,
        "fileSize": len(content),
        "contentType": content_type,
        "uploadedAt": datetime.now(timezone.utc).isoformat(),
    }
