from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from onboarding.api.deps import get_upload_service, require_capability
from onboarding.core.exceptions import ValidationError
from onboarding.core.permissions import Capability
from onboarding.schemas.auth_schema import Session
from onboarding.schemas.upload_schema import DocumentType, UploadOut
from onboarding.services.upload_service import UploadService

router = APIRouter(prefix="/api", tags=["upload"])


@router.post("/upload", response_model=UploadOut)
async def upload_document(file: Optional[UploadFile] = File(None),
                          type: Optional[str] = Form(None),
                          _: Session = Depends(require_capability(Capability.MANAGE_CUSTOMERS)),
                          upload_svc: UploadService = Depends(get_upload_service)):
    if file is None or not type:
        raise ValidationError("File and type are required")
    try:
        document_type = DocumentType(type)
    except ValueError:
        raise ValidationError(
            "Invalid document type",
            details={"allowed": [t.value for t in DocumentType]},
        )

    # one byte past the limit is enough to reject an oversized file
    data = await file.read(upload_svc.max_bytes + 1)
    url = await upload_svc.upload(data, file.filename or "", file.content_type, document_type)
    return UploadOut(url=url)
