import enum

from onboarding.schemas.base import CamelModel


class DocumentType(str, enum.Enum):
    NATIONAL_ID = "nationalid"
    AGREEMENT = "agreement"
    BUSINESS_LICENSE = "business-license"


class UploadOut(CamelModel):
    success: bool = True
    url: str
    message: str = "File uploaded successfully"
