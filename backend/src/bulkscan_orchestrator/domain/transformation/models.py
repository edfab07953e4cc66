"""Transformation service request/response schemas.

Responses are validated with pydantic: a structurally invalid response is a
TransformationResponseInvalidError, never a partially filled model.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class DocumentUrl(BaseModel):
    document_url: str
    document_binary_url: str
    document_filename: Optional[str] = None


class TransformationDocument(BaseModel):
    """Scanned document as sent to the transformation service."""
    type: Optional[str] = None
    subtype: Optional[str] = None
    url: Optional[DocumentUrl] = None
    control_number: Optional[str] = None
    file_name: Optional[str] = None
    scanned_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None


class OcrField(BaseModel):
    name: str
    value: Optional[str] = None


class TransformationRequest(BaseModel):
    """Body of the transformation call (envelope or exception record)."""
    exception_record_id: Optional[str] = None
    exception_record_case_type_id: Optional[str] = None
    envelope_id: Optional[str] = None
    is_automated_process: bool = False
    po_box: Optional[str] = None
    po_box_jurisdiction: Optional[str] = None
    journey_classification: str
    form_type: Optional[str] = None
    delivery_date: Optional[datetime] = None
    opening_date: Optional[datetime] = None
    scanned_documents: list[TransformationDocument] = Field(default_factory=list)
    ocr_data_fields: list[OcrField] = Field(default_factory=list)


class CaseCreationDetails(BaseModel):
    model_config = ConfigDict(extra="ignore")

    case_type_id: str = Field(..., min_length=1)
    event_id: str = Field(..., min_length=1)
    case_data: dict[str, Any]


class SuccessfulTransformationResponse(BaseModel):
    """Successful response of the transformation service."""
    model_config = ConfigDict(extra="ignore")

    case_creation_details: CaseCreationDetails
    warnings: list[str] = Field(default_factory=list)


class ClientServiceErrorResponse(BaseModel):
    """Body of a 400/422 response from the transformation service."""
    model_config = ConfigDict(extra="ignore")

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
