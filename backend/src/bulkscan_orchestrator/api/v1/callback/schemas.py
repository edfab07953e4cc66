"""Callback API schemas - request/response bodies of CCD callbacks."""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from ....domain.callbacks.models import CcdCallbackRequest
from ....domain.cases.models import CaseDetails


class CaseDetailsSchema(BaseModel):
    """Case details as sent by CCD (case data under "case_data")."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    jurisdiction: Optional[str] = None
    case_type_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("case_type_id", "case_type"))
    state: Optional[str] = None
    data: dict[str, Any] = Field(default_factory=dict, validation_alias=AliasChoices("case_data", "data"))


class CcdCallbackRequestSchema(BaseModel):
    """Body of a CCD about-to-submit callback.

    Attributes:
        event_id: Event the caseworker triggered
        case_details: Exception record the event runs on
        ignore_warning: Caseworker chose to proceed despite warnings
    """
    model_config = ConfigDict(extra="ignore")

    event_id: str
    case_details: Optional[CaseDetailsSchema] = None
    ignore_warning: bool = False

    def to_domain(self) -> CcdCallbackRequest:
        details = self.case_details
        return CcdCallbackRequest(
            event_id=self.event_id,
            case_details=CaseDetails(
                id=details.id,
                jurisdiction=details.jurisdiction,
                case_type_id=details.case_type_id,
                state=details.state,
                data=dict(details.data),
            ) if details is not None else None,
            ignore_warnings=self.ignore_warning,
        )


class CallbackResponse(BaseModel):
    """Callback response: data to persist, or warnings/errors to show."""
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
