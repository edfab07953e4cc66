"""Case domain module: CCD case models, creation results and backend port."""

from .models import CaseDataContent, CaseDetails, Event, StartEventResponse
from .results import CaseCreationResult, CaseCreationResultType
from .ports import CaseBackendError, CaseBackendPort

__all__ = [
    "CaseDataContent",
    "CaseDetails",
    "Event",
    "StartEventResponse",
    "CaseCreationResult",
    "CaseCreationResultType",
    "CaseBackendError",
    "CaseBackendPort",
]
