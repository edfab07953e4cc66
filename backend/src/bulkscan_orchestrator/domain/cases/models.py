"""CCD case models used by the two-phase write protocol.

Case data is an open key/value document. Only a handful of keys are read or
written structurally by the orchestrator (see ccd.fields).
"""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class CaseDetails:
    """Snapshot of a case as returned by CCD."""
    id: Optional[int] = None
    jurisdiction: Optional[str] = None
    case_type_id: Optional[str] = None
    state: Optional[str] = None
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "CaseDetails":
        """Build from a CCD JSON response body."""
        raw_id = payload.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            jurisdiction=payload.get("jurisdiction"),
            case_type_id=payload.get("case_type_id") or payload.get("case_type"),
            state=payload.get("state"),
            data=dict(payload.get("case_data") or payload.get("data") or {}),
        )


@dataclass(frozen=True)
class StartEventResponse:
    """Result of a start-event call.

    Attributes:
        token: Single-use event token, must be sent back with the submit call
        event_id: Event that was started
        case_details: Current snapshot of the case (empty for case creation)
    """
    token: str
    event_id: str
    case_details: Optional[CaseDetails] = None

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> "StartEventResponse":
        details = payload.get("case_details")
        return cls(
            token=payload["token"],
            event_id=payload["event_id"],
            case_details=CaseDetails.from_dict(details) if details else None,
        )


@dataclass(frozen=True)
class Event:
    id: str
    summary: Optional[str] = None
    description: Optional[str] = None


@dataclass
class CaseDataContent:
    """Payload of a submit-event call."""
    data: dict[str, Any]
    event: Event
    event_token: str
    ignore_warning: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "data": self.data,
            "event": {
                "id": self.event.id,
                "summary": self.event.summary,
                "description": self.event.description,
            },
            "event_token": self.event_token,
            "ignore_warning": self.ignore_warning,
        }
