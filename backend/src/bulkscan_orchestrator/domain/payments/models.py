"""Payment commands sent to the payments service."""

from dataclasses import dataclass, asdict
from typing import Any


@dataclass(frozen=True)
class CreatePaymentsCommand:
    """Register payments found in an envelope against a CCD case or exception record."""
    envelope_id: str
    ccd_reference: str
    jurisdiction: str
    service: str
    po_box: str
    is_exception_record: bool
    payments: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["payments"] = [{"document_control_number": dcn} for dcn in self.payments]
        return data


@dataclass(frozen=True)
class UpdatePaymentsCommand:
    """Move payments from an exception record to the case created from it."""
    exception_record_ref: str
    new_case_ref: str
    envelope_id: str
    jurisdiction: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
