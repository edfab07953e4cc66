"""Scanned documents: deduplication and the CCD scannedDocuments collection.

Two documents are duplicates when their uuid OR their control number matches.
A re-scanned document keeps its control number under a new uuid.
"""

from typing import Any, Iterable, Optional
from urllib.parse import urlparse

from ..domain.cases.models import CaseDetails
from ..domain.envelopes.models import Document
from .dates import format_ccd_datetime, parse_ccd_datetime
from .fields import SCANNED_DOCUMENTS


def are_duplicates(first: Document, second: Document) -> bool:
    return first.uuid == second.uuid or first.control_number == second.control_number


def get_docs_to_add(existing_docs: Iterable[Document], new_docs: Iterable[Document]) -> list[Document]:
    """Return the new documents not already present, preserving their order."""
    existing = list(existing_docs)
    return [
        doc for doc in new_docs
        if not any(are_duplicates(doc, existing_doc) for existing_doc in existing)
    ]


def get_scanned_documents(case_details: Optional[CaseDetails]) -> list[dict[str, Any]]:
    """Raw scannedDocuments collection of a case (empty when absent)."""
    if case_details is None or not case_details.data:
        return []
    return list(case_details.data.get(SCANNED_DOCUMENTS) or [])


def get_documents(case_details: Optional[CaseDetails]) -> list[Document]:
    """Documents on a case, in collection order."""
    return [to_document(element) for element in get_scanned_documents(case_details)]


def to_document(element: dict[str, Any]) -> Document:
    """Convert a scannedDocuments collection element into a Document.

    The uuid is the last path segment of the document URL.
    """
    value = element.get("value") if isinstance(element, dict) else None
    value = value if isinstance(value, dict) else {}
    url = value.get("url") if isinstance(value.get("url"), dict) else {}
    document_url = url.get("document_url") or ""
    return Document(
        uuid=urlparse(document_url).path.rstrip("/").rsplit("/", 1)[-1] if document_url else None,
        control_number=_control_number(element),
        file_name=value.get("fileName"),
        type=value.get("type"),
        subtype=value.get("subtype"),
        scanned_at=parse_ccd_datetime(value.get("scannedDate")),
        delivery_date=parse_ccd_datetime(value.get("deliveryDate")),
    )


def map_documents(
    documents: Iterable[Document],
    document_management_url: str,
    context_path: str,
    delivery_date=None
) -> list[dict[str, Any]]:
    """Build scannedDocuments collection elements for the given documents."""
    return [
        map_document(doc, document_management_url, context_path, delivery_date)
        for doc in documents
    ]


def map_document(
    document: Document,
    document_management_url: str,
    context_path: str,
    delivery_date=None
) -> dict[str, Any]:
    document_url = "/".join(
        part.strip("/") for part in (document_management_url, context_path, document.uuid)
    )
    return {
        "value": {
            "type": document.type,
            "subtype": document.subtype,
            "url": {
                "document_url": document_url,
                "document_binary_url": f"{document_url}/binary",
                "document_filename": document.file_name,
            },
            "controlNumber": document.control_number,
            "fileName": document.file_name,
            "scannedDate": format_ccd_datetime(document.scanned_at),
            "deliveryDate": format_ccd_datetime(document.delivery_date or delivery_date),
        }
    }


def concat_documents(
    new_documents: list[dict[str, Any]],
    existing_documents: list[dict[str, Any]]
) -> list[dict[str, Any]]:
    """Existing collection elements followed by the new ones."""
    return list(existing_documents) + list(new_documents)


def _control_number(element: Any) -> Optional[str]:
    if not isinstance(element, dict):
        return None
    value = element.get("value")
    if not isinstance(value, dict):
        return None
    control_number = value.get("controlNumber")
    return control_number if isinstance(control_number, str) else None
