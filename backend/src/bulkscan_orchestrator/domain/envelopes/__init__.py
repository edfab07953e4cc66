"""Envelope domain module."""

from .models import (
    Classification,
    Document,
    Envelope,
    EnvelopeCcdAction,
    EnvelopeProcessingResult,
    OcrDataField,
)

__all__ = [
    "Classification",
    "Document",
    "Envelope",
    "EnvelopeCcdAction",
    "EnvelopeProcessingResult",
    "OcrDataField",
]
