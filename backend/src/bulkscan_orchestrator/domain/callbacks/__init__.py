"""Callback domain module."""

from .models import (
    CallbackException,
    CcdCallbackRequest,
    CreateCaseResult,
    ExceptionRecord,
    ProcessResult,
)

__all__ = [
    "CallbackException",
    "CcdCallbackRequest",
    "CreateCaseResult",
    "ExceptionRecord",
    "ProcessResult",
]
