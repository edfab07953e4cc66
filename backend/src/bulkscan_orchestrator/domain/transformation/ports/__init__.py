from .transformation_port import (
    InvalidCaseDataError,
    TransformationClientError,
    TransformationError,
    TransformationPort,
    TransformationResponseInvalidError,
)

__all__ = [
    "InvalidCaseDataError",
    "TransformationClientError",
    "TransformationError",
    "TransformationPort",
    "TransformationResponseInvalidError",
]
