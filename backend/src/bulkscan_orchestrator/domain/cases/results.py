"""Result of an automatic case creation attempt.

CaseCreationResult is a closed set of outcomes. Build instances through the
named constructors only; callers branch on ``result_type``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class CaseCreationResultType(str, Enum):
    CREATED_CASE = "CREATED_CASE"
    CASE_ALREADY_EXISTS = "CASE_ALREADY_EXISTS"
    ABORTED_WITHOUT_FAILURE = "ABORTED_WITHOUT_FAILURE"
    POTENTIALLY_RECOVERABLE_FAILURE = "POTENTIALLY_RECOVERABLE_FAILURE"
    UNRECOVERABLE_FAILURE = "UNRECOVERABLE_FAILURE"


@dataclass(frozen=True)
class CaseCreationResult:
    """Outcome of AutoCaseCreator.create_case().

    Attributes:
        result_type: Which outcome occurred
        case_id: CCD id of the created or already existing case, None otherwise
    """
    result_type: CaseCreationResultType
    case_id: Optional[int] = None

    @classmethod
    def created_case(cls, case_id: int) -> "CaseCreationResult":
        return cls(CaseCreationResultType.CREATED_CASE, case_id)

    @classmethod
    def case_already_exists(cls, case_id: int) -> "CaseCreationResult":
        return cls(CaseCreationResultType.CASE_ALREADY_EXISTS, case_id)

    @classmethod
    def abort_without_failure(cls) -> "CaseCreationResult":
        return cls(CaseCreationResultType.ABORTED_WITHOUT_FAILURE)

    @classmethod
    def potentially_recoverable_failure(cls) -> "CaseCreationResult":
        return cls(CaseCreationResultType.POTENTIALLY_RECOVERABLE_FAILURE)

    @classmethod
    def unrecoverable_failure(cls) -> "CaseCreationResult":
        return cls(CaseCreationResultType.UNRECOVERABLE_FAILURE)

    @property
    def has_case(self) -> bool:
        """True when the envelope is associated with a case in CCD."""
        return self.result_type in (
            CaseCreationResultType.CREATED_CASE,
            CaseCreationResultType.CASE_ALREADY_EXISTS,
        )
