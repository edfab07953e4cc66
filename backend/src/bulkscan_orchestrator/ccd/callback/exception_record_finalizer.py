"""Final exception record data returned to CCD after a callback."""

from typing import Any

from ..fields import ExceptionRecordFields as Fields, YesNo


class ExceptionRecordFinalizer:

    def finalize_exception_record(self, original_fields: dict[str, Any], case_id: str) -> dict[str, Any]:
        """Link the exception record to the created case and clear its warnings."""
        fields = dict(original_fields)

        fields[Fields.CASE_REFERENCE] = str(case_id)
        fields[Fields.DISPLAY_WARNINGS] = YesNo.NO
        fields[Fields.OCR_DATA_VALIDATION_WARNINGS] = []
        return fields
