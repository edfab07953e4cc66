"""Named failures raised by the CCD application services."""


class CcdCallError(Exception):
    """A CCD call failed for a reason other than the named ones below."""

    def __init__(self, message: str, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class CaseNotFoundError(CcdCallError):
    """CCD answered 404 when retrieving a case."""
    pass


class InvalidCaseIdError(CcdCallError):
    """CCD answered 400 when retrieving a case (malformed case id)."""
    pass


class UnableToAttachDocumentsError(CcdCallError):
    """The attach-documents event could not be started or submitted."""
    pass


class MultipleCasesFoundError(Exception):
    """More than one case matches a key that must identify at most one case.

    This is a data consistency violation and is never resolved automatically.
    """
    pass


class UnknownClassificationError(Exception):
    """Envelope classification outside the supported set. Not retryable."""
    pass
