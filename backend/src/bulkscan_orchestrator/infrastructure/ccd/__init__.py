from .http_case_backend import HttpCaseBackend

__all__ = ["HttpCaseBackend"]
