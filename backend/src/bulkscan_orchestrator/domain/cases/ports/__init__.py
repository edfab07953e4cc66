from .case_backend_port import CaseBackendError, CaseBackendPort

__all__ = ["CaseBackendError", "CaseBackendPort"]
