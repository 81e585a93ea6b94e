# catalog_admin/database/exceptions.py
from typing import Optional


class StoreError(Exception):
    """Failure reported by the remote store (network, constraint, permission)"""

    def __init__(self, message: str, code: Optional[str] = None,
                 details: Optional[str] = None, hint: Optional[str] = None,
                 status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.hint = hint
        self.status = status

    def __str__(self) -> str:
        return self.message


class NotFoundError(StoreError):
    """Zero or several rows matched where exactly one was expected"""


class UploadError(StoreError):
    """Blob upload failed"""


class ValidationError(ValueError):
    """Form data rejected before reaching the store"""
