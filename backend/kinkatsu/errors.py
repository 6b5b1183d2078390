from __future__ import annotations
from enum import Enum


class ErrorCode(str, Enum):
    AUTHENTICATION_REQUIRED = "authentication_required"
    VALIDATION_FAILED = "validation_failed"
    DUPLICATE_NAME = "duplicate_name"
    STORE_ERROR = "store_error"
    UNKNOWN = "unknown"


class StoreError(Exception):
    """The database rejected or failed an operation; the transaction was rolled back."""


class DuplicateNameError(Exception):
    def __init__(self, name: str):
        super().__init__(f"exercise name already exists: {name}")
        self.name = name
