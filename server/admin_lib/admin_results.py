"""
Result types for account lookups.

A lookup either finds the account, reports that it does not exist, or
carries the backend failure so callers branch on data instead of
inspecting exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class LookupStatus(Enum):
    """Outcome of resolving an email to an account"""
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


class AccountNotFoundError(LookupError):
    """No Firebase Auth account exists for the given email."""

    def __init__(self, email):
        super().__init__(f"No account found for {email}")
        self.email = email


@dataclass
class LookupResult:
    """Result of a single get-user-by-email round trip."""
    status: LookupStatus
    email: str
    record: Optional[Any] = None        # firebase_admin.auth.UserRecord when FOUND
    error: Optional[Exception] = None   # backend error when FAILED

    @classmethod
    def found(cls, email, record):
        return cls(LookupStatus.FOUND, email, record=record)

    @classmethod
    def not_found(cls, email):
        return cls(LookupStatus.NOT_FOUND, email)

    @classmethod
    def failed(cls, email, error):
        return cls(LookupStatus.FAILED, email, error=error)

    @property
    def is_found(self):
        return self.status is LookupStatus.FOUND

    def unwrap(self):
        """Return the record, or raise for NOT_FOUND / FAILED."""
        if self.status is LookupStatus.FOUND:
            return self.record
        if self.status is LookupStatus.NOT_FOUND:
            raise AccountNotFoundError(self.email)
        raise self.error
