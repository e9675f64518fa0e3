"""
Custom exception hierarchy for Catalog Hub.

Exceptions are categorized as:
- RetryableError: Transient storage faults where a second attempt may succeed
- NonRetryableError: Permanent errors (configuration, bad data, corruption)

Services convert these into structured results at their boundary; routes
map whatever reaches them onto HTTP status codes.
Version: 1.0.0
"""
from typing import List, Optional


class CatalogHubException(Exception):
    """Base exception for Catalog Hub."""
    pass


# ============================================
# RETRYABLE ERRORS
# ============================================
class RetryableError(CatalogHubException):
    """
    Base class for errors where retrying might succeed.

    - Network timeouts talking to the storage backend
    - Temporary backend unavailability
    """
    pass


class StorageError(RetryableError):
    """Object or key-value storage call failed."""
    def __init__(self, backend: str, message: str, key: Optional[str] = None):
        self.backend = backend
        self.key = key
        super().__init__(f"{backend} storage error: {message}")


# ============================================
# NON-RETRYABLE ERRORS
# ============================================
class NonRetryableError(CatalogHubException):
    """
    Base class for errors that should NOT be retried.

    - Missing storage binding (needs configuration fix)
    - Hard validation failures
    - Corrupted published data
    """
    pass


class StorageConfigurationError(NonRetryableError):
    """
    Storage binding is not configured.

    Always surfaced distinctly, never treated as "no data".
    """
    pass


class SnapshotValidationError(NonRetryableError):
    """Candidate snapshot has hard validation errors."""
    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None):
        self.errors = list(errors)
        self.warnings = list(warnings or [])
        super().__init__(
            f"Snapshot validation failed with {len(self.errors)} error(s)"
        )


class PublishVerificationError(NonRetryableError):
    """Write reported success but the read-back did not confirm it."""
    pass


class SnapshotNotFoundError(NonRetryableError):
    """Nothing has been published under the snapshot key."""
    pass


class CorruptedSnapshotError(NonRetryableError):
    """Published object exists but is not valid JSON."""
    pass


class PublishFailedError(NonRetryableError):
    """A publish attempt ended without a verified snapshot."""
    def __init__(self, message: str, error_type: Optional[str] = None, result=None):
        self.error_type = error_type
        self.result = result
        super().__init__(message)
