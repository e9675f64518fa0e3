"""
Unit tests for the custom exception hierarchy.

Verifies inheritance chains, attribute assignment, and message formatting
for all exception classes in catalog_hub.core.exceptions.

Version: 1.0.0
"""
import pytest

from catalog_hub.core.exceptions import (
    CatalogHubException,
    CorruptedSnapshotError,
    NonRetryableError,
    PublishFailedError,
    PublishVerificationError,
    RetryableError,
    SnapshotNotFoundError,
    SnapshotValidationError,
    StorageConfigurationError,
    StorageError,
)


pytestmark = pytest.mark.unit


class TestBaseException:
    """Tests for CatalogHubException base class."""

    def test_is_exception(self):
        assert issubclass(CatalogHubException, Exception)

    def test_message_preserved(self):
        assert str(CatalogHubException("something went wrong")) == "something went wrong"


class TestRetryableErrors:

    def test_storage_error_is_retryable(self):
        assert issubclass(StorageError, RetryableError)

    def test_storage_error_attributes(self):
        exc = StorageError("r2", "timeout", key="site-data.json")
        assert exc.backend == "r2"
        assert exc.key == "site-data.json"
        assert str(exc) == "r2 storage error: timeout"


class TestNonRetryableErrors:

    @pytest.mark.parametrize(
        "cls",
        [
            StorageConfigurationError,
            SnapshotValidationError,
            PublishVerificationError,
            SnapshotNotFoundError,
            CorruptedSnapshotError,
            PublishFailedError,
        ],
    )
    def test_inheritance(self, cls):
        assert issubclass(cls, NonRetryableError)
        assert issubclass(cls, CatalogHubException)
        assert not issubclass(cls, RetryableError)

    def test_validation_error_carries_lists(self):
        exc = SnapshotValidationError(["e1", "e2"], ["w1"])
        assert exc.errors == ["e1", "e2"]
        assert exc.warnings == ["w1"]
        assert "2 error(s)" in str(exc)

    def test_validation_error_without_warnings(self):
        assert SnapshotValidationError(["e1"]).warnings == []

    def test_publish_failed_error_attributes(self):
        exc = PublishFailedError("boom", error_type="verification")
        assert exc.error_type == "verification"
        assert exc.result is None
        assert str(exc) == "boom"
