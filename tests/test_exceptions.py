"""Tests for custom exception hierarchy."""

from loan_tracker.exceptions import (
    ConfigurationError,
    EntityNotFoundError,
    InvalidEntityStateError,
    LoanTrackerError,
    StorageError,
)


class TestExceptionHierarchy:
    """Test exception inheritance chain."""

    def test_loan_tracker_error_is_exception(self) -> None:
        assert isinstance(LoanTrackerError("test"), Exception)

    def test_entity_not_found_is_loan_tracker_error(self) -> None:
        assert isinstance(EntityNotFoundError("test"), LoanTrackerError)

    def test_invalid_entity_state_is_loan_tracker_error(self) -> None:
        assert isinstance(InvalidEntityStateError("test"), LoanTrackerError)

    def test_configuration_error_is_loan_tracker_error(self) -> None:
        assert isinstance(ConfigurationError("test"), LoanTrackerError)

    def test_storage_error_is_loan_tracker_error(self) -> None:
        assert isinstance(StorageError("test"), LoanTrackerError)

    def test_exception_message(self) -> None:
        err = EntityNotFoundError("Loan loan-001 not found")
        assert str(err) == "Loan loan-001 not found"
