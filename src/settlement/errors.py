"""Error taxonomy and response conventions for the settlement core.

Internal components (registry, engine, ledger) raise typed exceptions
derived from SettlementError. The public surface (RoyaltySettlement)
catches them and returns explicit error responses, so callers never see
an uncaught fault.

Every response carries a category and a retriable flag. Validation,
permission and resource errors mean "fix the request"; execution errors
from the value-transfer collaborator are retriable.

Usage:
    from src.settlement.errors import resource_error, ErrorCode

    return resource_error(
        f"Artifact {artifact_id} not found",
        code=ErrorCode.NOT_FOUND,
        artifact_id=artifact_id,
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error classification.

    - VALIDATION: Caller provided bad input
    - PERMISSION: Caller not authorized
    - RESOURCE: Not found, already exists, nothing to withdraw
    - EXECUTION: A collaborator failed while running the operation
    - SYSTEM: Internal errors
    """

    VALIDATION = "validation"
    PERMISSION = "permission"
    RESOURCE = "resource"
    EXECUTION = "execution"
    SYSTEM = "system"


class ErrorCode(str, Enum):
    """Specific error codes for programmatic handling."""

    # Validation errors
    INVALID_SHARE_SUM = "invalid_share_sum"
    INVALID_CONTRIBUTOR_COUNT = "invalid_contributor_count"
    INVALID_CONTRIBUTOR = "invalid_contributor"
    INVALID_ARGUMENT = "invalid_argument"

    # Permission errors
    NOT_AUTHORIZED = "not_authorized"

    # Resource errors
    DUPLICATE_ARTIFACT = "duplicate_artifact"
    NOT_FOUND = "not_found"
    NO_BALANCE = "no_balance"

    # Execution errors
    TRANSFER_FAILURE = "transfer_failure"

    # System errors
    INTERNAL_ERROR = "internal_error"


# =============================================================================
# EXCEPTIONS
# =============================================================================


class SettlementError(Exception):
    """Base class for failures raised inside the settlement core."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    category: ErrorCategory = ErrorCategory.SYSTEM
    retriable: bool = False

    def __init__(self, message: str, **details: object) -> None:
        self.message = message
        self.details = details
        super().__init__(message)


class InvalidShareSumError(SettlementError):
    """Raised when contributor shares do not sum to exactly 100."""

    code = ErrorCode.INVALID_SHARE_SUM
    category = ErrorCategory.VALIDATION

    def __init__(self, total: int, expected: int) -> None:
        self.total = total
        self.expected = expected
        super().__init__(
            f"Contributor shares sum to {total}, expected exactly {expected}",
            total=total,
            expected=expected,
        )


class InvalidContributorCountError(SettlementError):
    """Raised when the contributor list is empty or longer than allowed."""

    code = ErrorCode.INVALID_CONTRIBUTOR_COUNT
    category = ErrorCategory.VALIDATION

    def __init__(self, count: int, maximum: int) -> None:
        self.count = count
        self.maximum = maximum
        super().__init__(
            f"Expected between 1 and {maximum} contributors, got {count}",
            count=count,
            maximum=maximum,
        )


class InvalidContributorError(SettlementError):
    """Raised for a malformed contributor entry or request argument."""

    code = ErrorCode.INVALID_CONTRIBUTOR
    category = ErrorCategory.VALIDATION


class InvalidArgumentError(SettlementError):
    """Raised for malformed operation arguments (e.g. negative price)."""

    code = ErrorCode.INVALID_ARGUMENT
    category = ErrorCategory.VALIDATION


class DuplicateArtifactError(SettlementError):
    """Raised when an artifact ID is already registered."""

    code = ErrorCode.DUPLICATE_ARTIFACT
    category = ErrorCategory.RESOURCE

    def __init__(self, artifact_id: str) -> None:
        self.artifact_id = artifact_id
        super().__init__(
            f"Artifact '{artifact_id}' already registered",
            artifact_id=artifact_id,
        )


class ArtifactNotFoundError(SettlementError):
    """Raised when an artifact ID does not resolve to a record."""

    code = ErrorCode.NOT_FOUND
    category = ErrorCategory.RESOURCE

    def __init__(self, artifact_id: str) -> None:
        self.artifact_id = artifact_id
        super().__init__(
            f"Artifact '{artifact_id}' not found",
            artifact_id=artifact_id,
        )


class NotAuthorizedError(SettlementError):
    """Raised when the caller does not own the artifact token."""

    code = ErrorCode.NOT_AUTHORIZED
    category = ErrorCategory.PERMISSION

    def __init__(self, caller_id: str, artifact_id: str) -> None:
        self.caller_id = caller_id
        self.artifact_id = artifact_id
        super().__init__(
            f"'{caller_id}' is not the owner of artifact '{artifact_id}'",
            caller_id=caller_id,
            artifact_id=artifact_id,
        )


class TransferFailureError(SettlementError):
    """Raised when an external value transfer fails mid-operation."""

    code = ErrorCode.TRANSFER_FAILURE
    category = ErrorCategory.EXECUTION
    retriable = True


class NoBalanceError(SettlementError):
    """Raised when a contributor has nothing to withdraw."""

    code = ErrorCode.NO_BALANCE
    category = ErrorCategory.RESOURCE

    def __init__(self, contributor: str) -> None:
        self.contributor = contributor
        super().__init__(
            f"No royalty balance for '{contributor}'",
            contributor=contributor,
        )


class TransferError(Exception):
    """Raised by a value-transfer collaborator when a transfer fails."""

    def __init__(self, message: str, amount: int, sender: str, recipient: str) -> None:
        self.amount = amount
        self.sender = sender
        self.recipient = recipient
        super().__init__(message)


# =============================================================================
# RESPONSES
# =============================================================================


@dataclass
class ErrorResponse:
    """Standardized error response.

    All error responses include:
    - success: Always False
    - error: Human-readable message
    - code: Machine-readable error code
    - category: Error category (validation, permission, etc.)
    - retriable: Whether the operation should be retried
    - details: Optional additional context
    """

    success: bool = False
    error: str = ""
    code: str = ""
    category: str = ""
    retriable: bool = False
    details: dict[str, object] | None = None

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        result: dict[str, object] = {
            "success": self.success,
            "error": self.error,
            "code": self.code,
            "category": self.category,
            "retriable": self.retriable,
        }
        if self.details:
            result["details"] = self.details
        return result


def _response(
    message: str,
    code: ErrorCode,
    category: ErrorCategory,
    retriable: bool,
    details: dict[str, object],
) -> dict[str, object]:
    return ErrorResponse(
        error=message,
        code=code.value,
        category=category.value,
        retriable=retriable,
        details=details or None,
    ).to_dict()


def validation_error(
    message: str,
    code: ErrorCode = ErrorCode.INVALID_ARGUMENT,
    **details: object,
) -> dict[str, object]:
    """Create a validation error response (caller provided invalid input)."""
    return _response(message, code, ErrorCategory.VALIDATION, False, details)


def permission_error(
    message: str,
    code: ErrorCode = ErrorCode.NOT_AUTHORIZED,
    **details: object,
) -> dict[str, object]:
    """Create a permission error response."""
    return _response(message, code, ErrorCategory.PERMISSION, False, details)


def resource_error(
    message: str,
    code: ErrorCode = ErrorCode.NOT_FOUND,
    **details: object,
) -> dict[str, object]:
    """Create a resource error response (not found, duplicate, no balance)."""
    return _response(message, code, ErrorCategory.RESOURCE, False, details)


def execution_error(
    message: str,
    code: ErrorCode = ErrorCode.TRANSFER_FAILURE,
    retriable: bool = True,
    **details: object,
) -> dict[str, object]:
    """Create an execution error response.

    Transfer failures default to retriable: the caller may try again
    once the value-transfer collaborator recovers.
    """
    return _response(message, code, ErrorCategory.EXECUTION, retriable, details)


def system_error(
    message: str,
    code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    retriable: bool = True,
    **details: object,
) -> dict[str, object]:
    """Create a system error response."""
    return _response(message, code, ErrorCategory.SYSTEM, retriable, details)


_FACTORIES = {
    ErrorCategory.VALIDATION: validation_error,
    ErrorCategory.PERMISSION: permission_error,
    ErrorCategory.RESOURCE: resource_error,
}


def error_response(exc: SettlementError) -> dict[str, object]:
    """Convert a raised SettlementError into its error response."""
    if exc.category is ErrorCategory.EXECUTION:
        return execution_error(exc.message, exc.code, exc.retriable, **exc.details)
    if exc.category is ErrorCategory.SYSTEM:
        return system_error(exc.message, exc.code, exc.retriable, **exc.details)
    return _FACTORIES[exc.category](exc.message, exc.code, **exc.details)
