"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each class carries an ``ErrorCode`` that outer layers map to a response.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CURRENCY = "INVALID_CURRENCY"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_ALREADY_EXISTS = "RESOURCE_ALREADY_EXISTS"
    RESOURCE_INACTIVE = "RESOURCE_INACTIVE"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INSUFFICIENT_INVENTORY = "INSUFFICIENT_INVENTORY"
    OPERATION_NOT_ALLOWED = "OPERATION_NOT_ALLOWED"
    BUSINESS_ERROR = "BUSINESS_ERROR"


class DomainException(Exception):
    """Base class for all domain errors."""

    code: ErrorCode = ErrorCode.BUSINESS_ERROR


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = ErrorCode.VALIDATION_ERROR


class InvalidAmountError(ValidationError):
    """A monetary argument is missing, zero where positive is required, or negative."""


class InvalidCurrencyError(InvalidAmountError):
    """A currency code is not one of the supported ISO-4217 codes."""

    code = ErrorCode.INVALID_CURRENCY


class InvalidQuantityError(ValidationError):
    """A stock or order quantity is not a positive integer."""


class CurrencyMismatchError(ValidationError):
    """Two Money values of different currencies were combined."""


class NegativeResultError(ValidationError):
    """A subtraction would produce a negative Money value."""


class InsufficientFundsError(DomainException):
    """A deduction or withdrawal exceeds the available balance."""

    code = ErrorCode.INSUFFICIENT_FUNDS


class InsufficientInventoryError(DomainException):
    """A stock reduction exceeds the available stock."""

    code = ErrorCode.INSUFFICIENT_INVENTORY


class InvalidStateError(DomainException):
    """An order transition was attempted from a status that forbids it."""

    code = ErrorCode.OPERATION_NOT_ALLOWED


class ResourceInactiveError(DomainException):
    """A mutating operation was attempted on a deactivated aggregate."""

    code = ErrorCode.RESOURCE_INACTIVE


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = ErrorCode.RESOURCE_NOT_FOUND


class DuplicateEntityError(DomainException):
    """An entity with the same natural key already exists."""

    code = ErrorCode.RESOURCE_ALREADY_EXISTS
