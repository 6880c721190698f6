"""Domain-level exceptions.

Every failure is a subclass of DomainException carrying a machine-readable
``kind`` so the transport layer (the CLI here) can catch them uniformly and
map each kind to its own exit code and message.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION = "VALIDATION"
    EMPTY_ORDER = "EMPTY_ORDER"
    DUPLICATE_PRODUCT = "DUPLICATE_PRODUCT"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INVALID_TRANSITION = "INVALID_TRANSITION"
    WRITE_ERROR = "WRITE_ERROR"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION


# --- Access control -----------------------------------------------------------


class AuthError(DomainException):
    """The caller may not perform the requested action."""


class Unauthenticated(AuthError):
    kind = ErrorKind.UNAUTHENTICATED


class Forbidden(AuthError):
    kind = ErrorKind.FORBIDDEN


# --- Lookup -------------------------------------------------------------------


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class ProductNotFound(EntityNotFoundError):
    """A product id did not resolve to an existing, active product."""


# --- Business rules -----------------------------------------------------------


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    kind = ErrorKind.VALIDATION


class EmptyOrder(ValidationError):
    kind = ErrorKind.EMPTY_ORDER


class DuplicateProduct(ValidationError):
    kind = ErrorKind.DUPLICATE_PRODUCT


class InvalidQuantity(ValidationError):
    kind = ErrorKind.INVALID_QUANTITY


class InsufficientStock(ValidationError):
    kind = ErrorKind.INSUFFICIENT_STOCK


class InvalidTransition(ValidationError):
    kind = ErrorKind.INVALID_TRANSITION


# --- Storage ------------------------------------------------------------------


class WriteError(DomainException):
    """The storage layer failed while an atomic write was in progress."""

    kind = ErrorKind.WRITE_ERROR
