"""Maps domain error kinds onto CLI exit codes."""

from __future__ import annotations

import click

from storefront.domain.exceptions import DomainException, ErrorKind

EXIT_CODES: dict[ErrorKind, int] = {
    ErrorKind.UNAUTHENTICATED: 3,
    ErrorKind.FORBIDDEN: 4,
    ErrorKind.NOT_FOUND: 5,
    ErrorKind.VALIDATION: 6,
    ErrorKind.EMPTY_ORDER: 7,
    ErrorKind.DUPLICATE_PRODUCT: 8,
    ErrorKind.INVALID_QUANTITY: 9,
    ErrorKind.INSUFFICIENT_STOCK: 10,
    ErrorKind.INVALID_TRANSITION: 11,
    ErrorKind.WRITE_ERROR: 12,
}


class DomainCommandError(click.ClickException):
    """A ClickException that remembers which domain failure caused it."""

    def __init__(self, exc: DomainException) -> None:
        super().__init__(f"[{exc.kind.value}] {exc}")
        self.kind = exc.kind
        self.exit_code = EXIT_CODES[exc.kind]
