"""Caller identity and the closed set of roles.

Identities are resolved and verified outside this package; the domain only
ever receives an ``Identity`` or ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(Enum):
    ADMIN = "admin"
    SELLER = "seller"
    CUSTOMER = "customer"

    @staticmethod
    def parse(raw: str | None) -> Role | None:
        """Case-insensitive lookup; ``vendor`` is accepted for ``seller``.

        Returns None for anything outside the closed set.
        """
        if not raw:
            return None
        folded = raw.strip().casefold()
        if folded == "vendor":
            return Role.SELLER
        for role in Role:
            if role.value == folded:
                return role
        return None


@dataclass(frozen=True)
class Identity:
    id: str
    role: str
    email: str | None = None

    @property
    def parsed_role(self) -> Role | None:
        return Role.parse(self.role)

    @property
    def is_admin(self) -> bool:
        return self.parsed_role is Role.ADMIN
