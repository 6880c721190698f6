"""Category aggregate.

Categories group products. Names are unique, compared case-insensitively.
``active`` is an admin-controlled display flag; products keep their
category whichever way it is set.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError


@dataclass
class Category:

    id: str
    name: str
    description: str = ""
    active: bool = True

    @staticmethod
    def create(category_id: str, name: str, description: str = "") -> Category:
        return Category(
            id=category_id,
            name=_clean_name(name),
            description=(description or "").strip(),
        )

    def rename(self, name: str) -> None:
        self.name = _clean_name(name)

    def describe(self, description: str) -> None:
        self.description = description.strip()

    def set_active(self, active: bool) -> None:
        self.active = active


def _clean_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Category name is required")
    return name.strip()
