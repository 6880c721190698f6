"""JSON-document implementation of CategoryRepository."""

from __future__ import annotations

from storefront.domain.model.category import Category
from storefront.domain.repository.category_repository import CategoryRepository


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, document: dict) -> None:
        self._rows: list[dict] = document.setdefault("categories", [])

    def next_id(self) -> str:
        if not self._rows:
            return "1"
        return str(max(int(row["id"]) for row in self._rows) + 1)

    def get_by_id(self, category_id: str) -> Category | None:
        for row in self._rows:
            if row["id"] == category_id:
                return self._to_domain(row)
        return None

    def get_by_name(self, name: str) -> Category | None:
        for row in self._rows:
            if row["name"].lower() == name.strip().lower():
                return self._to_domain(row)
        return None

    def list_all(self) -> list[Category]:
        return [self._to_domain(row) for row in self._rows]

    def save(self, category: Category) -> None:
        raw = {
            "id": category.id,
            "name": category.name,
            "description": category.description,
            "active": category.active,
        }
        for i, row in enumerate(self._rows):
            if row["id"] == category.id:
                self._rows[i] = raw
                return
        self._rows.append(raw)

    def delete(self, category_id: str) -> None:
        self._rows[:] = [row for row in self._rows if row["id"] != category_id]

    @staticmethod
    def _to_domain(raw: dict) -> Category:
        return Category(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            active=raw.get("active", True),
        )
