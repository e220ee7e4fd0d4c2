"""Records stored in the Notion expenses database."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

NAME_PROPERTY: Final[str] = "Название"
PRICE_PROPERTY: Final[str] = "Цена"
CATEGORY_PROPERTY: Final[str] = "Категория"
DATE_PROPERTY: Final[str] = "Дата"
COMMENT_PROPERTY: Final[str] = "Комментарий"

NEW_OPTION_COLOR: Final[str] = "black"


@dataclass(slots=True, frozen=True)
class ExpenseRecord:
    """A single expense page as written to Notion."""

    name: str
    price: float
    category: str
    date: str
    comment: str = ""

    def to_properties(self) -> dict[str, Any]:
        """Return the page ``properties`` payload for this record."""

        comment = (
            [{"text": {"content": self.comment}}] if self.comment else []
        )
        return {
            NAME_PROPERTY: {"title": [{"text": {"content": self.name}}]},
            PRICE_PROPERTY: {"number": self.price},
            CATEGORY_PROPERTY: {"multi_select": [{"name": self.category}]},
            DATE_PROPERTY: {"date": {"start": self.date}},
            COMMENT_PROPERTY: {"rich_text": comment},
        }


__all__ = [
    "ExpenseRecord",
    "NAME_PROPERTY",
    "PRICE_PROPERTY",
    "CATEGORY_PROPERTY",
    "DATE_PROPERTY",
    "COMMENT_PROPERTY",
    "NEW_OPTION_COLOR",
]
