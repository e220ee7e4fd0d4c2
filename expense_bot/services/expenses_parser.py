"""Utilities for parsing expense input messages."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

DATE_PATTERN = re.compile(r"[0-9]{1,2}\.[0-9]{1,2}\.[0-9]{4}")
PRICE_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

FORMAT_HINT = (
    "📌 Отправьте данные в формате:\n\n"
    "Название товара/услуги\n"
    "Цена (например: 150,3 или 150.3)\n"
    "Дата в формате dd.mm.yyyy (опционально)\n"
    "Комментарий (опционально)\n\n"
    "Пример:\n"
    "Кофта красная\n"
    "150,3\n"
    "21.09.2025\n"
    "Купил на распродаже"
)
INVALID_PRICE_TEXT = "❌ Неправильный формат цены. Используйте цифры и точку/запятую."


class ExpenseParseError(ValueError):
    """Raised when a message cannot be turned into an expense draft."""


class InsufficientFieldsError(ExpenseParseError):
    """The message has fewer than two lines."""

    def __init__(self, lines_count: int) -> None:
        super().__init__(FORMAT_HINT)
        self.lines_count = lines_count


class InvalidPriceError(ExpenseParseError):
    """The second line is not a number."""

    def __init__(self, raw_price: str) -> None:
        super().__init__(INVALID_PRICE_TEXT)
        self.raw_price = raw_price


@dataclass(slots=True, frozen=True)
class ExpenseDraft:
    """Parsed expense awaiting a category.

    An empty ``date`` means the expense happened today.
    """

    name: str
    price: float
    date: str = ""
    comment: str = ""


def parse_price(value: str) -> float:
    """Return the number at the start of a price line.

    The first comma counts as the decimal point and trailing text such as
    ``руб`` is ignored.
    """

    match = PRICE_PATTERN.match(value.strip().replace(",", ".", 1))
    if match is None:
        raise InvalidPriceError(value)
    price = float(match.group(0))
    if not math.isfinite(price):
        raise InvalidPriceError(value)
    return price


def parse_expense_text(text: str) -> ExpenseDraft:
    """Parse a multi-line message into an :class:`ExpenseDraft`.

    The first line is the name and the second the price. A third line in
    ``dd.mm.yyyy`` form is the date; every remaining line belongs to the
    comment.

    Raises
    ------
    InsufficientFieldsError
        When the message has fewer than two lines.
    InvalidPriceError
        When the second line is not a number.
    """

    lines = [line.strip() for line in (text or "").strip().split("\n")]
    if len(lines) < 2:
        raise InsufficientFieldsError(len(lines))

    name = lines[0]
    price = parse_price(lines[1])

    date = ""
    rest = lines[2:]
    if rest and DATE_PATTERN.fullmatch(rest[0]):
        date = rest[0]
        rest = rest[1:]

    return ExpenseDraft(name=name, price=price, date=date, comment="\n".join(rest))


__all__ = [
    "ExpenseDraft",
    "ExpenseParseError",
    "InsufficientFieldsError",
    "InvalidPriceError",
    "FORMAT_HINT",
    "INVALID_PRICE_TEXT",
    "parse_expense_text",
    "parse_price",
]
